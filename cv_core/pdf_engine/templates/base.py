"""
Page and typography specifications for CV rendering with ReportLab.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from reportlab.lib.colors import Color, HexColor, black
from reportlab.lib.pagesizes import A4


# Logical font names resolved by the FontProvider
BODY_REGULAR = "body-regular"
BODY_BOLD = "body-bold"
BODY_ITALIC = "body-italic"

LOGICAL_FONTS = (BODY_REGULAR, BODY_BOLD, BODY_ITALIC)


@dataclass(frozen=True)
class PageSpec:
    """Page layout specification (points, top-down cursor coordinates)"""
    width: float
    height: float
    top_margin: float
    right_margin: float
    bottom_margin: float
    left_margin: float

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def margins(self) -> Tuple[float, float, float, float]:
        """(top, right, bottom, left)"""
        return (self.top_margin, self.right_margin, self.bottom_margin, self.left_margin)

    @property
    def content_width(self) -> float:
        return self.width - self.left_margin - self.right_margin

    @property
    def right_edge(self) -> float:
        return self.width - self.right_margin

    @property
    def bottom_limit(self) -> float:
        """Lowest cursor position content may reach"""
        return self.height - self.bottom_margin

    @property
    def usable_height(self) -> float:
        return self.bottom_limit - self.top_margin

    @classmethod
    def a4(cls, margins: Optional[Tuple[float, float, float, float]] = None) -> "PageSpec":
        """Standard A4 (210 x 297 mm), 50pt margins unless given"""
        m = margins or (50, 50, 50, 50)
        return cls(
            width=A4[0], height=A4[1],
            top_margin=m[0], right_margin=m[1],
            bottom_margin=m[2], left_margin=m[3]
        )


@dataclass(frozen=True)
class FontSpec:
    """Text style: logical font, size and colour"""
    font: str = BODY_REGULAR
    size: float = 10
    color: Color = field(default_factory=lambda: black)
    line_gap: float = 0


@dataclass(frozen=True)
class LayoutConstants:
    """Fixed spacing and grid constants shared by every template style"""
    section_header_gap: float = 20
    section_gap: float = 15
    header_rule_offset: float = 15
    item_gap: float = 20
    education_gap: float = 10
    compact_item_gap: float = 10
    row_gap: float = 3
    skill_columns: int = 3
    skill_row_height: float = 18
    category_value_offset: float = 70
    language_row_height: float = 18
    right_column_gap: float = 10
    bullet: str = "•"


@dataclass(frozen=True)
class TypographySpec:
    """Text styles for each document role"""
    name: FontSpec = FontSpec(BODY_BOLD, 18)
    job_title: FontSpec = FontSpec(BODY_ITALIC, 11)
    contact: FontSpec = FontSpec(BODY_REGULAR, 10)
    section_header: FontSpec = FontSpec(BODY_BOLD, 12)
    item_title: FontSpec = FontSpec(BODY_BOLD, 11)
    item_meta: FontSpec = FontSpec(BODY_REGULAR, 10)
    date: FontSpec = FontSpec(BODY_REGULAR, 10, HexColor("#666666"))
    body: FontSpec = FontSpec(BODY_REGULAR, 10, line_gap=2)
    tags: FontSpec = FontSpec(BODY_ITALIC, 10)
    label: FontSpec = FontSpec(BODY_BOLD, 10)

    rule_color: Color = field(default_factory=lambda: black)
    rule_width: float = 0.75
    contact_separator: str = " – "


@dataclass(frozen=True)
class LetterTypography:
    """Text styles and spacing for cover letters"""
    title: FontSpec = FontSpec(BODY_BOLD, 16)
    date: FontSpec = FontSpec(BODY_REGULAR, 10)
    body: FontSpec = FontSpec(BODY_REGULAR, 11, line_gap=2)
    closing: FontSpec = FontSpec(BODY_REGULAR, 11, line_gap=1)

    title_gap: float = 20
    date_gap: float = 18
    paragraph_gap: float = 15
    closing_gap: float = 30
    closing_line_gap: float = 3
    closing_blank_line: float = 7
