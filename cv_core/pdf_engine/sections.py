"""
Section layout for CV documents.

Each section is turned into Blocks laid out relative to y=0, then placed
through the LayoutState, which decides page breaks from block heights:
- item sections (experience, education, projects, ...) keep each item whole
- free text breaks between lines, skill grids between rows
- a section header always stays with the first block below it
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from cv_core.exceptions import SectionRenderError
from cv_core.i18n import get_string
from cv_core.models import (
    CertificateSection,
    EducationItem,
    EducationSection,
    ExperienceItem,
    ExperienceSection,
    LanguageSection,
    PersonalInfo,
    ProjectItem,
    ProjectSection,
    ReferenceSection,
    Section,
    SectionKind,
    SkillSection,
)
from cv_core.utils.title_formatter import upper
from cv_core.utils.url_shortener import shorten_url

from .canvas import Block, PageSet, RuleOp, TextOp
from .cursor import LayoutState
from .metrics import TextMetrics
from .templates.base import FontSpec, LayoutConstants, PageSpec, TypographySpec
from .variants import ResolvedTemplate


logger = logging.getLogger(__name__)

T = TypeVar("T")

# A placeable unit and the vertical gap left after it
Unit = Tuple[Block, float]

# (visible text, link target)
ContactPart = Tuple[str, Optional[str]]


def distribute_columns(items: Sequence[T], columns: int) -> List[List[T]]:
    """
    Split items into columns filled top to bottom, then left to right.

    Each column takes ceil(n / columns) items; the last columns hold the
    remainder and may be empty.
    """
    if columns < 1:
        raise ValueError(f"columns must be >= 1, got {columns}")
    if not items:
        return [[] for _ in range(columns)]
    rows = math.ceil(len(items) / columns)
    return [list(items[c * rows:(c + 1) * rows]) for c in range(columns)]


def _join(separator: str, *parts: Optional[str]) -> str:
    return separator.join(p.strip() for p in parts if p and p.strip())


class SectionRenderer:
    """
    Lays out the header block and every section kind.

    Stateless between calls: all position state lives in the LayoutState
    and PageSet passed to render().
    """

    def __init__(
        self,
        metrics: TextMetrics,
        page: PageSpec,
        typography: Optional[TypographySpec] = None,
        constants: Optional[LayoutConstants] = None,
    ):
        self.metrics = metrics
        self.page = page
        self.typography = typography or TypographySpec()
        self.constants = constants or LayoutConstants()

        self._layouts: Dict[SectionKind, Callable[[Section, ResolvedTemplate], List[Unit]]] = {
            SectionKind.OBJECTIVE: self._free_text_units,
            SectionKind.COMMUNICATION: self._free_text_units,
            SectionKind.LEADERSHIP: self._free_text_units,
            SectionKind.EXPERIENCE: self._experience_units,
            SectionKind.EDUCATION: self._education_units,
            SectionKind.SKILLS: self._skill_units,
            SectionKind.PROJECTS: self._project_units,
            SectionKind.CERTIFICATES: self._certificate_units,
            SectionKind.REFERENCES: self._reference_units,
            SectionKind.LANGUAGES: self._language_units,
        }

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place(self, block: Block, state: LayoutState, pages: PageSet, gap_after: float = 0) -> float:
        """Place a whole block, starting a new page first if it does not fit."""
        y = state.ensure_fits(block.height)
        pages.place(state.current_page, block, y)
        state.advance(block.height + gap_after)
        return y

    def render_header(
        self,
        info: PersonalInfo,
        state: LayoutState,
        pages: PageSet,
        template: ResolvedTemplate,
    ) -> None:
        """
        Name, job title and contact line(s) at the top of the document.

        Raises:
            SectionRenderError: The header block could not be built
        """
        try:
            block = self.header_block(info, template)
        except Exception as e:
            raise SectionRenderError("header", str(e)) from e
        self.place(block, state, pages)

    def render(
        self,
        section: Section,
        state: LayoutState,
        pages: PageSet,
        template: ResolvedTemplate,
    ) -> None:
        """
        Lay out one section at the cursor.

        Raises:
            SectionRenderError: The section could not be laid out. Nothing
                has been placed when this is raised from block building;
                the caller rolls back anything placed before a later failure.
        """
        if section.is_empty():
            logger.debug(f"Skipping empty section {section.kind.value}")
            return

        layout = self._layouts.get(section.kind)
        if layout is None:
            raise SectionRenderError(section.kind.value, "no layout for section kind")

        try:
            units = layout(section, template)
        except SectionRenderError:
            raise
        except Exception as e:
            raise SectionRenderError(section.kind.value, str(e)) from e

        units = [(block, gap) for block, gap in units if block.height > 0]
        if not units:
            logger.debug(f"Section {section.kind.value} produced no content")
            return

        header = self.section_header_block(template.section_header_label(section.kind))
        for index, (block, gap) in enumerate(units):
            if index == 0:
                first = Block()
                first.extend(header)
                first.extend(block)
                block = first
            self.place(block, state, pages, gap)

        logger.debug(
            f"Section {section.kind.value}: {len(units)} unit(s), "
            f"ends on page {state.current_page + 1} at y={state.cursor_y:.1f}"
        )

    # ------------------------------------------------------------------
    # Block primitives
    # ------------------------------------------------------------------

    def line_blocks(
        self,
        text: str,
        spec: FontSpec,
        x: Optional[float] = None,
        width: Optional[float] = None,
        justify: bool = False,
    ) -> List[Block]:
        """
        One Block per wrapped line.

        With justify, every line except the last of each paragraph is
        stretched to the full width.
        """
        x = self.page.left_margin if x is None else x
        width = self.page.content_width if width is None else width
        font_name = self.metrics.font_name(spec.font)
        step = self.metrics.line_height(spec.font, spec.size) + spec.line_gap

        blocks = []
        for paragraph in self.metrics.wrap_paragraphs(text, width, spec.font, spec.size):
            for i, line in enumerate(paragraph):
                block = Block(height=step)
                if line:
                    stretch = justify and i < len(paragraph) - 1
                    block.add(TextOp(
                        x, 0, line, font_name, spec.size, spec.color,
                        justify_width=width if stretch else None,
                    ))
                blocks.append(block)
        return blocks

    def text_block(
        self,
        text: str,
        spec: FontSpec,
        x: Optional[float] = None,
        width: Optional[float] = None,
        justify: bool = False,
    ) -> Block:
        """Wrapped text as a single block; height matches TextMetrics.measure_height."""
        block = Block()
        for line in self.line_blocks(text, spec, x, width, justify):
            block.extend(line)
        return block

    def right_aligned(self, text: str, spec: FontSpec, y: float = 0) -> TextOp:
        width = self.metrics.measure_width(text, spec.font, spec.size)
        return TextOp(
            self.page.right_edge - width, y, self.metrics.displayable(text),
            self.metrics.font_name(spec.font), spec.size, spec.color,
        )

    def row_block(
        self,
        left: str,
        left_spec: FontSpec,
        right: Optional[str] = None,
        right_spec: Optional[FontSpec] = None,
    ) -> Block:
        """
        Left text with optional right-aligned text on the same line.

        When both do not fit on one line the right text moves to its own
        line below, still right-aligned.
        """
        right_spec = right_spec or left_spec
        if not right:
            return self.text_block(left, left_spec)

        gap = self.constants.right_column_gap
        left_width = self.metrics.measure_width(left, left_spec.font, left_spec.size)
        right_width = self.metrics.measure_width(right, right_spec.font, right_spec.size)
        right_height = self.metrics.line_height(right_spec.font, right_spec.size)

        if left_width + gap + right_width <= self.page.content_width:
            block = self.text_block(left, left_spec)
            block.add(self.right_aligned(right, right_spec))
            block.height = max(block.height, right_height)
            return block

        block = self.text_block(left, left_spec)
        below = Block(height=right_height)
        below.add(self.right_aligned(right, right_spec))
        block.extend(below)
        return block

    def bullet_block(self, entries: Sequence[str], spec: FontSpec) -> Block:
        """Bulleted list with a hanging indent."""
        bullet = f"{self.constants.bullet} "
        indent = self.metrics.measure_width(bullet, spec.font, spec.size)
        x = self.page.left_margin
        font_name = self.metrics.font_name(spec.font)

        block = Block()
        for entry in entries:
            if not entry or not entry.strip():
                continue
            body = self.text_block(entry.strip(), spec, x + indent, self.page.content_width - indent)
            body.add(TextOp(x, 0, self.metrics.displayable(bullet), font_name, spec.size, spec.color))
            block.extend(body)
        return block

    def section_header_block(self, label: str) -> Block:
        """Bold header text with a rule underneath."""
        spec = self.typography.section_header
        block = self.text_block(label, spec)
        rule_y = self.constants.header_rule_offset
        block.add(RuleOp(
            self.page.left_margin, rule_y, self.page.right_edge, rule_y,
            self.typography.rule_width, self.typography.rule_color,
        ))
        block.height = max(block.height, self.constants.section_header_gap)
        return block

    def _append_row(self, block: Block, row: Block) -> None:
        if row.height <= 0:
            return
        if block.height > 0:
            block.height += self.constants.row_gap
        block.extend(row)

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def contact_parts(self, info: PersonalInfo) -> List[ContactPart]:
        """Visible contact fields in display order; profile links shortened."""
        parts: List[ContactPart] = []
        for value in (info.location, info.phone):
            if value and value.strip():
                parts.append((value.strip(), None))

        if info.email and info.email.strip():
            email = info.email.strip()
            parts.append((email, f"mailto:{email}"))

        for url in (info.linkedin, info.github, info.medium, info.website):
            if not url or not url.strip():
                continue
            try:
                short = shorten_url(url)
            except ValueError:
                logger.debug(f"Profile link {url!r} is not a URL, showing it as text")
                parts.append((url.strip(), None))
                continue
            parts.append((short.display_text, short.full_url))
        return parts

    def contact_block(self, parts: Sequence[ContactPart]) -> Block:
        """
        Contact parts joined by the separator.

        Lines only break between parts, never inside one.
        """
        spec = self.typography.contact
        separator = self.metrics.displayable(self.typography.contact_separator)
        separator_width = self.metrics.measure_width(separator, spec.font, spec.size)
        max_width = self.page.content_width

        lines: List[List[ContactPart]] = []
        current: List[ContactPart] = []
        current_width = 0.0
        for part in parts:
            width = self.metrics.measure_width(part[0], spec.font, spec.size)
            candidate = width if not current else current_width + separator_width + width
            if current and candidate > max_width:
                lines.append(current)
                current, current_width = [part], width
            else:
                current.append(part)
                current_width = candidate
        if current:
            lines.append(current)

        font_name = self.metrics.font_name(spec.font)
        step = self.metrics.line_height(spec.font, spec.size)
        block = Block()
        for line in lines:
            x = self.page.left_margin
            for index, (text, link) in enumerate(line):
                if index:
                    block.add(TextOp(x, block.height, separator, font_name, spec.size, spec.color))
                    x += separator_width
                block.add(TextOp(
                    x, block.height, self.metrics.displayable(text), font_name, spec.size, spec.color, link=link,
                ))
                x += self.metrics.measure_width(text, spec.font, spec.size)
            block.height += step
        return block

    def header_block(self, info: PersonalInfo, template: ResolvedTemplate) -> Block:
        t = self.typography
        block = Block()
        self._append_row(block, self.text_block(upper(info.name, template.language), t.name))
        if info.job_title:
            self._append_row(block, self.text_block(info.job_title, t.job_title))

        parts = self.contact_parts(info)
        if parts:
            self._append_row(block, self.contact_block(parts))

        block.height += self.constants.section_header_gap
        return block

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _free_text_units(self, section: Section, template: ResolvedTemplate) -> List[Unit]:
        lines = self.line_blocks(section.text, self.typography.body, justify=True)
        units = [(line, 0.0) for line in lines]
        if units:
            units[-1] = (units[-1][0], self.constants.item_gap)
        return units

    def _experience_units(self, section: ExperienceSection, template: ResolvedTemplate) -> List[Unit]:
        return [(self.experience_block(item, template), self.constants.item_gap) for item in section.items]

    def experience_block(self, item: ExperienceItem, template: ResolvedTemplate) -> Block:
        t = self.typography
        period = ""
        if item.start or item.end or item.is_current:
            period = template.dates.period(item.start, item.end, item.is_current)

        block = Block()
        for name in template.fields(SectionKind.EXPERIENCE):
            if name == "title":
                right = period if template.dates_right_aligned else None
                row = self.row_block(item.title, t.item_title, right, t.date)
            elif name == "organization":
                row = self.text_block(_join(", ", item.organization, item.location), t.item_meta)
            elif name == "period":
                row = self.text_block(period, t.date)
            elif name == "description":
                row = self.text_block(item.description, t.body, justify=True)
            elif name == "achievements":
                row = self.bullet_block(item.achievements, t.body)
            elif name == "technologies":
                row = self.text_block(self._technologies(item.technologies, template), t.tags)
            else:
                continue
            self._append_row(block, row)
        return block

    def _education_units(self, section: EducationSection, template: ResolvedTemplate) -> List[Unit]:
        return [(self.education_block(item, template), self.constants.education_gap) for item in section.items]

    def education_block(self, item: EducationItem, template: ResolvedTemplate) -> Block:
        t = self.typography
        if item.start:
            period = template.dates.period(item.start, item.end)
        else:
            period = template.dates.graduation(item.end)

        block = Block()
        for name in template.fields(SectionKind.EDUCATION):
            if name == "credential":
                title = _join(", ", item.credential, item.field_of_study) or item.institution
                right = period if template.dates_right_aligned else None
                row = self.row_block(title, t.item_title, right, t.date)
            elif name == "institution":
                row = self.text_block(_join(", ", item.institution, item.location), t.item_meta)
            elif name == "period":
                row = self.text_block(period, t.date)
            elif name == "grade":
                grade = f"{get_string('grade', template.language)}: {item.grade}" if item.grade else ""
                row = self.text_block(grade, t.item_meta)
            elif name == "detail":
                row = self.text_block(item.detail, t.body, justify=True)
            else:
                continue
            self._append_row(block, row)
        return block

    def _skill_units(self, section: SkillSection, template: ResolvedTemplate) -> List[Unit]:
        categorized = [g for g in section.groups if g.category and g.category.strip() and g.skills]
        if template.skill_layout == "categorized" and categorized:
            units = self._category_rows(section, template)
        else:
            units = self._grid_rows(section.all_skills())
        if units:
            units[-1] = (units[-1][0], self.constants.section_gap)
        return units

    def _grid_rows(self, skills: Sequence[str]) -> List[Unit]:
        """Column-major grid, one unit per row."""
        c = self.constants
        spec = self.typography.body
        columns = distribute_columns(skills, c.skill_columns)
        column_width = self.page.content_width / c.skill_columns
        row_count = max((len(col) for col in columns), default=0)
        bullet = f"{c.bullet} "

        units = []
        for row in range(row_count):
            block = Block()
            for index, column in enumerate(columns):
                if row >= len(column):
                    continue
                x = self.page.left_margin + index * column_width
                cell = self.text_block(bullet + column[row], spec, x, column_width - c.right_column_gap)
                for op in cell.ops:
                    block.add(op)
                block.height = max(block.height, cell.height)
            block.height = max(block.height, c.skill_row_height)
            units.append((block, 0.0))
        return units

    def _category_rows(self, section: SkillSection, template: ResolvedTemplate) -> List[Unit]:
        """'Category:' label with the joined skills at a fixed offset."""
        c = self.constants
        label_spec = self.typography.label
        value_spec = self.typography.body
        x = self.page.left_margin
        offset = c.category_value_offset

        units = []
        for group in section.groups:
            skills = [s.strip() for s in group.skills if s and s.strip()]
            if not skills:
                continue
            values = ", ".join(skills)
            category = (group.category or "").strip()
            if not category:
                block = self.text_block(values, value_spec)
            else:
                block = self.text_block(f"{category}:", label_spec, x, offset - 4)
                value = self.text_block(values, value_spec, x + offset, self.page.content_width - offset)
                for op in value.ops:
                    block.add(op)
                block.height = max(block.height, value.height)
            block.height += c.row_gap
            units.append((block, 0.0))
        return units

    def _project_units(self, section: ProjectSection, template: ResolvedTemplate) -> List[Unit]:
        return [(self.project_block(item, template), self.constants.item_gap) for item in section.items]

    def project_block(self, item: ProjectItem, template: ResolvedTemplate) -> Block:
        t = self.typography
        tags = ", ".join(s.strip() for s in item.technologies if s and s.strip())

        block = Block()
        for name in template.fields(SectionKind.PROJECTS):
            if name == "name":
                row = self.row_block(item.name, t.item_title, tags or None, t.tags)
            elif name == "description":
                row = self.text_block(item.description, t.body, justify=True)
            elif name == "link":
                row = self._link_row(item.link)
            else:
                continue
            self._append_row(block, row)
        return block

    def _link_row(self, link: Optional[str]) -> Block:
        if not link or not link.strip():
            return Block()
        spec = self.typography.contact
        try:
            short = shorten_url(link)
            text, target = short.display_text, short.full_url
        except ValueError:
            text, target = link.strip(), None
        block = Block(height=self.metrics.line_height(spec.font, spec.size))
        block.add(TextOp(
            self.page.left_margin, 0, self.metrics.displayable(text),
            self.metrics.font_name(spec.font), spec.size, spec.color, link=target,
        ))
        return block

    def _certificate_units(self, section: CertificateSection, template: ResolvedTemplate) -> List[Unit]:
        t = self.typography
        units = []
        for item in section.items:
            issued = template.dates.date(item.date) if item.date else ""
            block = Block()
            for name in template.fields(SectionKind.CERTIFICATES):
                if name == "name":
                    right = issued if template.dates_right_aligned else None
                    row = self.row_block(item.name, t.item_title, right, t.date)
                elif name == "issuer":
                    line_date = None if template.dates_right_aligned else issued
                    row = self.text_block(_join(self.typography.contact_separator, item.issuer, line_date), t.item_meta)
                else:
                    continue
                self._append_row(block, row)
            units.append((block, self.constants.compact_item_gap))
        return units

    def _reference_units(self, section: ReferenceSection, template: ResolvedTemplate) -> List[Unit]:
        t = self.typography
        units = []
        for item in section.items:
            block = Block()
            for name in template.fields(SectionKind.REFERENCES):
                if name == "name":
                    row = self.text_block(item.name, t.item_title)
                elif name == "organization_contact":
                    row = self.text_block(
                        _join(self.typography.contact_separator, item.organization, item.contact), t.item_meta
                    )
                else:
                    continue
                self._append_row(block, row)
            units.append((block, self.constants.compact_item_gap))
        return units

    def _language_units(self, section: LanguageSection, template: ResolvedTemplate) -> List[Unit]:
        c = self.constants
        units = []
        for item in section.items:
            text = _join(self.typography.contact_separator, item.language, item.level)
            block = self.text_block(text, self.typography.body)
            block.height = max(block.height, c.language_row_height)
            units.append((block, 0.0))
        if units:
            units[-1] = (units[-1][0], c.section_gap)
        return units

    def _technologies(self, technologies: Sequence[str], template: ResolvedTemplate) -> str:
        names = [s.strip() for s in technologies if s and s.strip()]
        if not names:
            return ""
        return f"{get_string('technologies', template.language)}: {', '.join(names)}"
