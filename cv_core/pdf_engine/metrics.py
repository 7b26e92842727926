"""
Text measurement for page flow decisions.

Every layout decision is height based, so the same wrap routine is used
for measuring and for drawing: a block is measured from the lines it
will actually draw.
"""

import logging
from functools import lru_cache
from typing import Callable, List

from reportlab.pdfbase import pdfmetrics

from cv_core.exceptions import MeasurementError
from cv_core.utils.title_formatter import fold_turkish
from .fonts import BUILTIN_FAMILY, FontFamily


logger = logging.getLogger(__name__)

# Minimum line height as a multiple of the font size
MIN_LEADING = 1.2

# Average glyph width used when a width cannot be shaped
FALLBACK_GLYPH_WIDTH = 0.6


@lru_cache(maxsize=8192)
def string_width(text: str, font_name: str, font_size: float) -> float:
    """Width of one line of text in points."""
    try:
        return pdfmetrics.stringWidth(text, font_name, font_size)
    except Exception as e:
        raise MeasurementError(f"Cannot measure {text[:20]!r} in {font_name}: {e}") from e


@lru_cache(maxsize=256)
def line_height(font_name: str, font_size: float) -> float:
    """Height of one line box (ascent - descent, never below MIN_LEADING * size)."""
    try:
        ascent, descent = pdfmetrics.getAscentDescent(font_name, font_size)
    except Exception:
        return font_size * MIN_LEADING
    return max(ascent - descent, font_size * MIN_LEADING)


def wrap_paragraphs(text: str, max_width: float, width_of: Callable[[str], float]) -> List[List[str]]:
    """
    Greedy word wrap, one list of lines per paragraph.

    Explicit newlines start a new paragraph (blank lines are kept as an
    empty line); words wider than max_width are broken between
    characters. Empty or whitespace-only text yields no paragraphs.
    """
    if not text or not text.strip():
        return []

    max_width = max(max_width, 1.0)
    paragraphs: List[List[str]] = []
    normalized = text.replace('\r\n', '\n').replace('\r', '\n')

    for paragraph in normalized.split('\n'):
        words = paragraph.split()
        if not words:
            paragraphs.append([''])
            continue

        lines: List[str] = []
        current = ''
        for word in words:
            if not current:
                current = word
            elif width_of(f"{current} {word}") <= max_width:
                current = f"{current} {word}"
            else:
                lines.append(current)
                current = word

            while len(current) > 1 and width_of(current) > max_width:
                head, current = _split_overlong(current, max_width, width_of)
                lines.append(head)

        lines.append(current)
        paragraphs.append(lines)

    return paragraphs


def wrap_text(text: str, max_width: float, width_of: Callable[[str], float]) -> List[str]:
    """Flat list of wrapped lines."""
    return [line for paragraph in wrap_paragraphs(text, max_width, width_of) for line in paragraph]


def _split_overlong(word: str, max_width: float, width_of: Callable[[str], float]):
    """Longest prefix (at least one character) that fits, and the rest."""
    cut = 1
    while cut < len(word) and width_of(word[:cut + 1]) <= max_width:
        cut += 1
    return word[:cut], word[cut:]


class TextMetrics:
    """
    Measures text for one font family.

    Pure and deterministic: identical inputs give identical results.
    """

    def __init__(self, family: FontFamily = BUILTIN_FAMILY):
        self.family = family

    def font_name(self, font: str) -> str:
        return self.family.font_name(font)

    def displayable(self, text: str) -> str:
        """Text as it will be drawn: the base fonts get Turkish letters folded to ASCII."""
        return fold_turkish(text) if self.family.is_builtin else text

    def line_height(self, font: str, font_size: float) -> float:
        return line_height(self.font_name(font), font_size)

    def measure_width(self, text: str, font: str, font_size: float) -> float:
        """Width of a single unwrapped line."""
        if not text:
            return 0.0
        text = self.displayable(text)
        try:
            return string_width(text, self.font_name(font), font_size)
        except MeasurementError as e:
            logger.warning(f"Width measurement failed, estimating: {e}")
            return len(text) * font_size * FALLBACK_GLYPH_WIDTH

    def wrap_paragraphs(self, text: str, max_width: float, font: str, font_size: float) -> List[List[str]]:
        """
        Lines exactly as they will be drawn, grouped by paragraph.

        A shaping failure collapses the text to a single unwrapped line
        instead of raising.
        """
        font_name = self.font_name(font)
        text = self.displayable(text)
        try:
            return wrap_paragraphs(text, max_width, lambda s: string_width(s, font_name, font_size))
        except MeasurementError as e:
            logger.warning(f"Wrapping failed, using one line: {e}")
            return [[" ".join(text.split())]]

    def wrap(self, text: str, max_width: float, font: str, font_size: float) -> List[str]:
        return [line for paragraph in self.wrap_paragraphs(text, max_width, font, font_size)
                for line in paragraph]

    def measure_height(
        self,
        text: str,
        max_width: float,
        font: str,
        font_size: float,
        line_gap: float = 0,
    ) -> float:
        """
        Height of wrapped text: lines x (line height + line gap).

        Empty text measures 0. A shaping failure yields one line height
        instead of an error.
        """
        if not text or not text.strip():
            return 0.0
        step = self.line_height(font, font_size) + line_gap
        return len(self.wrap(text, max_width, font, font_size)) * step
