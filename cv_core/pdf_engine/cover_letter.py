"""
Cover letter PDF rendering.

Layout, top to bottom:
- centred title built from company and position
- right-aligned long date
- justified body paragraphs, each kept whole on a page
- closing block (greeting, name, contact lines, links) kept on the same
  page as the last paragraph
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from cv_core.exceptions import EmptyDocumentError
from cv_core.i18n import get_string
from cv_core.models import CoverLetter
from cv_core.utils.date_formatter import format_long_date
from cv_core.utils.title_formatter import detect_language, sentence_case

from .canvas import Block, DocumentMetadata, PageSet, PdfSerializer, TextOp
from .cursor import LayoutState
from .fonts import FontProvider, get_font_provider
from .metrics import TextMetrics
from .renderer import RenderedDocument, resolve_font_family
from .sections import SectionRenderer
from .templates.base import LetterTypography, PageSpec
from .variants import normalize_language


logger = logging.getLogger(__name__)

CLOSING_PHRASES = (
    "Saygılarımla",
    "En iyi dileklerimle",
    "Teşekkürler",
    "Best regards",
    "Kind regards",
    "Sincerely",
)

# From the first closing phrase to the end of the letter
CLOSING_PATTERN = re.compile(
    r"(?:" + "|".join(re.escape(p) for p in CLOSING_PHRASES) + r")[,.]?.*\Z",
    re.DOTALL,
)

_PHONE_CHARS = re.compile(r"[\s\-()+]")


@dataclass(frozen=True)
class ClosingBlock:
    """Normalised sign-off: greeting line, name, contact lines and links"""
    closing: str
    names: Tuple[str, ...] = ()
    contacts: Tuple[str, ...] = ()
    links: Tuple[str, ...] = ()

    def lines(self) -> List[str]:
        """Display lines; an empty string is a blank spacer line."""
        lines = [self.closing]
        if self.names:
            lines.append(" ".join(self.names))
        if self.contacts:
            lines.append("")
            lines.extend(self.contacts)
        if self.links:
            lines.append("")
            lines.extend(self.links)
        return lines


def parse_closing(raw: str) -> Optional[ClosingBlock]:
    lines = [line.strip() for line in raw.strip().split("\n") if line.strip()]
    if not lines:
        return None

    names, contacts, links = [], [], []
    for line in lines[1:]:
        if "@" in line or _PHONE_CHARS.sub("", line).isdigit():
            contacts.append(line)
        elif "http" in line or "www." in line or ".com" in line:
            links.append(line)
        elif not any(phrase in line for phrase in CLOSING_PHRASES):
            names.append(line)

    closing = re.sub(r"[,.]$", "", lines[0]) + ","
    return ClosingBlock(
        closing=closing,
        names=tuple(names),
        contacts=tuple(contacts),
        links=tuple(sorted(links, key=len)),
    )


def split_closing(content: str) -> Tuple[str, Optional[ClosingBlock]]:
    """Separate the letter body from its closing block."""
    match = CLOSING_PATTERN.search(content)
    if not match:
        return content.strip(), None
    body = content[:match.start()].strip()
    return body, parse_closing(match.group(0))


def letter_title(position_title: str, company_name: str, language: str) -> str:
    """
    Title line for the letter.

    Examples:
        tr -> "Acme - Yazılım mühendisi Pozisyonu İçin Başvuru Mektubu"
        en -> "Cover Letter For Software engineer Position At Acme"
    """
    position = sentence_case(position_title, language)
    company = sentence_case(company_name, language)
    if language == "tr":
        return f"{company} - {position} Pozisyonu İçin Başvuru Mektubu"
    return f"Cover Letter For {position} Position At {company}"


class CoverLetterComposer:
    """Paginates and renders a cover letter with the CV engine's building blocks"""

    def __init__(
        self,
        font_provider: Optional[FontProvider] = None,
        page: Optional[PageSpec] = None,
        typography: Optional[LetterTypography] = None,
    ):
        self.font_provider = font_provider or get_font_provider()
        self.page = page or PageSpec.a4()
        self.typography = typography or LetterTypography()

    def resolve_language(self, letter: CoverLetter) -> str:
        if letter.language:
            return normalize_language(letter.language)
        detected = detect_language(letter.content)
        logger.debug(f"Cover letter language detected as {detected}")
        return detected

    def layout(self, letter: CoverLetter) -> RenderedDocument:
        """
        Paginate a cover letter.

        Raises:
            EmptyDocumentError: The letter has no content
        """
        if not letter.content or not letter.content.strip():
            raise EmptyDocumentError("Cover letter content is empty")

        t = self.typography
        language = self.resolve_language(letter)
        family = resolve_font_family(self.font_provider)
        metrics = TextMetrics(family)
        blocks = SectionRenderer(metrics, self.page)

        state = LayoutState(self.page)
        pages = PageSet()

        title = letter_title(letter.position_title, letter.company_name, language)
        blocks.place(self.centered_block(title, metrics), state, pages, t.title_gap)

        dated = format_long_date(letter.letter_date or date.today(), language)
        date_block = Block(height=metrics.line_height(t.date.font, t.date.size))
        date_block.add(blocks.right_aligned(dated, t.date))
        blocks.place(date_block, state, pages, t.date_gap)

        body, closing = split_closing(letter.content)
        paragraphs = [p.strip() for p in body.split("\n") if p.strip()]

        for index, paragraph in enumerate(paragraphs):
            block = blocks.text_block(paragraph, t.body, justify=True)
            is_last = index == len(paragraphs) - 1
            if is_last and closing is not None:
                block.height += t.closing_gap
                block.extend(self.closing_block(closing, blocks))
                blocks.place(block, state, pages)
            else:
                blocks.place(block, state, pages, t.paragraph_gap)

        if closing is not None and not paragraphs:
            blocks.place(self.closing_block(closing, blocks), state, pages)

        return RenderedDocument(pages.pages, family)

    def centered_block(self, text: str, metrics: TextMetrics) -> Block:
        spec = self.typography.title
        width = self.page.content_width
        font_name = metrics.font_name(spec.font)
        step = metrics.line_height(spec.font, spec.size) + spec.line_gap

        block = Block()
        for line in metrics.wrap(text, width, spec.font, spec.size):
            line_width = metrics.measure_width(line, spec.font, spec.size)
            x = self.page.left_margin + (width - line_width) / 2
            block.add(TextOp(x, block.height, line, font_name, spec.size, spec.color))
            block.height += step
        return block

    def closing_block(self, closing: ClosingBlock, blocks: SectionRenderer) -> Block:
        t = self.typography
        block = Block()
        for line in closing.lines():
            if not line:
                block.height += t.closing_blank_line
                continue
            block.extend(blocks.text_block(line, t.closing))
            block.height += t.closing_line_gap
        return block

    def render(self, letter: CoverLetter) -> bytes:
        """
        Render a cover letter to PDF bytes.

        Raises:
            EmptyDocumentError: The letter has no content
        """
        rendered = self.layout(letter)
        language = self.resolve_language(letter)
        metadata = DocumentMetadata(
            title=letter_title(letter.position_title, letter.company_name, language),
            subject=get_string("cover_letter", language),
            keywords=", ".join(p for p in ("Cover Letter", letter.company_name, letter.position_title) if p),
        )
        data = PdfSerializer(self.page, metadata).serialize(rendered.pages)
        logger.info(f"Cover letter rendered: {rendered.page_count} page(s), {len(data)} bytes ({language})")
        return data
