"""
Positioned draw operations, page sets and PDF serialization.

Layout code works in top-down coordinates (y grows towards the bottom
of the page, y of a text run is the top of its line box). The serializer
converts to PDF user space when replaying the operations onto a
ReportLab canvas.
"""

import io
import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Union

from reportlab.lib.colors import Color, black
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as rl_canvas

from .metrics import string_width
from .templates.base import PageSpec


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextOp:
    """One line of text. justify_width stretches inter-word gaps to that width."""
    x: float
    y: float
    text: str
    font_name: str
    font_size: float
    color: Color = field(default_factory=lambda: black)
    justify_width: Optional[float] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class RuleOp:
    """Straight line"""
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.75
    color: Color = field(default_factory=lambda: black)


DrawOp = Union[TextOp, RuleOp]


def shift_op(op: DrawOp, dy: float) -> DrawOp:
    if isinstance(op, RuleOp):
        return replace(op, y1=op.y1 + dy, y2=op.y2 + dy)
    return replace(op, y=op.y + dy)


@dataclass
class Block:
    """
    Draw operations laid out relative to y=0 plus their total height.

    Measuring a block and drawing it share the same code path, so the
    height handed to the page cursor is the height that gets drawn.
    """
    height: float = 0.0
    ops: List[DrawOp] = field(default_factory=list)

    def add(self, op: DrawOp) -> None:
        self.ops.append(op)

    def extend(self, other: "Block") -> None:
        """Append another block below this one."""
        for op in other.ops:
            self.ops.append(shift_op(op, self.height))
        self.height += other.height

    def placed_at(self, y: float) -> List[DrawOp]:
        return [shift_op(op, y) for op in self.ops]


@dataclass
class RenderedPage:
    """Ordered draw operations of one page"""
    index: int
    ops: List[DrawOp] = field(default_factory=list)


class PageSet:
    """Pages accumulated by one render call"""

    def __init__(self):
        self.pages: List[RenderedPage] = []

    def _page(self, index: int) -> RenderedPage:
        while len(self.pages) <= index:
            self.pages.append(RenderedPage(len(self.pages)))
        return self.pages[index]

    def add(self, page_index: int, op: DrawOp) -> None:
        self._page(page_index).ops.append(op)

    def place(self, page_index: int, block: Block, y: float) -> None:
        """Draw a block at y on the given page."""
        page = self._page(page_index)
        page.ops.extend(block.placed_at(y))

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def op_count(self) -> int:
        return sum(len(p.ops) for p in self.pages)

    def checkpoint(self) -> List[int]:
        return [len(p.ops) for p in self.pages]

    def rollback(self, checkpoint: Sequence[int]) -> None:
        """Drop everything added after the checkpoint."""
        del self.pages[len(checkpoint):]
        for page, count in zip(self.pages, checkpoint):
            del page.ops[count:]


@dataclass(frozen=True)
class DocumentMetadata:
    title: str = ""
    author: str = ""
    subject: str = ""
    keywords: str = ""
    creator: str = "CV Core PDF Engine"


class PdfSerializer:
    """Replays RenderedPages onto a ReportLab canvas and returns the PDF bytes."""

    def __init__(self, page: PageSpec, metadata: Optional[DocumentMetadata] = None):
        self.page = page
        self.metadata = metadata or DocumentMetadata()

    def serialize(self, pages: Sequence[RenderedPage]) -> bytes:
        buffer = io.BytesIO()
        pdf = rl_canvas.Canvas(buffer, pagesize=self.page.size, pageCompression=1)

        meta = self.metadata
        pdf.setTitle(meta.title)
        pdf.setAuthor(meta.author)
        pdf.setSubject(meta.subject)
        pdf.setKeywords(meta.keywords)
        pdf.setCreator(meta.creator)

        for page in pages:
            for op in page.ops:
                if isinstance(op, RuleOp):
                    self._draw_rule(pdf, op)
                else:
                    self._draw_text(pdf, op)
            pdf.showPage()

        pdf.save()
        data = buffer.getvalue()
        logger.debug(f"Serialized {len(pages)} page(s), {len(data)} bytes")
        return data

    def _to_pdf_y(self, y: float) -> float:
        return self.page.height - y

    def _draw_rule(self, pdf, op: RuleOp) -> None:
        pdf.setStrokeColor(op.color)
        pdf.setLineWidth(op.width)
        pdf.line(op.x1, self._to_pdf_y(op.y1), op.x2, self._to_pdf_y(op.y2))

    def _draw_text(self, pdf, op: TextOp) -> None:
        if not op.text:
            return
        ascent, descent = pdfmetrics.getAscentDescent(op.font_name, op.font_size)
        baseline = self._to_pdf_y(op.y + ascent)

        pdf.setFillColor(op.color)
        pdf.setFont(op.font_name, op.font_size)

        words = op.text.split(' ')
        if op.justify_width and len(words) > 1:
            widths = [string_width(w, op.font_name, op.font_size) for w in words]
            gap = (op.justify_width - sum(widths)) / (len(words) - 1)
            x = op.x
            for word, width in zip(words, widths):
                pdf.drawString(x, baseline, word)
                x += width + gap
        else:
            pdf.drawString(op.x, baseline, op.text)

        if op.link:
            width = string_width(op.text, op.font_name, op.font_size)
            pdf.linkURL(
                op.link,
                (op.x, baseline + descent, op.x + width, baseline + ascent),
                relative=0,
            )
