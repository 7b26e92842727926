"""Tests for cv_core.pdf_engine.canvas."""

import pytest

from cv_core.pdf_engine.canvas import (
    Block,
    DocumentMetadata,
    PageSet,
    PdfSerializer,
    RenderedPage,
    RuleOp,
    TextOp,
)
from cv_core.pdf_engine.templates import PageSpec


def _text(y, text="x"):
    return TextOp(50, y, text, "Helvetica", 10)


class TestBlock:
    def test_extend_stacks_below(self):
        top = Block(height=20)
        top.add(_text(0, "top"))
        bottom = Block(height=15)
        bottom.add(_text(0, "bottom"))
        bottom.add(RuleOp(50, 10, 100, 10))

        top.extend(bottom)

        assert top.height == 35
        assert top.ops[1].y == 20
        assert top.ops[2].y1 == 30
        assert top.ops[2].y2 == 30

    def test_placed_at_shifts_copies(self):
        block = Block(height=10)
        block.add(_text(2))
        placed = block.placed_at(100)
        assert placed[0].y == 102
        assert block.ops[0].y == 2


class TestPageSet:
    def test_place_creates_pages(self):
        pages = PageSet()
        block = Block(height=10, ops=[_text(0)])
        pages.place(2, block, 50)
        assert pages.page_count == 3
        assert [len(p.ops) for p in pages.pages] == [0, 0, 1]
        assert [p.index for p in pages.pages] == [0, 1, 2]

    def test_rollback(self):
        pages = PageSet()
        pages.add(0, _text(50, "kept"))
        checkpoint = pages.checkpoint()

        pages.add(0, _text(80, "dropped"))
        pages.add(1, _text(50, "dropped"))
        pages.rollback(checkpoint)

        assert pages.page_count == 1
        assert [op.text for op in pages.pages[0].ops] == ["kept"]

    def test_rollback_to_empty(self):
        pages = PageSet()
        checkpoint = pages.checkpoint()
        pages.add(0, _text(50))
        pages.rollback(checkpoint)
        assert pages.page_count == 0
        assert pages.op_count == 0


class TestPdfSerializer:
    def test_produces_pdf(self):
        page = PageSpec.a4()
        pages = [
            RenderedPage(0, [
                TextOp(50, 50, "Hello world", "Helvetica", 10),
                TextOp(50, 70, "Justified words here", "Helvetica", 10, justify_width=300),
                TextOp(50, 90, "link", "Helvetica", 10, link="https://example.com"),
                RuleOp(50, 110, 545, 110),
            ]),
            RenderedPage(1, [TextOp(50, 50, "Second page", "Helvetica-Bold", 12)]),
        ]
        data = PdfSerializer(page, DocumentMetadata(title="Test")).serialize(pages)
        assert data.startswith(b"%PDF")
        assert data.rstrip().endswith(b"%%EOF")

    def test_page_count(self):
        fitz = pytest.importorskip("fitz")
        pages = [RenderedPage(i, [TextOp(50, 50, f"Page {i}", "Helvetica", 10)]) for i in range(3)]
        data = PdfSerializer(PageSpec.a4()).serialize(pages)

        with fitz.open(stream=data, filetype="pdf") as doc:
            assert doc.page_count == 3
            assert "Page 1" in doc[1].get_text()
