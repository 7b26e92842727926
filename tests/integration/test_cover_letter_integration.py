"""
Integration tests for cover letter rendering.

Tests layout and PDF output of CoverLetterComposer with the built-in fonts.
"""

from datetime import date

import pytest

from cv_core.exceptions import EmptyDocumentError
from cv_core.models import CoverLetter
from cv_core.pdf_engine import CoverLetterComposer, TextOp

# Skip if reportlab not available
pytest.importorskip("reportlab")


CLOSING = "Best regards,\nJane Doe\njane@example.com\ngithub.com/janedoe"


def _text_ops(rendered):
    return [(page.index, op) for page in rendered.pages for op in page.ops if isinstance(op, TextOp)]


@pytest.fixture
def composer(builtin_provider):
    return CoverLetterComposer(font_provider=builtin_provider)


@pytest.fixture
def short_letter():
    return CoverLetter(
        content="Dear hiring team,\nI would like to apply for the backend position.\n" + CLOSING,
        position_title="engineer",
        company_name="acme",
        language="en",
        letter_date=date(2026, 10, 17),
    )


class TestCoverLetterLayout:
    def test_title_and_date(self, composer, short_letter, page):
        rendered = composer.layout(short_letter)
        ops = [op for _, op in _text_ops(rendered)]

        assert ops[0].text == "Cover Letter For Engineer Position At Acme"
        assert ops[1].text == "October 17, 2026"
        assert ops[1].x > page.left_margin
        assert ops[0].y < ops[1].y

    def test_turkish_date(self, composer):
        letter = CoverLetter(content="Merhaba,\nBaşvurumu iletiyorum.", language="tr",
                             letter_date=date(2026, 10, 17))
        texts = [op.text for _, op in _text_ops(composer.layout(letter))]
        assert "17 Ekim 2026" in texts

    def test_closing_lines(self, composer, short_letter):
        texts = [op.text for _, op in _text_ops(composer.layout(short_letter))]
        tail = texts[-4:]
        assert tail == ["Best regards,", "Jane Doe", "jane@example.com", "github.com/janedoe"]

    def test_closing_stays_with_last_paragraph(self, composer):
        filler = "This paragraph describes relevant experience in some detail. " * 6
        paragraphs = [f"{i}. {filler}" for i in range(30)] + ["Final paragraph before the sign-off."]
        letter = CoverLetter(content="\n".join(paragraphs) + "\n" + CLOSING, language="en")

        rendered = composer.layout(letter)
        ops = _text_ops(rendered)

        assert rendered.page_count >= 2
        last_page = [index for index, op in ops if op.text == "Final paragraph before the sign-off."][0]
        closing_page = [index for index, op in ops if op.text == "Best regards,"][0]
        assert closing_page == last_page

    def test_paragraphs_never_split(self, composer):
        paragraphs = [(f"Para{i}word " * 70).strip() for i in range(20)]
        rendered = composer.layout(CoverLetter(content="\n".join(paragraphs), language="en"))

        assert rendered.page_count >= 2
        for i in range(20):
            owners = {index for index, op in _text_ops(rendered) if f"Para{i}word" in op.text.split()}
            assert len(owners) == 1

    def test_closing_without_body(self, composer):
        rendered = composer.layout(CoverLetter(content="Sincerely\nJane Doe", language="en"))
        texts = [op.text for _, op in _text_ops(rendered)]
        assert "Sincerely," in texts
        assert "Jane Doe" in texts

    def test_language_detected_from_content(self, composer):
        letter = CoverLetter(content="Bu pozisyon için başvuru yapıyorum.")
        assert composer.resolve_language(letter) == "tr"

    def test_empty_content_raises(self, composer):
        with pytest.raises(EmptyDocumentError):
            composer.layout(CoverLetter(content="   \n  "))


class TestCoverLetterPdf:
    def test_render_produces_pdf(self, composer, short_letter):
        data = composer.render(short_letter)
        assert data.startswith(b"%PDF")

    def test_pdf_content_and_metadata(self, composer, short_letter):
        fitz = pytest.importorskip("fitz")
        data = composer.render(short_letter)

        with fitz.open(stream=data, filetype="pdf") as pdf:
            assert pdf.page_count == 1
            text = pdf[0].get_text()
            assert "Best regards," in text
            assert pdf.metadata["title"] == "Cover Letter For Engineer Position At Acme"
            assert pdf.metadata["keywords"] == "Cover Letter, acme, engineer"
