"""
CV PDF Renderer.

Composes a StructuredDocument into paginated draw operations and
serializes them with ReportLab. One call owns its LayoutState and
PageSet; only the FontProvider is shared between calls.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from cv_core.exceptions import EmptyDocumentError, FontNotFoundError, SectionRenderError
from cv_core.i18n import get_string
from cv_core.models import PersonalInfo, Section, StructuredDocument, TemplateVariant
from cv_core.utils.title_formatter import clean_filename

from .canvas import DocumentMetadata, PageSet, PdfSerializer, RenderedPage
from .cursor import LayoutState
from .fonts import BUILTIN_FAMILY, FontFamily, FontProvider, get_font_provider
from .metrics import TextMetrics
from .sections import SectionRenderer
from .templates.base import LayoutConstants, PageSpec, TypographySpec
from .variants import ResolvedTemplate, normalize_style, resolve_variant


logger = logging.getLogger(__name__)


@dataclass
class RenderedDocument:
    """Paginated draw operations plus what was used to produce them"""
    pages: List[RenderedPage]
    family: FontFamily
    template: Optional[ResolvedTemplate] = None
    skipped_sections: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def resolve_font_family(provider: FontProvider) -> FontFamily:
    """Load the body family, degrading to the built-in family on failure."""
    try:
        return provider.load_family()
    except FontNotFoundError as e:
        logger.warning(
            f"{e}; rendering with built-in {BUILTIN_FAMILY.regular.font_name} "
            f"(non Latin-1 characters may not display)"
        )
        return BUILTIN_FAMILY


def suggest_filename(personal_info: Optional[PersonalInfo], variant: Optional[TemplateVariant] = None) -> str:
    """
    Download filename for a rendered CV.

    Examples:
        Ayse Yilmaz, turkey -> "Ayse_Yilmaz_Resume_TR.pdf"
        John Doe, global    -> "John_Doe_Resume_Global.pdf"
    """
    style = normalize_style((variant or TemplateVariant()).style)
    name = clean_filename(personal_info.name if personal_info else "") or "CV"
    suffix = "TR" if style == "turkey" else "Global"
    return f"{name}_Resume_{suffix}.pdf"


class DocumentComposer:
    """
    Flows a StructuredDocument across fixed-size pages.

    Sections are laid out in the resolved variant's canonical order;
    a section that fails is rolled back and skipped, the rest of the
    document still renders.
    """

    def __init__(
        self,
        font_provider: Optional[FontProvider] = None,
        page: Optional[PageSpec] = None,
        typography: Optional[TypographySpec] = None,
        constants: Optional[LayoutConstants] = None,
    ):
        """
        Initialize DocumentComposer.

        Args:
            font_provider: Font source (defaults to the process-wide provider)
            page: Page size and margins (defaults to A4, 50pt margins)
            typography: Text styles per document role
            constants: Spacing and grid constants
        """
        self.font_provider = font_provider or get_font_provider()
        self.page = page or PageSpec.a4()
        self.typography = typography or TypographySpec()
        self.constants = constants or LayoutConstants()

    def ordered_sections(self, document: StructuredDocument, template: ResolvedTemplate) -> List[Section]:
        """Non-empty sections the variant includes, in canonical order."""
        rank = {kind: index for index, kind in enumerate(template.section_order)}
        kept = []
        for section in document.sections:
            if section.kind not in rank:
                logger.debug(f"Section {section.kind.value} omitted by style {template.style}")
            elif section.is_empty():
                logger.debug(f"Section {section.kind.value} has no content")
            else:
                kept.append(section)
        return sorted(kept, key=lambda s: rank[s.kind])

    def layout(
        self,
        document: StructuredDocument,
        variant: Optional[TemplateVariant] = None,
    ) -> RenderedDocument:
        """
        Paginate a document without serializing it.

        Raises:
            EmptyDocumentError: Nothing renderable in the document
        """
        if not document.has_content():
            raise EmptyDocumentError("Document has no personal info and no non-empty sections")

        template = resolve_variant(variant)
        family = resolve_font_family(self.font_provider)
        renderer = SectionRenderer(TextMetrics(family), self.page, self.typography, self.constants)

        state = LayoutState(self.page)
        pages = PageSet()
        skipped: List[str] = []

        info = document.personal_info
        if info is not None and info.has_content():
            self._guarded("header", lambda: renderer.render_header(info, state, pages, template),
                          state, pages, skipped)

        for section in self.ordered_sections(document, template):
            self._guarded(section.kind.value, lambda: renderer.render(section, state, pages, template),
                          state, pages, skipped)

        if pages.op_count == 0:
            raise EmptyDocumentError(
                f"No renderable content for style {template.style} "
                f"(skipped: {', '.join(skipped) or 'none'})"
            )

        return RenderedDocument(pages.pages, family, template, skipped)

    def _guarded(self, name, step, state: LayoutState, pages: PageSet, skipped: List[str]) -> None:
        checkpoint = pages.checkpoint()
        snapshot = state.snapshot()
        try:
            step()
        except SectionRenderError as e:
            pages.rollback(checkpoint)
            state.restore(snapshot)
            skipped.append(name)
            logger.warning(f"Skipping section {name}: {e}")

    def metadata(self, document: StructuredDocument, template: ResolvedTemplate) -> DocumentMetadata:
        name = document.personal_info.name.strip() if document.personal_info else ""
        return DocumentMetadata(
            title=f"{name} - CV" if name else "CV",
            author=name,
            subject=get_string("curriculum_vitae", template.language),
            keywords=", ".join(["CV", "Resume", template.style, template.language]),
        )

    def render(
        self,
        document: StructuredDocument,
        variant: Optional[TemplateVariant] = None,
    ) -> bytes:
        """
        Render a CV to PDF bytes.

        Args:
            document: Structured CV content
            variant: Language and regional style (defaults to en/global)

        Returns:
            Complete PDF file content

        Raises:
            EmptyDocumentError: Nothing renderable in the document
        """
        rendered = self.layout(document, variant)
        serializer = PdfSerializer(self.page, self.metadata(document, rendered.template))
        data = serializer.serialize(rendered.pages)

        logger.info(
            f"CV rendered: {rendered.page_count} page(s), {len(data)} bytes "
            f"({rendered.template.language}/{rendered.template.style})"
        )
        return data
