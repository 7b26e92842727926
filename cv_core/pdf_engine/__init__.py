"""
PDF Engine - paginated CV and cover letter rendering using ReportLab.

This module provides:
- Font loading with a shared, single-flight cache and built-in fallback
- Text measurement shared by layout and drawing
- Page cursor and height-driven page breaks
- Section layouts for every CV section kind
- Language and regional style resolution

Usage:
    from cv_core.pdf_engine import DocumentComposer
    from cv_core.models import TemplateVariant

    composer = DocumentComposer()
    pdf_bytes = composer.render(document, TemplateVariant(language="tr", style="turkey"))

Key components:
- DocumentComposer: Main CV renderer
- CoverLetterComposer: Cover letter renderer
- FontProvider: Font discovery and registration
- TextMetrics: Width/height measurement
- LayoutState: Page cursor
- SectionRenderer: Per-section layout
- resolve_variant: Template variant resolution
"""

from .canvas import Block, DocumentMetadata, PageSet, PdfSerializer, RenderedPage, RuleOp, TextOp
from .cover_letter import CoverLetterComposer, split_closing
from .cursor import LayoutState
from .fonts import BUILTIN_FAMILY, FontFamily, FontHandle, FontProvider, get_font_provider
from .metrics import TextMetrics, wrap_text
from .renderer import DocumentComposer, RenderedDocument, suggest_filename
from .sections import SectionRenderer, distribute_columns
from .templates import FontSpec, LayoutConstants, LetterTypography, PageSpec, TypographySpec
from .variants import ResolvedTemplate, resolve_variant


__all__ = [
    # Composers
    'DocumentComposer',
    'CoverLetterComposer',
    'RenderedDocument',
    'suggest_filename',
    'split_closing',

    # Fonts
    'FontProvider',
    'FontFamily',
    'FontHandle',
    'BUILTIN_FAMILY',
    'get_font_provider',

    # Layout
    'TextMetrics',
    'wrap_text',
    'LayoutState',
    'SectionRenderer',
    'distribute_columns',
    'ResolvedTemplate',
    'resolve_variant',

    # Draw operations
    'Block',
    'PageSet',
    'RenderedPage',
    'TextOp',
    'RuleOp',
    'DocumentMetadata',
    'PdfSerializer',

    # Specs
    'PageSpec',
    'FontSpec',
    'TypographySpec',
    'LayoutConstants',
    'LetterTypography',
]


__version__ = '1.0.0'
