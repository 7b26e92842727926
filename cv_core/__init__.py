"""
CV Core - CV and cover letter PDF rendering.

Usage:
    from cv_core import DocumentComposer, StructuredDocument, PersonalInfo

    document = StructuredDocument(personal_info=PersonalInfo(name="Jane Doe"))
    pdf_bytes = DocumentComposer().render(document)
"""

from .exceptions import (
    CvRenderError,
    EmptyDocumentError,
    FontNotFoundError,
    MeasurementError,
    SectionRenderError,
)
from .models import (
    CertificateItem,
    CertificateSection,
    CoverLetter,
    EducationItem,
    EducationSection,
    ExperienceItem,
    ExperienceSection,
    FreeTextSection,
    LanguageItem,
    LanguageSection,
    ObjectiveSection,
    PersonalInfo,
    ProjectItem,
    ProjectSection,
    ReferenceItem,
    ReferenceSection,
    SectionKind,
    SkillGroup,
    SkillSection,
    StructuredDocument,
    TemplateVariant,
)
from .pdf_engine import CoverLetterComposer, DocumentComposer, suggest_filename


__all__ = [
    # Rendering
    'DocumentComposer',
    'CoverLetterComposer',
    'suggest_filename',

    # Input model
    'StructuredDocument',
    'PersonalInfo',
    'TemplateVariant',
    'CoverLetter',
    'SectionKind',
    'ObjectiveSection',
    'ExperienceSection',
    'ExperienceItem',
    'EducationSection',
    'EducationItem',
    'SkillSection',
    'SkillGroup',
    'ProjectSection',
    'ProjectItem',
    'CertificateSection',
    'CertificateItem',
    'ReferenceSection',
    'ReferenceItem',
    'LanguageSection',
    'LanguageItem',
    'FreeTextSection',

    # Errors
    'CvRenderError',
    'FontNotFoundError',
    'MeasurementError',
    'SectionRenderError',
    'EmptyDocumentError',
]


__version__ = '1.0.0'
