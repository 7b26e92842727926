"""
Template variant resolution.

A TemplateVariant is a (language, style) pair. Language picks label
text and date formatting; style picks which optional sections appear,
their field order and a few layout switches. Pure data lookup: nothing
here knows about pages or measurement.

Usage:
    resolved = resolve_variant(TemplateVariant(language="tr", style="turkey"))
    resolved.section_header_label(SectionKind.EXPERIENCE)  # "DENEYİM"
    resolved.dates.period("2020-01", None)                 # "Oca 2020 – Günümüz"
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from cv_core.i18n import section_label
from cv_core.models import Language, SectionKind, TemplateStyle, TemplateVariant
from cv_core.utils.date_formatter import DateFormatter


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = Language.ENGLISH.value
DEFAULT_STYLE = TemplateStyle.GLOBAL.value

LANGUAGE_ALIASES = {
    "en": "en", "eng": "en", "english": "en", "en-us": "en", "en-gb": "en",
    "tr": "tr", "tur": "tr", "turkish": "tr", "tr-tr": "tr", "türkçe": "tr",
}

STYLE_ALIASES = {
    "global": "global", "international": "global", "neutral": "global",
    "turkey": "turkey", "tr": "turkey", "turkish": "turkey", "türkiye": "turkey",
}

# Fixed priority order; styles select a subset of it
CANONICAL_ORDER: Tuple[SectionKind, ...] = (
    SectionKind.OBJECTIVE,
    SectionKind.EXPERIENCE,
    SectionKind.EDUCATION,
    SectionKind.SKILLS,
    SectionKind.PROJECTS,
    SectionKind.CERTIFICATES,
    SectionKind.LANGUAGES,
    SectionKind.COMMUNICATION,
    SectionKind.LEADERSHIP,
    SectionKind.REFERENCES,
)

STYLE_SECTIONS = {
    "global": frozenset({
        SectionKind.OBJECTIVE, SectionKind.EXPERIENCE, SectionKind.EDUCATION,
        SectionKind.SKILLS, SectionKind.COMMUNICATION, SectionKind.LEADERSHIP,
        SectionKind.REFERENCES,
    }),
    "turkey": frozenset({
        SectionKind.OBJECTIVE, SectionKind.EXPERIENCE, SectionKind.EDUCATION,
        SectionKind.SKILLS, SectionKind.PROJECTS, SectionKind.CERTIFICATES,
        SectionKind.LANGUAGES, SectionKind.REFERENCES,
    }),
}

# Rows of each item, top to bottom. "period" only appears where the
# style puts dates on their own row instead of right-aligned.
FIELD_ORDER = {
    "global": {
        SectionKind.EXPERIENCE: ("title", "organization", "description", "achievements", "technologies"),
        SectionKind.EDUCATION: ("credential", "institution", "grade", "detail"),
        SectionKind.PROJECTS: ("name", "description", "link"),
        SectionKind.CERTIFICATES: ("name", "issuer"),
        SectionKind.REFERENCES: ("name", "organization_contact"),
        SectionKind.LANGUAGES: ("language_level",),
    },
    "turkey": {
        SectionKind.EXPERIENCE: ("title", "organization", "period", "description", "achievements", "technologies"),
        SectionKind.EDUCATION: ("credential", "institution", "period", "grade", "detail"),
        SectionKind.PROJECTS: ("name", "description", "link"),
        SectionKind.CERTIFICATES: ("name", "issuer"),
        SectionKind.REFERENCES: ("name", "organization_contact"),
        SectionKind.LANGUAGES: ("language_level",),
    },
}

DATE_POSITION = {"global": "right", "turkey": "line"}
SKILL_LAYOUT = {"global": "grid", "turkey": "categorized"}


@dataclass(frozen=True)
class ResolvedTemplate:
    """Everything the renderer needs to know about a variant"""
    language: str
    style: str
    labels: Dict[SectionKind, str] = field(default_factory=dict)
    section_order: Tuple[SectionKind, ...] = ()
    field_order: Dict[SectionKind, Tuple[str, ...]] = field(default_factory=dict)
    date_position: str = "right"
    skill_layout: str = "grid"
    dates: DateFormatter = field(default_factory=DateFormatter)

    def section_header_label(self, kind: SectionKind) -> str:
        return self.labels[kind]

    def includes(self, kind: SectionKind) -> bool:
        return kind in self.section_order

    def fields(self, kind: SectionKind) -> Tuple[str, ...]:
        return self.field_order.get(kind, ())

    @property
    def dates_right_aligned(self) -> bool:
        return self.date_position == "right"


def normalize_language(language: Optional[str]) -> str:
    key = (language or "").strip().lower()
    resolved = LANGUAGE_ALIASES.get(key)
    if resolved is None:
        logger.debug(f"Unknown language {language!r}, using {DEFAULT_LANGUAGE}")
        return DEFAULT_LANGUAGE
    return resolved


def normalize_style(style: Optional[str]) -> str:
    key = (style or "").strip().lower()
    resolved = STYLE_ALIASES.get(key)
    if resolved is None:
        logger.debug(f"Unknown style {style!r}, using {DEFAULT_STYLE}")
        return DEFAULT_STYLE
    return resolved


def resolve_variant(variant: Optional[TemplateVariant] = None) -> ResolvedTemplate:
    """
    Resolve labels, section inclusion, field order and date formatting.

    Unknown languages fall back to English, unknown styles to global.
    """
    variant = variant or TemplateVariant()
    language = normalize_language(variant.language)
    style = normalize_style(variant.style)
    categorized = SKILL_LAYOUT[style] == "categorized"

    return ResolvedTemplate(
        language=language,
        style=style,
        labels={
            kind: section_label(kind, language, categorized_skills=categorized)
            for kind in CANONICAL_ORDER
        },
        section_order=tuple(k for k in CANONICAL_ORDER if k in STYLE_SECTIONS[style]),
        field_order=dict(FIELD_ORDER[style]),
        date_position=DATE_POSITION[style],
        skill_layout=SKILL_LAYOUT[style],
        dates=DateFormatter(language),
    )
