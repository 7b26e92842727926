"""
Internationalization (i18n) for CV labels.

Simple dict-based localization for section headers and field labels.
Supports en and tr with English fallback.

Usage:
    from cv_core.i18n import get_string, section_label
    label = get_string("present", "tr")               # "Günümüz"
    header = section_label(SectionKind.EXPERIENCE, "tr")  # "DENEYİM"
"""

from typing import Dict

from cv_core.models import SectionKind

# String tables keyed by (string_id, language_code)
STRINGS = {
    # Section headers
    "objective": {"en": "OBJECTIVE", "tr": "HEDEF"},
    "experience": {"en": "EXPERIENCE", "tr": "DENEYİM"},
    "education": {"en": "EDUCATION", "tr": "EĞİTİM"},
    "skills": {"en": "SKILLS", "tr": "BECERİLER"},
    "technical_skills": {"en": "TECHNICAL SKILLS", "tr": "TEKNİK BECERİLER"},
    "projects": {"en": "PROJECTS", "tr": "PROJELER"},
    "certificates": {"en": "CERTIFICATES", "tr": "SERTİFİKALAR"},
    "languages": {"en": "LANGUAGES", "tr": "DİLLER"},
    "communication": {"en": "COMMUNICATION", "tr": "İLETİŞİM"},
    "leadership": {"en": "LEADERSHIP", "tr": "LİDERLİK"},
    "references": {"en": "REFERENCES", "tr": "REFERANSLAR"},

    # Field labels
    "present": {"en": "Present", "tr": "Günümüz"},
    "grade": {"en": "GPA", "tr": "Not Ortalaması"},
    "technologies": {"en": "Technologies", "tr": "Teknolojiler"},
    "date_not_specified": {"en": "Date not specified", "tr": "Tarih belirtilmedi"},
    "curriculum_vitae": {"en": "Curriculum Vitae", "tr": "Özgeçmiş"},
    "cover_letter": {"en": "Cover Letter", "tr": "Ön Yazı"},

    # Skill categories
    "skill_frontend": {"en": "Frontend", "tr": "Frontend"},
    "skill_backend": {"en": "Backend", "tr": "Backend"},
    "skill_database": {"en": "Database", "tr": "Veritabanı"},
    "skill_tools": {"en": "Tools", "tr": "Araçlar"},
}

# Section kind -> header string id
_SECTION_STRING_IDS: Dict[SectionKind, str] = {
    SectionKind.OBJECTIVE: "objective",
    SectionKind.EXPERIENCE: "experience",
    SectionKind.EDUCATION: "education",
    SectionKind.SKILLS: "skills",
    SectionKind.PROJECTS: "projects",
    SectionKind.CERTIFICATES: "certificates",
    SectionKind.LANGUAGES: "languages",
    SectionKind.COMMUNICATION: "communication",
    SectionKind.LEADERSHIP: "leadership",
    SectionKind.REFERENCES: "references",
}


def get_string(string_id: str, lang: str = "en") -> str:
    """
    Get a localized string by ID and language code.

    Falls back to English if the language is not found,
    then to the string_id itself if no translation exists.
    """
    table = STRINGS.get(string_id)
    if not table:
        return string_id
    return table.get(lang, table.get("en", string_id))


def section_label(kind: SectionKind, lang: str = "en", categorized_skills: bool = False) -> str:
    """Header text for a section kind."""
    if kind is SectionKind.SKILLS and categorized_skills:
        return get_string("technical_skills", lang)
    return get_string(_SECTION_STRING_IDS[kind], lang)
