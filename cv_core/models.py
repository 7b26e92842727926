"""
Data models for the CV rendering engine.
All models use frozen dataclasses; a render call never mutates its input.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, List, Optional, Union


# A period bound may arrive as an ISO-ish string ("2021", "2021-06") or a date
PeriodValue = Union[str, date, None]


class SectionKind(Enum):
    """Logical section kinds, one per section layout rule"""
    OBJECTIVE = "objective"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATES = "certificates"
    LANGUAGES = "languages"
    COMMUNICATION = "communication"
    LEADERSHIP = "leadership"
    REFERENCES = "references"


class Language(Enum):
    """Supported document languages"""
    ENGLISH = "en"
    TURKISH = "tr"


class TemplateStyle(Enum):
    """Regional CV conventions"""
    GLOBAL = "global"
    TURKEY = "turkey"


@dataclass(frozen=True)
class PersonalInfo:
    """Name plus optional contact fields"""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    job_title: Optional[str] = None

    # Profile links
    linkedin: Optional[str] = None
    github: Optional[str] = None
    medium: Optional[str] = None
    website: Optional[str] = None

    def has_content(self) -> bool:
        return bool(self.name and self.name.strip())


@dataclass(frozen=True)
class ExperienceItem:
    """One work-experience entry"""
    title: str
    organization: str = ""
    location: str = ""
    start: PeriodValue = None
    end: PeriodValue = None
    is_current: bool = False
    description: str = ""
    achievements: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class EducationItem:
    """One education entry"""
    institution: str
    credential: str = ""
    field_of_study: str = ""
    location: str = ""
    start: PeriodValue = None
    end: PeriodValue = None
    grade: Optional[str] = None
    detail: str = ""


@dataclass(frozen=True)
class SkillGroup:
    """Category label plus ordered skill names"""
    category: str
    skills: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CertificateItem:
    name: str
    issuer: str = ""
    date: PeriodValue = None


@dataclass(frozen=True)
class ProjectItem:
    name: str
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    link: Optional[str] = None


@dataclass(frozen=True)
class ReferenceItem:
    name: str
    organization: str = ""
    contact: str = ""


@dataclass(frozen=True)
class LanguageItem:
    language: str
    level: str = ""


# ---------------------------------------------------------------------------
# Sections (tagged variants)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Section:
    """Base for all section variants"""
    kind: ClassVar[SectionKind]

    def is_empty(self) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class ObjectiveSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.OBJECTIVE
    text: str = ""

    def is_empty(self) -> bool:
        return not (self.text and self.text.strip())


@dataclass(frozen=True)
class ExperienceSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.EXPERIENCE
    items: List[ExperienceItem] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class EducationSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.EDUCATION
    items: List[EducationItem] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class SkillSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.SKILLS
    groups: List[SkillGroup] = field(default_factory=list)

    def all_skills(self) -> List[str]:
        """Flatten groups into one ordered list, dropping blanks"""
        return [s.strip() for g in self.groups for s in g.skills if s and s.strip()]

    def is_empty(self) -> bool:
        return not self.all_skills()


@dataclass(frozen=True)
class CertificateSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.CERTIFICATES
    items: List[CertificateItem] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class ProjectSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.PROJECTS
    items: List[ProjectItem] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class ReferenceSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.REFERENCES
    items: List[ReferenceItem] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class LanguageSection(Section):
    kind: ClassVar[SectionKind] = SectionKind.LANGUAGES
    items: List[LanguageItem] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class FreeTextSection(Section):
    """Narrative section (communication, leadership)"""
    text_kind: SectionKind = SectionKind.COMMUNICATION
    text: str = ""

    @property
    def kind(self) -> SectionKind:  # type: ignore[override]
        return self.text_kind

    def is_empty(self) -> bool:
        return not (self.text and self.text.strip())


@dataclass(frozen=True)
class StructuredDocument:
    """Root input of a CV render call"""
    personal_info: Optional[PersonalInfo] = None
    sections: List[Section] = field(default_factory=list)

    def has_content(self) -> bool:
        if self.personal_info is not None and self.personal_info.has_content():
            return True
        return any(not s.is_empty() for s in self.sections)


@dataclass(frozen=True)
class TemplateVariant:
    """(language, style) pair; values are normalised by the resolver"""
    language: str = Language.ENGLISH.value
    style: str = TemplateStyle.GLOBAL.value


@dataclass(frozen=True)
class CoverLetter:
    """Input of a cover-letter render call"""
    content: str
    position_title: str = ""
    company_name: str = ""
    language: Optional[str] = None
    letter_date: Optional[date] = None
