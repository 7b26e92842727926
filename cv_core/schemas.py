"""
Request payloads for CV and cover letter rendering.

Pydantic models for the camelCase JSON produced by the CV editor and the
text generation service. They validate the upstream contract and convert
it into the immutable engine model; the engine itself does no business
validation.

Usage:
    payload = CvPayload.model_validate(json.loads(raw))
    pdf_bytes = DocumentComposer().render(payload.to_document(), payload.variant())
"""

from datetime import date
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from cv_core.i18n import get_string
from cv_core.models import (
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
from cv_core.pdf_engine.variants import normalize_language, normalize_style
from cv_core.utils.date_formatter import is_open_ended, parse_date


# technicalSkills keys in display order
SKILL_CATEGORIES = ("frontend", "backend", "database", "tools")


def _split_list(value: Union[str, List[str], None]) -> List[str]:
    """Accept a list or a comma separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [v.strip() for v in value if v and v.strip()]


def _check_period(start: Optional[str], end: Optional[str]) -> None:
    if not start or not end or is_open_ended(end):
        return
    start_date, end_date = parse_date(start), parse_date(end)
    if start_date and end_date and start_date > end_date:
        raise ValueError(f"start date {start} is after end date {end}")


class CamelModel(BaseModel):
    """camelCase JSON, snake_case attributes"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PersonalInfoPayload(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    job_title: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    medium: Optional[str] = None
    website: Optional[str] = None

    def to_model(self) -> PersonalInfo:
        name = " ".join(p.strip() for p in (self.first_name, self.last_name) if p and p.strip())
        location = ", ".join(p.strip() for p in (self.address, self.city) if p and p.strip())
        return PersonalInfo(
            name=name,
            email=self.email or None,
            phone=self.phone or None,
            location=location or None,
            job_title=self.job_title or None,
            linkedin=self.linkedin or None,
            github=self.github or None,
            medium=self.medium or None,
            website=self.website or None,
        )


class ExperiencePayload(CamelModel):
    job_title: str
    company: str = ""
    location: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    description: str = ""
    achievements: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return _split_list(value)

    @model_validator(mode="after")
    def check_period(self):
        if not self.is_current:
            _check_period(self.start_date, self.end_date)
        return self

    def to_model(self) -> ExperienceItem:
        return ExperienceItem(
            title=self.job_title,
            organization=self.company,
            location=self.location,
            start=self.start_date or None,
            end=self.end_date or None,
            is_current=self.is_current,
            description=self.description,
            achievements=list(self.achievements),
            technologies=list(self.technologies),
        )


class EducationPayload(CamelModel):
    university: str
    degree: str = ""
    field: str = ""
    location: str = ""
    start_date: Optional[str] = None
    graduation_date: Optional[str] = None
    grade: Optional[str] = None
    details: str = ""

    @model_validator(mode="after")
    def check_period(self):
        _check_period(self.start_date, self.graduation_date)
        return self

    def to_model(self) -> EducationItem:
        return EducationItem(
            institution=self.university,
            credential=self.degree,
            field_of_study=self.field,
            location=self.location,
            start=self.start_date or None,
            end=self.graduation_date or None,
            grade=self.grade or None,
            detail=self.details or "",
        )


class ProjectPayload(CamelModel):
    name: str
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    link: Optional[str] = None

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return _split_list(value)


class CertificatePayload(CamelModel):
    name: str
    issuer: str = ""
    date: Optional[str] = None


class LanguagePayload(CamelModel):
    language: str
    level: str = ""


class ReferencePayload(CamelModel):
    name: str
    company: str = ""
    contact: str = ""


class CvPayload(CamelModel):
    """Full CV request body"""
    personal_info: PersonalInfoPayload = Field(default_factory=PersonalInfoPayload)
    objective: str = ""
    experience: List[ExperiencePayload] = Field(default_factory=list)
    education: List[EducationPayload] = Field(default_factory=list)

    # Global version fields
    communication: Optional[str] = None
    leadership: Optional[str] = None

    # Turkey version fields
    technical_skills: Optional[Dict[str, List[str]]] = None
    skills: List[str] = Field(default_factory=list)
    projects: List[ProjectPayload] = Field(default_factory=list)
    certificates: List[CertificatePayload] = Field(default_factory=list)
    languages: List[LanguagePayload] = Field(default_factory=list)
    references: List[ReferencePayload] = Field(default_factory=list)

    # Version control
    version: Optional[str] = None
    language: Optional[str] = None

    def variant(self) -> TemplateVariant:
        return TemplateVariant(
            language=normalize_language(self.language),
            style=normalize_style(self.version),
        )

    def skill_groups(self, lang: str) -> List[SkillGroup]:
        groups = []
        technical = self.technical_skills or {}
        ordered = list(SKILL_CATEGORIES) + [k for k in technical if k not in SKILL_CATEGORIES]
        for key in ordered:
            skills = _split_list(technical.get(key))
            if skills:
                label = get_string(f"skill_{key}", lang) if key in SKILL_CATEGORIES else key.strip().title()
                groups.append(SkillGroup(label, skills))
        if self.skills:
            groups.append(SkillGroup("", _split_list(self.skills)))
        return groups

    def to_document(self) -> StructuredDocument:
        lang = self.variant().language
        sections = [
            ObjectiveSection(text=self.objective),
            ExperienceSection(items=[e.to_model() for e in self.experience]),
            EducationSection(items=[e.to_model() for e in self.education]),
            SkillSection(groups=self.skill_groups(lang)),
            ProjectSection(items=[
                ProjectItem(p.name, p.description, list(p.technologies), p.link) for p in self.projects
            ]),
            CertificateSection(items=[
                CertificateItem(c.name, c.issuer, c.date or None) for c in self.certificates
            ]),
            LanguageSection(items=[LanguageItem(item.language, item.level) for item in self.languages]),
            FreeTextSection(SectionKind.COMMUNICATION, self.communication or ""),
            FreeTextSection(SectionKind.LEADERSHIP, self.leadership or ""),
            ReferenceSection(items=[
                ReferenceItem(r.name, r.company, r.contact) for r in self.references
            ]),
        ]
        return StructuredDocument(
            personal_info=self.personal_info.to_model(),
            sections=[s for s in sections if not s.is_empty()],
        )


class CoverLetterPayload(CamelModel):
    """Cover letter request body"""
    content: str
    position_title: str = ""
    company_name: str = ""
    language: Optional[str] = None
    letter_date: Optional[date] = None

    def to_model(self) -> CoverLetter:
        return CoverLetter(
            content=self.content,
            position_title=self.position_title,
            company_name=self.company_name,
            language=normalize_language(self.language) if self.language else None,
            letter_date=self.letter_date,
        )
