"""Tests for cv_core.schemas payload conversion."""

from datetime import date

import pytest
from pydantic import ValidationError

from cv_core.models import (
    ExperienceSection,
    FreeTextSection,
    LanguageSection,
    ObjectiveSection,
    SectionKind,
    SkillSection,
)
from cv_core.schemas import CoverLetterPayload, CvPayload


@pytest.fixture
def payload():
    return {
        "personalInfo": {
            "firstName": "Ayşe",
            "lastName": "Yılmaz",
            "email": "ayse@example.com",
            "phone": "+90 555 000 00 00",
            "address": "Kadıköy",
            "city": "İstanbul",
            "linkedin": "linkedin.com/in/ayse",
        },
        "objective": "Backend geliştirici.",
        "experience": [{
            "jobTitle": "Yazılım Mühendisi",
            "company": "Acme",
            "location": "İstanbul",
            "startDate": "2020-01",
            "endDate": "2023-05",
            "isCurrent": False,
            "description": "Ödeme sistemleri.",
        }],
        "education": [{
            "university": "ODTÜ",
            "degree": "Lisans",
            "field": "Bilgisayar Mühendisliği",
            "location": "Ankara",
            "startDate": "2014",
            "graduationDate": "2019",
        }],
        "technicalSkills": {"backend": ["Python", "Go"], "tools": ["Docker"]},
        "projects": [{"name": "Ledger", "description": "Muhasebe", "technologies": "Python, PostgreSQL"}],
        "languages": [{"language": "İngilizce", "level": "C1"}],
        "communication": "",
        "version": "turkey",
        "language": "turkish",
    }


class TestCvPayload:
    def test_variant(self, payload):
        variant = CvPayload.model_validate(payload).variant()
        assert variant.language == "tr"
        assert variant.style == "turkey"

    def test_personal_info(self, payload):
        info = CvPayload.model_validate(payload).to_document().personal_info
        assert info.name == "Ayşe Yılmaz"
        assert info.location == "Kadıköy, İstanbul"
        assert info.github is None

    def test_empty_sections_dropped(self, payload):
        document = CvPayload.model_validate(payload).to_document()
        kinds = [s.kind for s in document.sections]
        assert SectionKind.COMMUNICATION not in kinds
        assert SectionKind.REFERENCES not in kinds
        assert isinstance(document.sections[0], ObjectiveSection)
        assert any(isinstance(s, ExperienceSection) for s in document.sections)
        assert any(isinstance(s, LanguageSection) for s in document.sections)

    def test_skill_groups_are_localized(self, payload):
        document = CvPayload.model_validate(payload).to_document()
        skills = [s for s in document.sections if isinstance(s, SkillSection)][0]
        assert [(g.category, g.skills) for g in skills.groups] == [
            ("Backend", ["Python", "Go"]),
            ("Araçlar", ["Docker"]),
        ]

    def test_comma_separated_technologies(self, payload):
        cv = CvPayload.model_validate(payload)
        assert cv.projects[0].technologies == ["Python", "PostgreSQL"]

    def test_start_after_end_rejected(self, payload):
        payload["experience"][0]["startDate"] = "2024-01"
        with pytest.raises(ValidationError):
            CvPayload.model_validate(payload)

    def test_current_role_skips_end_check(self, payload):
        payload["experience"][0].update({"startDate": "2024-01", "endDate": "2020-01", "isCurrent": True})
        cv = CvPayload.model_validate(payload)
        assert cv.experience[0].is_current

    def test_missing_required_field(self, payload):
        del payload["experience"][0]["jobTitle"]
        with pytest.raises(ValidationError):
            CvPayload.model_validate(payload)

    def test_free_text_kinds(self, payload):
        payload["leadership"] = "Led a team of six."
        document = CvPayload.model_validate(payload).to_document()
        free = [s for s in document.sections if isinstance(s, FreeTextSection)]
        assert [s.kind for s in free] == [SectionKind.LEADERSHIP]

    def test_defaults(self):
        cv = CvPayload.model_validate({})
        assert cv.variant().language == "en"
        assert cv.variant().style == "global"
        assert not cv.to_document().has_content()


class TestCoverLetterPayload:
    def test_to_model(self):
        letter = CoverLetterPayload.model_validate({
            "content": "Dear team,\nHello.",
            "positionTitle": "Engineer",
            "companyName": "Acme",
            "language": "ENGLISH",
            "letterDate": "2026-10-17",
        }).to_model()

        assert letter.language == "en"
        assert letter.letter_date == date(2026, 10, 17)
        assert letter.position_title == "Engineer"

    def test_language_optional(self):
        letter = CoverLetterPayload.model_validate({"content": "Merhaba"}).to_model()
        assert letter.language is None
