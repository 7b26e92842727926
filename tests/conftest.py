"""Shared fixtures for the CV engine tests."""

import pytest

from cv_core.models import (
    ExperienceItem,
    ExperienceSection,
    ObjectiveSection,
    PersonalInfo,
    SkillGroup,
    SkillSection,
    StructuredDocument,
)
from cv_core.pdf_engine import (
    BUILTIN_FAMILY,
    FontProvider,
    PageSpec,
    SectionRenderer,
    TextMetrics,
    resolve_variant,
)


@pytest.fixture
def builtin_provider():
    """FontProvider that finds nothing, so every render uses the built-in family."""
    return FontProvider(search_paths=[])


@pytest.fixture
def page():
    return PageSpec.a4()


@pytest.fixture
def metrics():
    return TextMetrics(BUILTIN_FAMILY)


@pytest.fixture
def section_renderer(metrics, page):
    return SectionRenderer(metrics, page)


@pytest.fixture
def global_template():
    return resolve_variant()


@pytest.fixture
def personal_info():
    return PersonalInfo(
        name="Jane Doe",
        email="jane@example.com",
        phone="+1 555 0100",
        location="Berlin, Germany",
        job_title="Backend Engineer",
        linkedin="https://www.linkedin.com/in/janedoe",
        github="github.com/janedoe",
    )


@pytest.fixture
def sample_document(personal_info):
    return StructuredDocument(
        personal_info=personal_info,
        sections=[
            SkillSection(groups=[SkillGroup("Languages", ["Python", "Go", "SQL"])]),
            ExperienceSection(items=[
                ExperienceItem(
                    title="Senior Engineer",
                    organization="Acme",
                    location="Berlin",
                    start="2021-03",
                    is_current=True,
                    description="Built the billing platform.",
                ),
            ]),
            ObjectiveSection(text="Engineer focused on reliable data systems."),
        ],
    )
