"""Tests for cv_core.i18n localization module."""

import pytest

from cv_core.i18n import STRINGS, get_string, section_label
from cv_core.models import SectionKind


class TestGetString:
    """Tests for get_string()."""

    def test_english_strings(self):
        assert get_string("experience", "en") == "EXPERIENCE"
        assert get_string("present", "en") == "Present"

    def test_turkish_strings(self):
        assert get_string("experience", "tr") == "DENEYİM"
        assert get_string("present", "tr") == "Günümüz"
        assert get_string("grade", "tr") == "Not Ortalaması"

    def test_fallback_to_english(self):
        """Unknown language falls back to English."""
        assert get_string("education", "de") == "EDUCATION"

    def test_unknown_string_id(self):
        """Unknown string_id returns the id itself."""
        assert get_string("nonexistent_key", "en") == "nonexistent_key"

    def test_default_language_is_english(self):
        assert get_string("skills") == "SKILLS"


class TestSectionLabel:
    @pytest.mark.parametrize("kind", list(SectionKind))
    def test_every_kind_has_both_languages(self, kind):
        assert section_label(kind, "en")
        assert section_label(kind, "tr")

    def test_categorized_skills(self):
        assert section_label(SectionKind.SKILLS, "tr", categorized_skills=True) == "TEKNİK BECERİLER"
        assert section_label(SectionKind.SKILLS, "tr") == "BECERİLER"


class TestStringTable:
    def test_all_entries_translated(self):
        for string_id, table in STRINGS.items():
            assert set(table) == {"en", "tr"}, string_id
