"""Tests for cv_core.utils.title_formatter."""

import pytest

from cv_core.utils.title_formatter import (
    clean_filename,
    detect_language,
    fold_turkish,
    lower,
    sentence_case,
    upper,
)


class TestTurkishCasing:
    def test_upper(self):
        assert upper("istanbul", "tr") == "İSTANBUL"
        assert upper("ışık", "tr") == "IŞIK"
        assert upper("istanbul", "en") == "ISTANBUL"

    def test_lower(self):
        assert lower("IŞIK", "tr") == "ışık"
        assert lower("İZMİR", "tr") == "izmir"

    def test_sentence_case(self):
        assert sentence_case("YAZILIM MÜHENDİSİ", "tr") == "Yazılım mühendisi"
        assert sentence_case("software ENGINEER", "en") == "Software engineer"
        assert sentence_case("", "en") == ""

    def test_empty(self):
        assert upper("") == ""
        assert lower(None) == ""

    def test_fold_keeps_winansi_letters(self):
        assert fold_turkish("Şükrü Işık, Ağrı") == "Sükrü Isik, Agri"
        assert fold_turkish("Çiğdem Öztürk") == "Çigdem Öztürk"
        assert fold_turkish(None) == ""


class TestDetectLanguage:
    @pytest.mark.parametrize("text,expected", [
        ("Saygılarımla, Ayşe", "tr"),
        ("Bu pozisyon için başvuru", "tr"),
        ("I am applying for this position", "en"),
        ("12345", "tr"),
        ("", "tr"),
    ])
    def test_detection(self, text, expected):
        assert detect_language(text) == expected

    def test_dotted_capital_i_is_turkish(self):
        assert detect_language("İZMİR") == "tr"


class TestCleanFilename:
    def test_clean(self):
        assert clean_filename("Jane  Doe") == "Jane_Doe"
        assert clean_filename("Ayşe Yılmaz") == "Ay_e_Y_lmaz"
        assert clean_filename("  ") == ""
