"""Tests for config.settings."""

from config.settings import BASE_DIR, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("CV_DEFAULT_LANGUAGE", "CV_DEFAULT_STYLE", "CV_FONT_DIRS", "CV_OUTPUT_DIR"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.default_language == "en"
        assert settings.default_style == "global"
        assert settings.font_dirs == []
        assert settings.get_output_dir() == BASE_DIR / "output"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CV_DEFAULT_LANGUAGE", "tr")
        monkeypatch.setenv("CV_FONT_DIRS", '["/opt/fonts"]')
        settings = Settings(_env_file=None)
        assert settings.default_language == "tr"
        assert settings.font_dirs == ["/opt/fonts"]

    def test_absolute_output_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CV_OUTPUT_DIR", str(tmp_path))
        assert Settings(_env_file=None).get_output_dir() == tmp_path
