"""
Integration tests for the render_cv command-line script.
"""

import json

import pytest

from scripts.render_cv import main

# Skip if reportlab not available
pytest.importorskip("reportlab")


CV_PAYLOAD = {
    "personalInfo": {"firstName": "Jane", "lastName": "Doe", "email": "jane@example.com"},
    "objective": "Engineer focused on reliable data systems.",
    "experience": [{"jobTitle": "Senior Engineer", "company": "Acme", "startDate": "2021-03", "isCurrent": True}],
    "skills": ["Python", "Go", "SQL"],
    "version": "global",
    "language": "en",
}


@pytest.fixture
def write_json(tmp_path):
    def _write(payload, name="input.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write


class TestRenderCli:
    def test_renders_cv(self, write_json, tmp_path):
        output = tmp_path / "cv.pdf"
        assert main([str(write_json(CV_PAYLOAD)), "-o", str(output)]) == 0
        assert output.read_bytes().startswith(b"%PDF")

    def test_style_flag(self, write_json, tmp_path):
        output = tmp_path / "out" / "cv_tr.pdf"
        code = main([str(write_json(CV_PAYLOAD)), "-o", str(output), "--language", "tr", "--style", "turkey"])
        assert code == 0
        assert output.is_file()

    def test_default_output_name(self, write_json, tmp_path, monkeypatch):
        monkeypatch.setenv("CV_OUTPUT_DIR", str(tmp_path / "pdfs"))
        assert main([str(write_json(CV_PAYLOAD))]) == 0
        assert (tmp_path / "pdfs" / "Jane_Doe_Resume_Global.pdf").is_file()

    def test_cover_letter(self, write_json, tmp_path):
        payload = {
            "content": "Dear team,\nI am applying for the role.\nBest regards,\nJane Doe",
            "positionTitle": "engineer",
            "companyName": "acme",
            "language": "en",
        }
        output = tmp_path / "letter.pdf"
        assert main([str(write_json(payload)), "--cover-letter", "-o", str(output)]) == 0
        assert output.read_bytes().startswith(b"%PDF")

    def test_invalid_payload(self, write_json, tmp_path):
        payload = {"experience": [{"company": "Acme"}]}
        assert main([str(write_json(payload)), "-o", str(tmp_path / "x.pdf")]) == 1
        assert not (tmp_path / "x.pdf").exists()

    def test_empty_document(self, write_json, tmp_path):
        assert main([str(write_json({})), "-o", str(tmp_path / "x.pdf")]) == 1

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == 1

    def test_show_config(self, capsys, monkeypatch):
        monkeypatch.setenv("CV_DEFAULT_LANGUAGE", "tr")
        assert main(["--show-config"]) == 0
        out = capsys.readouterr().out
        assert "CONFIGURATION" in out
        assert "Language:        tr" in out

    def test_input_required_without_show_config(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2
