"""Integration tests for the command-line interface."""

import json
from pathlib import Path

from click.testing import CliRunner

from impact_estimator.cli import cli

runner = CliRunner()


class TestAnalyzeCommand:
    """Tests for the impact-estimator command."""

    def test_text_output(self, make_project):
        root = make_project({"a.js": "", "b.js": "load('a.js');\n"})

        result = runner.invoke(cli, [str(root / "a.js"), "--root", str(root)])

        assert result.exit_code == 0
        assert "Impact Estimation" in result.stdout
        assert "b.js" in result.stdout
        assert "Risk Level: MEDIUM" in result.stdout

    def test_indonesian_output(self, make_project):
        root = make_project({"a.js": ""})

        result = runner.invoke(cli, [str(root / "a.js"), "--root", str(root), "--lang", "id"])

        assert result.exit_code == 0
        assert "Tingkat Risiko: RENDAH" in result.stdout
        assert "Tidak ditemukan pemanggilan" in result.stdout

    def test_json_output_with_symbol(self, widget_project: Path):
        result = runner.invoke(cli, [
            str(widget_project / "src" / "widget.js"), "render",
            "--root", str(widget_project), "--format", "json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["symbol"] == "render"
        assert data["declaring_context"] == "Widget"
        assert data["symbol_found_count"] == 1

    def test_markdown_to_file(self, make_project, temp_dir: Path):
        root = make_project({"a.js": "", "b.js": "a.js\n"})
        out = temp_dir / "report.md"

        result = runner.invoke(cli, [
            str(root / "a.js"), "--root", str(root), "-f", "markdown", "-o", str(out),
        ])

        assert result.exit_code == 0
        assert "## ⚠️ Risk Level: MEDIUM" in out.read_text(encoding="utf-8")

    def test_extension_and_exclude_options(self, make_project):
        root = make_project({"a.py": "", "b.py": "a.py\n", "gen/c.py": "a.py\n", "d.js": "a.py\n"})

        result = runner.invoke(cli, [
            str(root / "a.py"), "--root", str(root), "--ext", ".py", "--exclude", "gen",
            "--format", "json",
        ])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [entry["file"] for entry in data["impacts"]] == ["b.py"]

    def test_missing_target(self, temp_dir: Path):
        result = runner.invoke(cli, [str(temp_dir / "missing.js"), "--root", str(temp_dir)])

        assert result.exit_code != 0
        assert "Target file not found" in result.output
