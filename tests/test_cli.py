"""Tests for the Brand Brief CLI."""

import json
import subprocess
import sys
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ("BRAND_BRIEF_DOCS_TEMPLATE_ID", "BRAND_BRIEF_SHEETS_ID", "BRAND_BRIEF_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    return CliRunner()


@pytest.fixture
def answers(tmp_path, full_brief):
    path = tmp_path / "answers.json"
    path.write_text(json.dumps(full_brief, ensure_ascii=False), encoding="utf-8")
    return path


class TestCLI:
    """Test CLI entry points and basic functionality."""

    def test_version(self):
        result = subprocess.run(
            [sys.executable, "-m", "brand_brief.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "version" in result.stdout.lower()

    def test_help(self):
        result = subprocess.run(
            [sys.executable, "-m", "brand_brief.cli", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "Brand Brief" in result.stdout
        for command in ("init", "auth", "preview", "submit", "pdf", "steps"):
            assert command in result.stdout

    def test_init_help(self):
        result = subprocess.run(
            [sys.executable, "-m", "brand_brief.cli", "init", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "--dry-run" in result.stdout
        assert "--pdf" in result.stdout


class TestSteps:
    """Test the steps listing."""

    def test_lists_all_steps(self, runner):
        from brand_brief.cli import main

        result = runner.invoke(main, ["steps"])
        assert result.exit_code == 0
        for key in ("about_you", "services", "target_audience", "visual_style",
                    "branding", "content_production", "value_content"):
            assert key in result.output


class TestPreview:
    """Test payload preview from saved answers."""

    def test_json(self, runner, answers):
        from brand_brief.cli import main

        result = runner.invoke(main, ["preview", str(answers), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["project_name"] == "Luna Joyas"
        assert data["services"] == "Productos físicos, Talleres de orfebrería"

    def test_table(self, runner, answers):
        from brand_brief.cli import main

        result = runner.invoke(main, ["preview", str(answers)])
        assert result.exit_code == 0, result.output
        assert "Luna Joyas" in result.output

    def test_invalid_step(self, runner, tmp_path, full_brief):
        from brand_brief.cli import main

        full_brief["about_you"]["contact_email"] = "no-es-email"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(full_brief), encoding="utf-8")

        result = runner.invoke(main, ["preview", str(path)])
        assert result.exit_code == 14
        assert "about_you" in result.output

    def test_missing_step(self, runner, tmp_path, full_brief):
        from brand_brief.cli import main

        del full_brief["branding"]
        path = tmp_path / "partial.json"
        path.write_text(json.dumps(full_brief), encoding="utf-8")

        result = runner.invoke(main, ["preview", str(path)])
        assert result.exit_code == 15
        assert "branding" in result.output

    def test_not_json(self, runner, tmp_path):
        from brand_brief.cli import main

        path = tmp_path / "notes.json"
        path.write_text("not json", encoding="utf-8")

        result = runner.invoke(main, ["preview", str(path)])
        assert result.exit_code == 14


class TestSubmit:
    """Test non-interactive submission."""

    def test_dry_run(self, runner, answers):
        from brand_brief.cli import main

        result = runner.invoke(main, ["submit", str(answers), "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "Brief submitted" in result.output
        assert "Dry run" in result.output

    def test_missing_configuration(self, runner, answers):
        from brand_brief.cli import main

        result = runner.invoke(main, ["submit", str(answers)])
        assert result.exit_code == 10
        assert "docs_template_id" in result.output

    def test_submission_failure_exit_code(self, runner, answers):
        from brand_brief.cli import main
        from brand_brief.wizard.exceptions import SubmissionError

        failing = AsyncMock()
        failing.submit.side_effect = SubmissionError("Sheets down", service="sheets")
        with patch("brand_brief.cli._build_submitter", return_value=failing):
            result = runner.invoke(main, ["submit", str(answers)])

        assert result.exit_code == 16
        assert "No pudimos enviar" in result.output
        assert "Sheets down" in result.output


class TestPdf:
    """Test PDF rendering from saved answers."""

    def test_writes_pdf(self, runner, answers, tmp_path):
        from brand_brief.cli import main

        output = tmp_path / "brief.pdf"
        result = runner.invoke(main, ["pdf", str(answers), str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_bytes().startswith(b"%PDF")


class TestInit:
    """Test the interactive command wiring."""

    def test_dry_run_completion(self, runner, tmp_path):
        from brand_brief.cli import main
        from brand_brief.services import SubmissionResult
        from brand_brief.wizard import SubmitOutcome

        outcome = SubmitOutcome(ok=True, result=SubmissionResult(dry_run=True))
        save = tmp_path / "saved.json"
        with patch("brand_brief.wizard.WizardOrchestrator.run", new=AsyncMock(return_value=outcome)):
            result = runner.invoke(main, ["init", "--dry-run", "--save", str(save)])

        assert result.exit_code == 0, result.output
        assert "Brief enviado" in result.output
        assert json.loads(save.read_text(encoding="utf-8")) == {}

    def test_cancelled(self, runner):
        from brand_brief.cli import main

        with patch("brand_brief.wizard.WizardOrchestrator.run", new=AsyncMock(side_effect=KeyboardInterrupt)):
            result = runner.invoke(main, ["init", "--dry-run"])

        assert result.exit_code == 130
        assert "Nothing was sent" in result.output
