"""Unit tests for the rulegov CLI."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from conftest import SAMPLE_RULESET, ScriptedEvaluator
from rulegov import __version__
from rulegov.cli import app
from rulegov.engine import ValidationEngine

runner = CliRunner()

FINDINGS = [
    {"ruleName": "no-http-verbs-in-path", "path": "$.paths./getUsers", "message": "Path contains HTTP verb", "severity": "warn"},
    {"ruleName": "info-contact", "path": "$.info", "message": "Missing contact", "severity": "error"},
]


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Directory with a ruleset, a target document and an empty config."""
    (tmp_path / "guidelines.yaml").write_text(SAMPLE_RULESET, encoding="utf-8")
    (tmp_path / "openapi.yaml").write_text("openapi: 3.0.0\ninfo: {title: t, version: '1'}\n", encoding="utf-8")
    (tmp_path / ".rulegov.json").write_text("{}", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _engine_with(evaluator):
    return patch("rulegov.cli.create_engine", return_value=ValidationEngine(evaluator))


class TestGlobalOptions:
    """Test version and log level options."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_invalid_log_level(self, workspace):
        result = runner.invoke(app, ["--log-level", "loud", "rules", "guidelines.yaml"])
        assert result.exit_code == 1
        assert "Invalid log level" in result.stdout


class TestCheckCommand:
    """Test the check command."""

    def test_valid_ruleset(self, workspace):
        with _engine_with(ScriptedEvaluator(ruleset_result={"passed": True})):
            result = runner.invoke(app, ["check", "guidelines.yaml"])

        assert result.exit_code == 0
        assert "Ruleset 'guidelines' is valid" in result.stdout

    def test_invalid_ruleset(self, workspace):
        evaluator = ScriptedEvaluator(ruleset_result={"passed": False, "message": "severity is required"})
        with _engine_with(evaluator):
            result = runner.invoke(app, ["check", "guidelines.yaml", "--name", "API Rules"])

        assert result.exit_code == 2
        assert "severity is required" in result.stdout
        assert "API Rules" in result.stdout

    def test_missing_file(self, workspace):
        result = runner.invoke(app, ["check", "missing.yaml"])
        assert result.exit_code != 0


class TestRulesCommand:
    """Test the rules command."""

    def test_table(self, workspace):
        result = runner.invoke(app, ["rules", "guidelines.yaml"])

        assert result.exit_code == 0
        assert "info-contact" in result.stdout
        assert "Total: 2 rules" in result.stdout

    def test_json(self, workspace):
        result = runner.invoke(app, ["rules", "guidelines.yaml", "--format", "json"])

        assert result.exit_code == 0
        rules = json.loads(result.stdout)
        assert [rule["name"] for rule in rules] == ["no-http-verbs-in-path", "info-contact"]
        assert rules[1]["severity"] == "error"

    def test_no_rules(self, workspace):
        (workspace / "empty.yaml").write_text("extends: spectral:oas\n", encoding="utf-8")
        result = runner.invoke(app, ["rules", "empty.yaml"])

        assert result.exit_code == 0
        assert "No rules found" in result.stdout

    def test_extraction_failure(self, workspace):
        (workspace / "bad.yaml").write_text("rules:\n  r1:\n    severity: CRITICAL\n", encoding="utf-8")
        result = runner.invoke(app, ["rules", "bad.yaml"])

        assert result.exit_code == 2
        assert "CRITICAL" in result.stdout

    def test_markdown_not_supported(self, workspace):
        result = runner.invoke(app, ["rules", "guidelines.yaml", "--format", "markdown"])
        assert result.exit_code == 1
        assert "Invalid format" in result.stdout


class TestValidateCommand:
    """Test the validate command."""

    def test_json_output(self, workspace):
        with _engine_with(ScriptedEvaluator(document_result=FINDINGS)):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml", "-f", "json", "--id", "rs-9"])

        assert result.exit_code == 1  # error-severity violation present
        violations = json.loads(result.stdout)
        assert [v["ruleName"] for v in violations] == ["no-http-verbs-in-path", "info-contact"]
        assert {v["rulesetId"] for v in violations} == {"rs-9"}

    def test_warnings_only_exit_zero(self, workspace):
        with _engine_with(ScriptedEvaluator(document_result=FINDINGS[:1])):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml"])

        assert result.exit_code == 0
        assert "Total: 1 violations" in result.stdout

    def test_no_violations(self, workspace):
        with _engine_with(ScriptedEvaluator(document_result=[])):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml"])

        assert result.exit_code == 0
        assert "No violations" in result.stdout

    def test_markdown_output(self, workspace):
        with _engine_with(ScriptedEvaluator(document_result=FINDINGS)):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml", "-f", "markdown"])

        assert "# Validation Report" in result.stdout
        assert "**ERROR** info-contact: Missing contact" in result.stdout

    def test_evaluator_failure(self, workspace):
        with _engine_with(ScriptedEvaluator(document_result=OSError("spectral: command not found"))):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml"])

        assert result.exit_code == 2
        assert "verifying governance compliance" in result.stdout

    def test_format_from_config(self, workspace):
        (workspace / ".rulegov.json").write_text(json.dumps({"output": {"format": "json"}}), encoding="utf-8")
        with _engine_with(ScriptedEvaluator(document_result=[])):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_invalid_config(self, workspace):
        (workspace / ".rulegov.json").write_text("{broken", encoding="utf-8")
        result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml"])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout


class TestBracketedNames:
    """Test that names resembling rich markup are printed verbatim."""

    def test_rules_table(self, workspace):
        (workspace / "tags.yaml").write_text("rules:\n  '[/red]':\n    severity: warn\n", encoding="utf-8")
        result = runner.invoke(app, ["rules", "tags.yaml"])

        assert result.exit_code == 0
        assert "[/red]" in result.stdout

    def test_validate_table(self, workspace):
        finding = {"ruleName": "[/bold]", "path": "$.info", "message": "m", "severity": "warn"}
        with _engine_with(ScriptedEvaluator(document_result=[finding])):
            result = runner.invoke(app, ["validate", "openapi.yaml", "guidelines.yaml"])

        assert result.exit_code == 0
        assert "[/bold]" in result.stdout

    def test_check_ruleset_name(self, workspace):
        with _engine_with(ScriptedEvaluator(ruleset_result={"passed": True})):
            result = runner.invoke(app, ["check", "guidelines.yaml", "--name", "[/x]"])

        assert result.exit_code == 0
        assert "Ruleset '[/x]' is valid" in result.stdout


class TestCheckCommandEvaluatorUnavailable:
    """Test check command when the evaluator cannot run."""

    def test_unexpected_evaluator_error(self, workspace):
        with _engine_with(ScriptedEvaluator(ruleset_result=FileNotFoundError("spectral"))):
            result = runner.invoke(app, ["check", "guidelines.yaml"])

        assert result.exit_code == 1
        assert "Rule evaluator failed" in result.stdout
