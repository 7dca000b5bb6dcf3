"""Rule evaluator binding for the Spectral command line linter.

Runs ``spectral lint`` in a subprocess against temporary copies of the ruleset
and target document and converts Spectral's JSON output into the evaluator
result protocol consumed by EvaluatorAdapter.
"""

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any

import yaml

from .base import InvalidContentTypeError, InvalidRulesetError, RuleEvaluator

logger = logging.getLogger(__name__)

# Spectral exit codes
EXIT_OK = 0
EXIT_LINT_FAILURES = 1
EXIT_RULESET_ERROR = 2

# Spectral numeric severities: error, warn, info, hint
SEVERITY_NAMES = {0: "error", 1: "warn", 2: "info", 3: "info"}

RULESET_FILE = ".spectral.yaml"
DOCUMENT_FILE = "document.yaml"
EMPTY_DOCUMENT = "{}\n"


class SpectralEvaluator(RuleEvaluator):
    """Evaluates rulesets with the Spectral CLI."""

    def __init__(self, command: list[str] | None = None, extra_args: list[str] | None = None,
                 timeout: float | None = None):
        self.command = command or ["spectral"]
        self.extra_args = extra_args or []
        self.timeout = timeout

    def validate_ruleset(self, ruleset_text: str) -> str:
        _require_mapping(ruleset_text, "ruleset")

        # Spectral loads and validates the ruleset before linting, so an
        # empty document exercises the ruleset without producing findings.
        result = self._lint(EMPTY_DOCUMENT, ruleset_text)
        if result.returncode == EXIT_RULESET_ERROR:
            message = (result.stderr or result.stdout).strip() or "Ruleset rejected by Spectral"
            return json.dumps({"passed": False, "message": message})

        self._check_exit_code(result)
        return json.dumps({"passed": True})

    def validate_document(self, target_text: str, ruleset_text: str) -> str:
        _require_mapping(target_text, "target document")
        _require_mapping(ruleset_text, "ruleset")

        result = self._lint(target_text, ruleset_text)
        if result.returncode == EXIT_RULESET_ERROR:
            raise InvalidRulesetError((result.stderr or result.stdout).strip())

        self._check_exit_code(result)
        output = result.stdout.strip()
        results = json.loads(output) if output else []
        return json.dumps([to_finding(item) for item in results])

    def _lint(self, document_text: str, ruleset_text: str) -> subprocess.CompletedProcess:
        with tempfile.TemporaryDirectory(prefix="rulegov-") as work_dir:
            ruleset_path = Path(work_dir) / RULESET_FILE
            document_path = Path(work_dir) / DOCUMENT_FILE
            ruleset_path.write_text(ruleset_text, encoding="utf-8")
            document_path.write_text(document_text, encoding="utf-8")

            args = [
                *self.command, "lint", str(document_path),
                "--ruleset", str(ruleset_path),
                "--format", "json",
                "--quiet",
                *self.extra_args,
            ]
            logger.debug(f"Running {' '.join(args)}")
            return subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=work_dir,
            )

    def _check_exit_code(self, result: subprocess.CompletedProcess) -> None:
        if result.returncode not in (EXIT_OK, EXIT_LINT_FAILURES):
            raise RuntimeError(
                f"Spectral exited with code {result.returncode}: {result.stderr.strip()}"
            )


def to_finding(item: dict[str, Any]) -> dict[str, str]:
    """Convert one Spectral result into an evaluator finding."""
    return {
        "ruleName": item["code"],
        "path": format_path(item.get("path", [])),
        "message": item["message"],
        "severity": SEVERITY_NAMES[item["severity"]],
    }


def format_path(segments: list[Any]) -> str:
    """Render Spectral path segments as ``$.seg1.seg2``."""
    return ".".join(["$", *(str(segment) for segment in segments)])


def _require_mapping(text: str, what: str) -> None:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidContentTypeError(f"The {what} is not valid YAML or JSON: {e}") from e

    if not isinstance(document, dict):
        raise InvalidContentTypeError(f"The {what} must be a YAML or JSON object")
