"""Adapter between the validation engine and a rule evaluator.

Serializes calls into the evaluator, parses its JSON results into typed records
and maps its failure signals onto the governance failure taxonomy:

- ruleset check: ``passed: false`` -> InvalidRulesetContent (with message),
  InvalidContentTypeError -> InvalidRulesetContentType
- document evaluation: InvalidRulesetError / InvalidContentTypeError ->
  InvalidRulesetContent, any other exception -> EvaluationFailed
- unparseable evaluator results -> ResponseParseFailed
"""

import json
import logging
from typing import Any

from ..errors import (
    EvaluationFailed,
    InvalidRulesetContent,
    InvalidRulesetContentType,
    ResponseParseFailed,
)
from ..models.ruleset import RuleSeverity, RuleViolation, Ruleset
from .base import InvalidContentTypeError, InvalidRulesetError, RuleEvaluator

logger = logging.getLogger(__name__)

FINDING_FIELDS = ("ruleName", "path", "message", "severity")


class EvaluatorAdapter:
    """Typed boundary around a RuleEvaluator."""

    def __init__(self, evaluator: RuleEvaluator):
        self.evaluator = evaluator

    def check_ruleset_well_formed(self, ruleset_text: str, ruleset: Ruleset) -> None:
        """Check ruleset well-formedness with the evaluator.

        Args:
            ruleset_text: Decoded ruleset document
            ruleset: Ruleset the text belongs to, used for failure reporting

        Raises:
            InvalidRulesetContent: Evaluator reported ``passed: false``
            InvalidRulesetContentType: Evaluator rejected the input format
            ResponseParseFailed: Evaluator result could not be parsed
        """
        try:
            result_json = self.evaluator.validate_ruleset(ruleset_text)
        except InvalidContentTypeError as e:
            raise InvalidRulesetContentType(ruleset.name) from e

        try:
            passed, message = _parse_check_result(result_json)
        except (ValueError, TypeError) as e:
            logger.error("Error while parsing ruleset validation result JSON string", exc_info=True)
            raise ResponseParseFailed("ruleset validation") from e

        if not passed:
            raise InvalidRulesetContent(ruleset.name, message)

    def evaluate(self, target_text: str, ruleset_text: str, ruleset: Ruleset) -> list[RuleViolation]:
        """Evaluate a target document and map the findings to violations.

        Every violation carries the identifier of ``ruleset``.

        Raises:
            InvalidRulesetContent: Evaluator rejected the ruleset or the target format
            EvaluationFailed: Evaluator raised an unexpected error
            ResponseParseFailed: Evaluator result could not be parsed
        """
        try:
            result_json = self.evaluator.validate_document(target_text, ruleset_text)
        except (InvalidRulesetError, InvalidContentTypeError) as e:
            raise InvalidRulesetContent(ruleset.name) from e
        except Exception as e:
            logger.error("Error occurred while verifying governance compliance", exc_info=True)
            raise EvaluationFailed() from e

        logger.debug(f"Validation success against ruleset {ruleset.name} ({ruleset.id})")

        try:
            return _parse_findings(result_json, ruleset.id)
        except (ValueError, TypeError) as e:
            logger.error("Error while parsing validation result JSON string", exc_info=True)
            raise ResponseParseFailed("document validation") from e


def _parse_check_result(result_json: str) -> tuple[bool, str | None]:
    node = json.loads(result_json)
    if not isinstance(node, dict):
        raise ValueError(f"Expected JSON object, got {type(node).__name__}")

    passed = node.get("passed")
    if not isinstance(passed, bool):
        raise ValueError(f"Expected boolean 'passed' field, got {passed!r}")

    message = node.get("message")
    return passed, None if message is None else str(message)


def _parse_findings(result_json: str, ruleset_id: str) -> list[RuleViolation]:
    nodes = json.loads(result_json)
    if not isinstance(nodes, list):
        raise ValueError(f"Expected JSON array, got {type(nodes).__name__}")

    return [_to_violation(node, ruleset_id) for node in nodes]


def _to_violation(node: Any, ruleset_id: str) -> RuleViolation:
    if not isinstance(node, dict):
        raise ValueError(f"Expected finding object, got {type(node).__name__}")

    missing = [name for name in FINDING_FIELDS if node.get(name) is None]
    if missing:
        raise ValueError(f"Finding is missing fields: {', '.join(missing)}")

    return RuleViolation(
        rule_name=str(node["ruleName"]),
        violated_path=str(node["path"]),
        rule_message=str(node["message"]),
        severity=RuleSeverity.parse(node["severity"]),
        ruleset_id=ruleset_id,
    )
