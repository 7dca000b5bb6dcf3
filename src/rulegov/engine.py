"""Governance validation engine.

Entry point for callers: validates ruleset well-formedness, extracts rules and
validates target documents against rulesets. The engine keeps no state between
calls; each operation decodes and submits its own content, so operations can
be called in any order and concurrently from multiple threads.
"""

import logging

from .config import RulegovConfig
from .errors import InvalidRulesetContent, InvalidRulesetContentType
from .evaluator.adapter import EvaluatorAdapter
from .evaluator.base import RuleEvaluator
from .evaluator.spectral import SpectralEvaluator
from .extractor import RuleExtractor
from .models.ruleset import Rule, RuleViolation, Ruleset

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Validates rulesets and target documents using a rule evaluator."""

    def __init__(self, evaluator: RuleEvaluator):
        self.extractor = RuleExtractor()
        self.adapter = EvaluatorAdapter(evaluator)

    def validate_ruleset_content(self, ruleset: Ruleset) -> None:
        """Check that a ruleset is well-formed.

        Raises:
            InvalidRulesetContent: The evaluator rejected the ruleset content
            InvalidRulesetContentType: The content is not a YAML/JSON document
            ResponseParseFailed: The evaluator result could not be parsed
        """
        try:
            ruleset_text = ruleset.content.text()
        except UnicodeDecodeError as e:
            raise InvalidRulesetContentType(ruleset.name) from e

        self.adapter.check_ruleset_well_formed(ruleset_text, ruleset)

    def extract_rules_from_ruleset(self, ruleset: Ruleset) -> list[Rule]:
        """Extract the rules declared in a ruleset.

        Raises:
            RuleExtractionFailed: The content is malformed or a rule is invalid
        """
        return self.extractor.extract(ruleset)

    def validate(self, target: str | bytes, ruleset: Ruleset) -> list[RuleViolation]:
        """Validate a target document against a ruleset.

        Args:
            target: Target document text (bytes are decoded as UTF-8)
            ruleset: Ruleset to validate against

        Returns:
            Violations in the evaluator's result order

        Raises:
            InvalidRulesetContent: The evaluator rejected the ruleset or target format
            EvaluationFailed: The evaluator failed unexpectedly
            ResponseParseFailed: The evaluator result could not be parsed
        """
        try:
            ruleset_text = ruleset.content.text()
        except UnicodeDecodeError as e:
            raise InvalidRulesetContent(ruleset.name) from e

        if isinstance(target, bytes):
            try:
                target = target.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidRulesetContent(ruleset.name) from e

        violations = self.adapter.evaluate(target, ruleset_text, ruleset)
        logger.info(f"Ruleset {ruleset.name} reported {len(violations)} violations")
        return violations


def create_engine(config: RulegovConfig) -> ValidationEngine:
    """Create an engine bound to the configured Spectral evaluator."""
    evaluator = SpectralEvaluator(
        command=config.evaluator.command,
        extra_args=config.evaluator.extra_args,
        timeout=config.evaluator.timeout,
    )
    return ValidationEngine(evaluator)
