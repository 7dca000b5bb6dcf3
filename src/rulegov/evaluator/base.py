"""Contract of the external rule evaluator."""

from abc import ABC, abstractmethod


class InvalidContentTypeError(Exception):
    """Raised by an evaluator when input is not YAML or JSON at all."""


class InvalidRulesetError(Exception):
    """Raised by an evaluator when it rejects a ruleset during evaluation."""


class RuleEvaluator(ABC):
    """Base class for rule evaluator bindings.

    Both entry points return raw JSON text. Implementations signal unusable
    input with InvalidContentTypeError or InvalidRulesetError; anything else
    they raise is treated as an unexpected evaluator failure.
    """

    @abstractmethod
    def validate_ruleset(self, ruleset_text: str) -> str:
        """Check a ruleset for well-formedness.

        Returns:
            JSON object ``{"passed": bool, "message": str}`` where message is
            present only when passed is false
        """
        pass

    @abstractmethod
    def validate_document(self, target_text: str, ruleset_text: str) -> str:
        """Evaluate a target document against a ruleset.

        Returns:
            JSON array of ``{"ruleName", "path", "message", "severity"}`` objects
        """
        pass
