"""Rule evaluator boundary.

The rule evaluator interprets ruleset documents against target documents. It is
an external collaborator behind the RuleEvaluator contract; EvaluatorAdapter
translates its raw JSON results and failure signals into typed records and the
governance failure taxonomy.
"""

from .adapter import EvaluatorAdapter
from .base import InvalidContentTypeError, InvalidRulesetError, RuleEvaluator
from .spectral import SpectralEvaluator

__all__ = [
    "EvaluatorAdapter",
    "RuleEvaluator",
    "InvalidContentTypeError",
    "InvalidRulesetError",
    "SpectralEvaluator",
]
