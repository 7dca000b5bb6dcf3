"""rulegov - Governance ruleset validation engine.

rulegov validates YAML-authored governance rulesets, extracts their rules as
addressable entities and evaluates target documents (e.g. API specifications)
against them, reporting structured rule violations.
"""

__version__ = "0.1.0"
__author__ = "rulegov"
__description__ = "Governance ruleset validation engine"

from rulegov.engine import ValidationEngine
from rulegov.errors import GovernanceError
from rulegov.models import Rule, RuleSeverity, RuleViolation, Ruleset, RulesetContent

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "ValidationEngine",
    "GovernanceError",
    "Ruleset",
    "RulesetContent",
    "Rule",
    "RuleSeverity",
    "RuleViolation",
]
