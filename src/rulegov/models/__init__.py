"""Pydantic data models for rulesets, rules and violations."""

from rulegov.models.ruleset import (
    Rule,
    RuleSeverity,
    RuleViolation,
    Ruleset,
    RulesetContent,
    RulesetContentType,
    UnknownContentTypeError,
    UnknownSeverityError,
)

__all__ = [
    "Ruleset",
    "RulesetContent",
    "RulesetContentType",
    "Rule",
    "RuleSeverity",
    "RuleViolation",
    "UnknownSeverityError",
    "UnknownContentTypeError",
]
