"""Models for governance rulesets, their rules and rule violations."""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UnknownSeverityError(ValueError):
    """Raised when text does not name a known rule severity."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unknown rule severity: {value!r}")


class UnknownContentTypeError(ValueError):
    """Raised when text does not name a known ruleset content type."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unknown ruleset content type: {value!r}")


class RuleSeverity(str, Enum):
    """Severity of a governance rule."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"

    @classmethod
    def parse(cls, value: object) -> "RuleSeverity":
        """Parse a severity token case-insensitively.

        Args:
            value: Free-text severity, e.g. ``"WARN"`` or ``"error"``

        Returns:
            Matching RuleSeverity

        Raises:
            UnknownSeverityError: If value is not text or names no severity
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownSeverityError(value)
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownSeverityError(value) from None


class RulesetContentType(str, Enum):
    """Declared format of raw ruleset content."""
    YAML_RULESET = "yaml_ruleset"

    @classmethod
    def parse(cls, value: object) -> "RulesetContentType":
        """Parse a content type token case-insensitively."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownContentTypeError(value)
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownContentTypeError(value) from None


class RulesetContent(BaseModel):
    """Raw ruleset document bytes plus their declared content type."""
    content: bytes
    content_type: RulesetContentType = Field(alias="contentType", default=RulesetContentType.YAML_RULESET)

    def text(self) -> str:
        """Decode the content as UTF-8 (raises UnicodeDecodeError when invalid)."""
        return self.content.decode("utf-8")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Ruleset(BaseModel):
    """A named ruleset owning exactly one RulesetContent."""
    id: str
    name: str
    content: RulesetContent = Field(alias="rulesetContent")

    @classmethod
    def from_text(cls, text: str, name: str, ruleset_id: str | None = None) -> "Ruleset":
        """Build a YAML ruleset from document text.

        A fresh UUID is used when no identifier is given.
        """
        return cls(
            id=ruleset_id or str(uuid.uuid4()),
            name=name,
            content=RulesetContent(content=text.encode("utf-8")),
        )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Rule(BaseModel):
    """A single rule extracted from a ruleset's ``rules`` mapping."""
    id: str  # Generated per extraction call, not derived from content
    name: str  # Key within the ruleset's rules mapping
    description: str | None = None
    severity: RuleSeverity
    content: str  # Pretty-printed YAML of the rule's own detail mapping

    model_config = ConfigDict(frozen=True)


class RuleViolation(BaseModel):
    """One finding of a target document failing a rule."""
    rule_name: str = Field(alias="ruleName")
    violated_path: str = Field(alias="violatedPath")
    rule_message: str = Field(alias="ruleMessage")
    severity: RuleSeverity
    ruleset_id: str = Field(alias="rulesetId")

    def __str__(self) -> str:
        location = f" at {self.violated_path}" if self.violated_path else ""
        return f"[{self.severity.value.upper()}] {self.rule_name}: {self.rule_message}{location}"

    model_config = ConfigDict(frozen=True, populate_by_name=True)
