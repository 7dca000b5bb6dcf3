"""Failure taxonomy for governance validation operations.

Every engine operation fails with a GovernanceError subclass. The error code
identifies the failure kind independently of the message text so that callers
(CLI, services) can map failures without string matching.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Governance failure codes with their message templates."""
    INVALID_RULESET_CONTENT = "INVALID_RULESET_CONTENT"
    INVALID_RULESET_CONTENT_DETAILED = "INVALID_RULESET_CONTENT_DETAILED"
    INVALID_RULESET_CONTENT_TYPE = "INVALID_RULESET_CONTENT_TYPE"
    RULE_EXTRACTION_FAILED = "RULE_EXTRACTION_FAILED"
    EVALUATION_FAILED = "EVALUATION_FAILED"
    RESPONSE_PARSE_FAILED = "RESPONSE_PARSE_FAILED"

    @property
    def template(self) -> str:
        return _TEMPLATES[self]


_TEMPLATES = {
    ErrorCode.INVALID_RULESET_CONTENT: "Invalid content in ruleset '{name}'",
    ErrorCode.INVALID_RULESET_CONTENT_DETAILED: "Invalid content in ruleset '{name}': {detail}",
    ErrorCode.INVALID_RULESET_CONTENT_TYPE: "Content of ruleset '{name}' is not a valid YAML ruleset",
    ErrorCode.RULE_EXTRACTION_FAILED: "Error while extracting rules from ruleset: {detail}",
    ErrorCode.EVALUATION_FAILED: "Error occurred while verifying governance compliance",
    ErrorCode.RESPONSE_PARSE_FAILED: "Error while parsing {detail} result from the rule evaluator",
}


class GovernanceError(Exception):
    """Base class for all caller-visible governance failures."""

    def __init__(self, code: ErrorCode, **params: str):
        self.code = code
        self.params = params
        super().__init__(code.template.format(**params))


class InvalidRulesetContent(GovernanceError):
    """Ruleset failed semantic validation by the rule evaluator."""

    def __init__(self, ruleset_name: str, detail: str | None = None):
        self.ruleset_name = ruleset_name
        self.detail = detail
        if detail:
            super().__init__(ErrorCode.INVALID_RULESET_CONTENT_DETAILED, name=ruleset_name, detail=detail)
        else:
            super().__init__(ErrorCode.INVALID_RULESET_CONTENT, name=ruleset_name)


class InvalidRulesetContentType(GovernanceError):
    """Ruleset content is not in the expected format at all."""

    def __init__(self, ruleset_name: str):
        self.ruleset_name = ruleset_name
        super().__init__(ErrorCode.INVALID_RULESET_CONTENT_TYPE, name=ruleset_name)


class RuleExtractionFailed(GovernanceError):
    """A rule could not be extracted from the ruleset document."""

    def __init__(self, detail: str, rule_name: str | None = None):
        self.rule_name = rule_name
        if rule_name is not None:
            detail = f"rule '{rule_name}': {detail}"
        super().__init__(ErrorCode.RULE_EXTRACTION_FAILED, detail=detail)


class EvaluationFailed(GovernanceError):
    """The rule evaluator raised an unanticipated error.

    The original exception is chained as ``__cause__`` for logging; it is
    not part of the message.
    """

    def __init__(self):
        super().__init__(ErrorCode.EVALUATION_FAILED)


class ResponseParseFailed(GovernanceError):
    """The rule evaluator returned a result that could not be parsed."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(ErrorCode.RESPONSE_PARSE_FAILED, detail=operation)
