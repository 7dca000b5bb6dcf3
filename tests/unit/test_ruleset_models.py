"""Unit tests for ruleset content models."""

import pytest
from pydantic import ValidationError

from rulegov.models.ruleset import (
    RuleSeverity,
    RuleViolation,
    Ruleset,
    RulesetContent,
    RulesetContentType,
    UnknownContentTypeError,
    UnknownSeverityError,
)


class TestRuleSeverity:
    """Test severity parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("ERROR", RuleSeverity.ERROR),
        ("warn", RuleSeverity.WARN),
        ("Info", RuleSeverity.INFO),
        (" warn ", RuleSeverity.WARN),
    ])
    def test_parse_case_insensitive(self, text, expected):
        assert RuleSeverity.parse(text) is expected

    @pytest.mark.parametrize("text", ["CRITICAL", "warning", "", None, 0])
    def test_parse_unknown_fails(self, text):
        with pytest.raises(UnknownSeverityError):
            RuleSeverity.parse(text)

    def test_unknown_severity_is_value_error(self):
        with pytest.raises(ValueError, match="CRITICAL"):
            RuleSeverity.parse("CRITICAL")


class TestRulesetContentType:
    """Test content type parsing."""

    def test_parse(self):
        assert RulesetContentType.parse("YAML_RULESET") is RulesetContentType.YAML_RULESET

    def test_parse_unknown_fails(self):
        with pytest.raises(UnknownContentTypeError):
            RulesetContentType.parse("json_schema")


class TestRuleset:
    """Test Ruleset and RulesetContent models."""

    def test_from_text(self):
        ruleset = Ruleset.from_text("rules: {}\n", name="empty", ruleset_id="rs-1")

        assert ruleset.id == "rs-1"
        assert ruleset.name == "empty"
        assert ruleset.content.content == b"rules: {}\n"
        assert ruleset.content.content_type is RulesetContentType.YAML_RULESET
        assert ruleset.content.text() == "rules: {}\n"

    def test_from_text_generates_id(self):
        first = Ruleset.from_text("rules: {}\n", name="a")
        second = Ruleset.from_text("rules: {}\n", name="a")
        assert first.id != second.id

    def test_immutable(self):
        ruleset = Ruleset.from_text("rules: {}\n", name="a")
        with pytest.raises(ValidationError):
            ruleset.name = "b"

    def test_invalid_utf8_decoding_fails(self):
        content = RulesetContent(content=b"\xff\xfe rules")
        with pytest.raises(UnicodeDecodeError):
            content.text()


class TestRuleViolation:
    """Test RuleViolation model."""

    def test_aliases(self):
        violation = RuleViolation(
            ruleName="info-contact",
            violatedPath="$.info",
            ruleMessage="Info object must have a contact",
            severity=RuleSeverity.ERROR,
            rulesetId="rs-1",
        )

        assert violation.rule_name == "info-contact"
        assert violation.model_dump(by_alias=True, mode="json")["severity"] == "error"

    def test_string_representation(self):
        violation = RuleViolation(
            rule_name="info-contact",
            violated_path="$.info",
            rule_message="Missing contact",
            severity=RuleSeverity.WARN,
            ruleset_id="rs-1",
        )

        assert str(violation) == "[WARN] info-contact: Missing contact at $.info"
