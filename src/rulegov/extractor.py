"""YAML rule extraction for governance rulesets.

Projects the ``rules`` mapping of a ruleset document into a flat list of Rule
entities in document order. Each rule keeps a pretty-printed YAML copy of its
own detail mapping so it can be displayed or re-evaluated independently.
"""

import logging
import uuid
from typing import Any

import yaml

from .errors import RuleExtractionFailed
from .models.ruleset import Rule, RuleSeverity, Ruleset, UnknownSeverityError

logger = logging.getLogger(__name__)

RULES_KEY = "rules"


class RuleExtractor:
    """Extracts Rule entities from YAML ruleset documents."""

    def extract(self, ruleset: Ruleset) -> list[Rule]:
        """Extract all rules declared in a ruleset.

        Args:
            ruleset: Ruleset whose content is expected to be a YAML document

        Returns:
            Rules in document key order; empty if the document declares no
            ``rules`` mapping

        Raises:
            RuleExtractionFailed: If the content is not decodable YAML or any
                rule is malformed. No partial list is returned.
        """
        try:
            text = ruleset.content.text()
        except UnicodeDecodeError as e:
            raise RuleExtractionFailed(f"content is not valid UTF-8: {e}") from e

        return self._extract_from_text(text)

    def _extract_from_text(self, text: str) -> list[Rule]:
        """Extract rules from ruleset document text."""
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise RuleExtractionFailed(f"content is not valid YAML: {e}") from e

        if not isinstance(document, dict):
            return []

        rules = document.get(RULES_KEY)
        if not isinstance(rules, dict):
            return []

        extracted = [self._build_rule(str(name), details) for name, details in rules.items()]
        logger.debug(f"Extracted {len(extracted)} rules")
        return extracted

    def _build_rule(self, name: str, details: Any) -> Rule:
        if not isinstance(details, dict):
            raise RuleExtractionFailed("rule details must be a mapping", rule_name=name)

        description = details.get("description")
        if description is not None and not isinstance(description, str):
            raise RuleExtractionFailed("description must be text", rule_name=name)

        if "severity" not in details:
            raise RuleExtractionFailed("severity is required", rule_name=name)
        try:
            severity = RuleSeverity.parse(details["severity"])
        except UnknownSeverityError as e:
            raise RuleExtractionFailed(str(e), rule_name=name) from e

        return Rule(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            severity=severity,
            content=serialize_rule_content(details, name),
        )


def serialize_rule_content(details: dict[str, Any], rule_name: str | None = None) -> str:
    """Render a rule's detail mapping as block-style YAML, keeping key order."""
    try:
        return yaml.safe_dump(
            details,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )
    except yaml.YAMLError as e:
        raise RuleExtractionFailed(f"rule content could not be serialized: {e}", rule_name=rule_name) from e
