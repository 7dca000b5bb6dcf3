"""Shared fixtures for rulegov tests."""

import json
import logging

import pytest

from rulegov.evaluator.base import RuleEvaluator
from rulegov.models.ruleset import Ruleset

SAMPLE_RULESET = """\
rules:
  no-http-verbs-in-path:
    description: Paths must not contain HTTP verbs
    severity: WARN
    given: $.paths
    then:
      field: '@key'
      function: pattern
      functionOptions:
        notMatch: (get|post|put|delete)
  info-contact:
    description: Info object must have a contact
    severity: error
    given: $.info
    then:
      field: contact
      function: truthy
"""


class ScriptedEvaluator(RuleEvaluator):
    """Rule evaluator returning canned results or raising canned errors."""

    def __init__(self, ruleset_result=None, document_result=None):
        self.ruleset_result = ruleset_result
        self.document_result = document_result
        self.calls: list[tuple] = []

    def validate_ruleset(self, ruleset_text: str) -> str:
        self.calls.append(("validate_ruleset", ruleset_text))
        return self._respond(self.ruleset_result)

    def validate_document(self, target_text: str, ruleset_text: str) -> str:
        self.calls.append(("validate_document", target_text, ruleset_text))
        return self._respond(self.document_result)

    @staticmethod
    def _respond(result):
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, str):
            return result
        return json.dumps(result)


@pytest.fixture
def sample_ruleset():
    """Ruleset with two rules."""
    return Ruleset.from_text(SAMPLE_RULESET, name="api-guidelines", ruleset_id="rs-001")


@pytest.fixture
def scripted_evaluator():
    """Evaluator that passes ruleset checks and reports no findings."""
    return ScriptedEvaluator(ruleset_result={"passed": True}, document_result=[])


@pytest.fixture(autouse=True)
def reset_rulegov_logger():
    """Undo logging setup done by CLI commands so caplog sees records."""
    yield
    logger = logging.getLogger("rulegov")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
