"""Custom exception hierarchy for the feature runner.

Anything that stops a run from proceeding is raised as one of these.
Scenario and step failures are not exceptions; they are recorded as data.
"""
from __future__ import annotations


class SpecRunnerError(Exception):
    """Base exception for the feature runner."""


class TagExpressionError(SpecRunnerError, ValueError):
    """Raised when a tag filter expression cannot be parsed."""

    def __init__(self, text: str, offset: int, reason: str) -> None:
        self.text = text
        self.offset = offset
        self.reason = reason
        super().__init__(
            f"Invalid tag expression {text!r} at offset {offset}: {reason}"
        )


class DiscoveryError(SpecRunnerError):
    """Raised when step or feature files cannot be found or read."""


class StepDefinitionError(SpecRunnerError):
    """Raised when step definition code cannot be loaded."""


class StepMatchError(SpecRunnerError):
    """Base for failures to resolve a step to exactly one definition."""


class NoMatchingStepDefinition(StepMatchError):
    """Raised when no step definition matches a step."""


class NonUniqueStepDefinition(StepMatchError):
    """Raised when more than one step definition matches a step."""
