from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Union


class StepKind(Enum):
    """Which of the Given/When/Then step families a step belongs to."""

    GIVEN = "given"
    WHEN = "when"
    THEN = "then"


@dataclass(frozen=True)
class Step:
    """A single step line of a scenario, e.g. ``Given a logged in user``."""

    kind: StepKind
    text: str
    keyword: str = ""


@dataclass(frozen=True)
class Scenario:
    """A named, tagged, ordered sequence of steps."""

    name: str
    tags: tuple[str, ...] = ()
    steps: tuple[Step, ...] = ()
    keyword: str = "Scenario"


@dataclass(frozen=True)
class Background:
    """Steps run before every scenario of a feature."""

    name: str = ""
    steps: tuple[Step, ...] = ()


@dataclass(frozen=True)
class FeatureHeader:
    name: str
    tags: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class Feature:
    """Domain entity: a named, tagged collection of scenarios under test."""

    header: FeatureHeader
    scenarios: tuple[Scenario, ...] = ()
    background: Background | None = None

    @property
    def name(self) -> str:
        return self.header.name

    def with_scenarios(self, scenarios: Iterable[Scenario]) -> Feature:
        """Return a copy of this feature holding ``scenarios`` instead."""
        return replace(self, scenarios=tuple(scenarios))


@dataclass(frozen=True)
class FeatureParseFailure:
    """Feature text that could not be structured into a Feature."""

    reason: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.reason
        return f"line {self.line}: {self.reason}"


FeatureParseResult = Union[Feature, FeatureParseFailure]
