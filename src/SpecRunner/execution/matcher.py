"""Resolve scenario steps to the step definitions implementing them."""
from __future__ import annotations

import itertools
import logging
from typing import Protocol, runtime_checkable

from SpecRunner.execution.steps import StepDefinition, collecting
from SpecRunner.pipeline.errors import (
    NoMatchingStepDefinition,
    NonUniqueStepDefinition,
    StepDefinitionError,
)
from SpecRunner.shared.types import Step

logger = logging.getLogger(__name__)

_module_counter = itertools.count()


@runtime_checkable
class StepDefinitionMatcher(Protocol):
    """Protocol for anything that can find the definition of a step.

    Implementations raise NoMatchingStepDefinition when nothing matches and
    NonUniqueStepDefinition when more than one definition does.
    """

    def find_step_definition(self, step: Step) -> StepDefinition: ...


class StepRegistry:
    """Step definitions keyed on step kind and exact step text."""

    def __init__(self) -> None:
        self._definitions: dict[tuple, list[StepDefinition]] = {}

    def add(self, definition: StepDefinition) -> None:
        key = (definition.kind, definition.text)
        self._definitions.setdefault(key, []).append(definition)

    def __len__(self) -> int:
        return sum(len(defs) for defs in self._definitions.values())

    def find_step_definition(self, step: Step) -> StepDefinition:
        candidates = self._definitions.get((step.kind, step.text), [])
        if not candidates:
            raise NoMatchingStepDefinition(
                f"No step definition for {step.kind.value} {step.text!r}"
            )
        if len(candidates) > 1:
            locations = ", ".join(d.location for d in candidates)
            raise NonUniqueStepDefinition(
                f"Multiple step definitions for {step.kind.value} "
                f"{step.text!r}: {locations}"
            )
        return candidates[0]


class FromSourceStepDefinitionMatcher(StepRegistry):
    """Step definitions loaded by executing step definition source text.

    The source is compiled under ``filename`` so tracebacks and step
    locations point at the original file.
    """

    def __init__(self, source: str, filename: str = "<steps>") -> None:
        super().__init__()
        self.filename = filename
        namespace = {
            "__name__": f"specrunner_steps_{next(_module_counter)}",
            "__file__": filename,
        }
        try:
            code = compile(source, filename, "exec")
            with collecting(self):
                exec(code, namespace)  # noqa: S102
        except StepDefinitionError:
            raise
        except Exception as exc:
            raise StepDefinitionError(
                f"Failed to load step definitions from {filename}: {exc}"
            ) from exc

        logger.debug(
            "[SPECRUNNER] stage=load event=step_definitions_loaded "
            "file=%s count=%d",
            filename,
            len(self),
        )


class CompositeStepDefinitionMatcher:
    """Searches several matchers; a step must match in exactly one place."""

    def __init__(self, *matchers: StepDefinitionMatcher) -> None:
        self._matchers: list[StepDefinitionMatcher] = list(matchers)

    def add_matcher(self, matcher: StepDefinitionMatcher) -> None:
        self._matchers.append(matcher)

    @property
    def matchers(self) -> tuple[StepDefinitionMatcher, ...]:
        return tuple(self._matchers)

    def find_step_definition(self, step: Step) -> StepDefinition:
        found: list[StepDefinition] = []
        for matcher in self._matchers:
            try:
                found.append(matcher.find_step_definition(step))
            except NoMatchingStepDefinition:
                continue
        if not found:
            raise NoMatchingStepDefinition(
                f"No step definition for {step.kind.value} {step.text!r}"
            )
        if len(found) > 1:
            locations = ", ".join(d.location for d in found)
            raise NonUniqueStepDefinition(
                f"Multiple step definitions for {step.kind.value} "
                f"{step.text!r}: {locations}"
            )
        return found[0]
