"""Decorators for writing step definitions.

Step definition files look like::

    from SpecRunner.execution.steps import given, then

    @given("a logged in user")
    def _(context):
        context.user = login()

    @then("the dashboard is shown")
    def _(context):
        assert context.user.sees_dashboard()

Decorated functions are registered into whichever registry is active via
``collecting``; loading a file outside of that context is an error.
"""
from __future__ import annotations

import contextlib
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterator

from SpecRunner.pipeline.errors import StepDefinitionError
from SpecRunner.shared.types import StepKind

if TYPE_CHECKING:
    from SpecRunner.execution.matcher import StepRegistry

StepFunction = Callable[[Any], Any]

_active_registry: ContextVar[StepRegistry | None] = ContextVar(
    "active_step_registry", default=None
)


@dataclass(frozen=True)
class StepDefinition:
    """A step implementation bound to a (kind, text) pair."""

    kind: StepKind
    text: str
    func: StepFunction
    location: str = ""


@contextlib.contextmanager
def collecting(registry: StepRegistry) -> Iterator[StepRegistry]:
    """Route step decorators used inside the block into ``registry``."""
    token = _active_registry.set(registry)
    try:
        yield registry
    finally:
        _active_registry.reset(token)


def _location(func: StepFunction) -> str:
    code = getattr(func, "__code__", None)
    if code is None:
        return ""
    return f"{code.co_filename}:{code.co_firstlineno}"


def _step_decorator(kind: StepKind) -> Callable[[str], Callable[[StepFunction], StepFunction]]:
    def decorator_factory(text: str) -> Callable[[StepFunction], StepFunction]:
        def decorator(func: StepFunction) -> StepFunction:
            registry = _active_registry.get()
            if registry is None:
                raise StepDefinitionError(
                    f"Step {kind.value} {text!r} defined outside of a step "
                    "definition load"
                )
            if not callable(func):
                raise StepDefinitionError(
                    f"Step {kind.value} {text!r} is not callable"
                )
            registry.add(StepDefinition(kind, text, func, _location(func)))
            return func

        return decorator

    return decorator_factory


given = _step_decorator(StepKind.GIVEN)
when = _step_decorator(StepKind.WHEN)
then = _step_decorator(StepKind.THEN)
