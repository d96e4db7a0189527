"""Tag expressions: boolean predicates evaluated against a set of tags.

The set of node kinds is closed. ``matches`` is the only evaluator, so a new
kind of node is not usable until it is handled there.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Union


@dataclass(frozen=True)
class MatchAll:
    """Matches any tag set, including the empty one."""


@dataclass(frozen=True)
class Literal:
    """Matches a tag set that contains ``value``."""

    value: str


@dataclass(frozen=True)
class Negation:
    """Matches a tag set if and only if ``inner`` does not."""

    inner: TagExpression


@dataclass(frozen=True)
class Disjunction:
    """Matches a tag set if at least one option does.

    With no options it never matches.
    """

    options: tuple[TagExpression, ...] = ()


TagExpression = Union[MatchAll, Literal, Negation, Disjunction]

MATCH_ALL = MatchAll()


def _strip_negations(expression: TagExpression) -> tuple[int, TagExpression]:
    """Return the number of leading negations and the node beneath them."""
    depth = 0
    while isinstance(expression, Negation):
        depth += 1
        expression = expression.inner
    return depth, expression


def matches(expression: TagExpression, tags: AbstractSet[str]) -> bool:
    """Return True if ``tags`` satisfies ``expression``."""
    depth, expression = _strip_negations(expression)
    if isinstance(expression, MatchAll):
        result = True
    elif isinstance(expression, Literal):
        result = expression.value in tags
    elif isinstance(expression, Disjunction):
        result = any(matches(option, tags) for option in expression.options)
    else:
        raise TypeError(f"Unknown tag expression node: {expression!r}")
    return result if depth % 2 == 0 else not result


def describe(expression: TagExpression) -> str:
    """Render an expression tree as a compact, unambiguous string."""
    depth, expression = _strip_negations(expression)
    if isinstance(expression, MatchAll):
        text = "ALL"
    elif isinstance(expression, Literal):
        text = repr(expression.value)
    elif isinstance(expression, Disjunction):
        text = f"ANY({', '.join(describe(o) for o in expression.options)})"
    else:
        raise TypeError(f"Unknown tag expression node: {expression!r}")
    return "NOT(" * depth + text + ")" * depth
