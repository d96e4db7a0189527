"""Parser combinators used to build the tag expression grammar.

A combinator is any callable taking a ``ParseCursor`` and returning a
``Success`` or a ``Failure``. Combinators never raise; a failed match is a
``Failure`` carrying the cursor where matching stopped.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ParseCursor:
    """A position in ``source``. Offsets are 0-based; ``len(source)`` is eof."""

    source: str
    offset: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.offset <= len(self.source):
            raise ValueError(
                f"Offset {self.offset} out of range for source of length "
                f"{len(self.source)}"
            )

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    @property
    def current(self) -> str:
        return self.source[self.offset]

    @property
    def remaining(self) -> str:
        return self.source[self.offset:]

    def advance(self, count: int = 1) -> ParseCursor:
        return ParseCursor(self.source, self.offset + count)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    cursor: ParseCursor


@dataclass(frozen=True)
class Failure:
    cursor: ParseCursor


ParseOutcome = Union[Success[T], Failure]
Parser = Callable[[ParseCursor], "ParseOutcome[Any]"]


@dataclass(frozen=True)
class ExcludeChars:
    """Take a single character unless it is one of ``forbidden``."""

    forbidden: frozenset[str]

    def __call__(self, cursor: ParseCursor) -> ParseOutcome[str]:
        if cursor.at_end or cursor.current in self.forbidden:
            return Failure(cursor)
        return Success(cursor.current, cursor.advance())


@dataclass(frozen=True)
class Keyword:
    """Match ``text`` exactly at the cursor."""

    text: str

    def __call__(self, cursor: ParseCursor) -> ParseOutcome[str]:
        if cursor.source.startswith(self.text, cursor.offset):
            return Success(self.text, cursor.advance(len(self.text)))
        return Failure(cursor)


@dataclass(frozen=True)
class Repeat:
    """Apply ``inner`` while it succeeds, collecting its values.

    With the default ``minimum`` of zero this always succeeds.
    """

    inner: Parser
    minimum: int = 0

    def __call__(self, cursor: ParseCursor) -> ParseOutcome[tuple]:
        values = []
        current = cursor
        while True:
            outcome = self.inner(current)
            if isinstance(outcome, Failure):
                break
            values.append(outcome.value)
            if outcome.cursor == current:
                # An inner parser that consumes nothing would loop forever.
                break
            current = outcome.cursor
        if len(values) < self.minimum:
            return Failure(cursor)
        return Success(tuple(values), current)


@dataclass(frozen=True)
class Map:
    """Transform the value of a successful ``inner`` parse."""

    inner: Parser
    transform: Callable[[Any], Any]

    def __call__(self, cursor: ParseCursor) -> ParseOutcome[Any]:
        outcome = self.inner(cursor)
        if isinstance(outcome, Failure):
            return outcome
        return Success(self.transform(outcome.value), outcome.cursor)


@dataclass(frozen=True)
class Check:
    """Succeed only when ``predicate`` holds for the value of ``inner``."""

    inner: Parser
    predicate: Callable[[Any], bool]

    def __call__(self, cursor: ParseCursor) -> ParseOutcome[Any]:
        outcome = self.inner(cursor)
        if isinstance(outcome, Failure):
            return outcome
        if not self.predicate(outcome.value):
            return Failure(cursor)
        return outcome


@dataclass(frozen=True)
class SeparatedBy:
    """One or more ``inner`` values separated by the literal ``separator``."""

    inner: Parser
    separator: str

    def __call__(self, cursor: ParseCursor) -> ParseOutcome[tuple]:
        first = self.inner(cursor)
        if isinstance(first, Failure):
            return first
        values = [first.value]
        current = first.cursor
        separator = Keyword(self.separator)
        while True:
            sep = separator(current)
            if isinstance(sep, Failure):
                return Success(tuple(values), current)
            item = self.inner(sep.cursor)
            if isinstance(item, Failure):
                return item
            values.append(item.value)
            current = item.cursor


def single_tag_parser() -> Map:
    """Parse one tag token; tokens end at a parenthesis or a space."""
    return Map(Repeat(ExcludeChars(frozenset("() "))), "".join)
