"""Parse tag filter text into a tag expression.

Grammar::

    selector    := blank                 -> MatchAll
                 | expression EOF
    expression  := "not " expression     -> Negation(expression)
                 | disjunction
    disjunction := term ("," term)*      -> Disjunction(Literal(term), ...)
    term        := one or more characters other than ",", not all blank

``not`` is only recognised as the leading prefix and negates everything after
it, so ``not @a,@b`` means "neither @a nor @b". Terms are used verbatim: no
whitespace is trimmed from them. There is no ``and`` and no grouping.
"""
from __future__ import annotations

import logging

from SpecRunner.pipeline.errors import TagExpressionError
from SpecRunner.selection.combinators import (
    Check,
    ExcludeChars,
    Failure,
    Keyword,
    Map,
    ParseCursor,
    ParseOutcome,
    Repeat,
    SeparatedBy,
    Success,
)
from SpecRunner.selection.expression import (
    MATCH_ALL,
    Disjunction,
    Literal,
    Negation,
    TagExpression,
)

logger = logging.getLogger(__name__)

NOT_PREFIX = "not "
OR_SEPARATOR = ","

_not_keyword = Keyword(NOT_PREFIX)

_term = Check(
    Map(Repeat(ExcludeChars(frozenset(OR_SEPARATOR)), minimum=1), "".join),
    lambda text: bool(text.strip()),
)

_disjunction = Map(
    SeparatedBy(_term, OR_SEPARATOR),
    lambda terms: Disjunction(tuple(Literal(t) for t in terms)),
)


def _expression(cursor: ParseCursor) -> ParseOutcome[TagExpression]:
    depth = 0
    while True:
        negated = _not_keyword(cursor)
        if isinstance(negated, Failure):
            break
        depth += 1
        cursor = negated.cursor

    outcome = _disjunction(cursor)
    if isinstance(outcome, Failure):
        return outcome
    expression: TagExpression = outcome.value
    for _ in range(depth):
        expression = Negation(expression)
    return Success(expression, outcome.cursor)


def parse_tag_expression(text: str) -> TagExpression:
    """Parse ``text`` into a TagExpression.

    Blank text selects everything. Raises TagExpressionError for an empty
    term or a ``not`` without an operand.
    """
    if not text.strip():
        return MATCH_ALL

    outcome = _expression(ParseCursor(text))
    if isinstance(outcome, Failure):
        raise TagExpressionError(
            text, outcome.cursor.offset, _describe_failure(outcome.cursor)
        )
    if not outcome.cursor.at_end:
        raise TagExpressionError(
            text, outcome.cursor.offset, "unexpected trailing input"
        )

    logger.debug(
        "[SPECRUNNER] stage=select event=tag_expression_parsed text=%r", text
    )
    return outcome.value


def _describe_failure(cursor: ParseCursor) -> str:
    if cursor.offset >= len(NOT_PREFIX) and cursor.source.startswith(
        NOT_PREFIX, cursor.offset - len(NOT_PREFIX)
    ):
        return "'not' requires an operand"
    return "expected a tag"
