"""Selection bounded context: tag expressions and scenario filtering."""

from SpecRunner.selection.expression import (
    MATCH_ALL,
    Disjunction,
    Literal,
    MatchAll,
    Negation,
    TagExpression,
    matches,
)
from SpecRunner.selection.parser import parse_tag_expression
from SpecRunner.selection.selector import (
    ALL_SCENARIOS,
    TagSelector,
    parse_tag_selector,
)

__all__ = [
    "ALL_SCENARIOS",
    "Disjunction",
    "Literal",
    "MATCH_ALL",
    "MatchAll",
    "Negation",
    "TagExpression",
    "TagSelector",
    "matches",
    "parse_tag_expression",
    "parse_tag_selector",
]
