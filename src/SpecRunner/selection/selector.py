"""Select which features and scenarios to run, based on their tags."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from SpecRunner.selection.expression import MATCH_ALL, TagExpression, matches
from SpecRunner.selection.parser import parse_tag_expression

if TYPE_CHECKING:
    from collections.abc import Iterable

    from SpecRunner.shared.types import Feature, Scenario


@dataclass(frozen=True)
class TagSelector:
    """Wraps the root tag expression used to filter a suite.

    Usage::

        selector = parse_tag_selector("@smoke,@auth")
        filtered = selector.filter_feature(feature)
    """

    expression: TagExpression = MATCH_ALL

    def matches(self, tags: Iterable[str]) -> bool:
        return matches(self.expression, frozenset(tags))

    def selects(self, feature: Feature, scenario: Scenario) -> bool:
        """Check a scenario against its own tags plus its feature's tags."""
        return self.matches((*feature.header.tags, *scenario.tags))

    def filter_feature(self, feature: Feature) -> Feature:
        """Return a copy of ``feature`` holding only the selected scenarios.

        Order is preserved. The result may have no scenarios at all; deciding
        what to do with such a feature is up to the caller.
        """
        return feature.with_scenarios(
            scenario
            for scenario in feature.scenarios
            if self.selects(feature, scenario)
        )


ALL_SCENARIOS = TagSelector(MATCH_ALL)


def parse_tag_selector(text: str) -> TagSelector:
    """Parse filter text into a TagSelector.

    ``"@foo"`` selects items tagged @foo, ``"@foo,@bar"`` items tagged with
    either, and ``"not @bar"`` items without @bar. Blank text selects all.
    """
    return TagSelector(parse_tag_expression(text))
