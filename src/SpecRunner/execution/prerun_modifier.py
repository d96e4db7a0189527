"""Robot Framework pre-run modifier applying a tag expression to a suite tree."""
from __future__ import annotations

import logging

from robot.api import SuiteVisitor

from SpecRunner.selection.selector import parse_tag_selector

logger = logging.getLogger(__name__)


class TagSelectorModifier(SuiteVisitor):
    """PreRunModifier that keeps only tests matching a tag expression.

    Suites left without tests are removed, the same way a feature without
    selected scenarios is never run. Robot tags are compared verbatim, so
    ``smoke`` in the expression matches the tag ``smoke``.

    Usage CLI::

        robot --prerunmodifier SpecRunner.execution.prerun_modifier.TagSelectorModifier:smoke,auth tests/

    Usage programmatic:
        suite.visit(TagSelectorModifier('not slow'))
    """

    def __init__(self, *expression: str) -> None:
        # Robot splits modifier arguments on ':'; rejoin them.
        self._selector = parse_tag_selector(":".join(expression))
        self._stats = {"kept": 0, "removed": 0, "pruned_suites": 0}

    def start_suite(self, suite) -> None:  # type: ignore[override]
        selected = [t for t in suite.tests if self._selects(t)]
        removed = len(suite.tests) - len(selected)
        suite.tests = selected
        self._stats["kept"] += len(selected)
        self._stats["removed"] += removed
        if removed:
            logger.debug(
                "[SPECRUNNER] stage=select event=robot_tests_removed "
                "suite=%r removed=%d kept=%d",
                suite.name,
                removed,
                len(selected),
            )

    def end_suite(self, suite) -> None:  # type: ignore[override]
        children = [s for s in suite.suites if s.test_count > 0]
        self._stats["pruned_suites"] += len(suite.suites) - len(children)
        suite.suites = children

    def visit_test(self, test) -> None:  # type: ignore[override]
        # Tests are filtered as a list in start_suite.
        pass

    def _selects(self, test) -> bool:
        return self._selector.matches(str(tag) for tag in test.tags)

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)
