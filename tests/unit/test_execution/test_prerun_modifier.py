"""Tests for the Robot Framework tag selection pre-run modifier."""
from __future__ import annotations

from pathlib import Path

import pytest
from robot.api import TestSuite

from SpecRunner.execution.prerun_modifier import TagSelectorModifier
from SpecRunner.pipeline.errors import TagExpressionError

SAMPLE_ROBOT = Path(__file__).resolve().parents[2] / "fixtures" / "sample.robot"


def _visit(*expression: str) -> tuple[TestSuite, TagSelectorModifier]:
    suite = TestSuite.from_file_system(str(SAMPLE_ROBOT))
    modifier = TagSelectorModifier(*expression)
    suite.visit(modifier)
    return suite, modifier


class TestTagSelectorModifier:
    def test_keeps_tests_with_tag(self) -> None:
        suite, _ = _visit("smoke")
        assert [t.name for t in suite.tests] == [
            "Login With Valid Credentials",
            "Search Products By Name",
        ]

    def test_or_expression(self) -> None:
        suite, _ = _visit("search,report")
        assert [t.name for t in suite.tests] == [
            "Search Products By Name",
            "Export Report As CSV",
        ]

    def test_not_expression(self) -> None:
        suite, _ = _visit("not auth")
        assert [t.name for t in suite.tests] == [
            "Search Products By Name",
            "Export Report As CSV",
            "Untagged Housekeeping",
        ]

    def test_blank_expression_keeps_everything(self) -> None:
        suite, modifier = _visit("")
        assert len(suite.tests) == 5
        assert modifier.stats == {"kept": 5, "removed": 0, "pruned_suites": 0}

    def test_stats_track_kept_and_removed(self) -> None:
        _, modifier = _visit("auth")
        assert modifier.stats["kept"] == 2
        assert modifier.stats["removed"] == 3

    def test_no_match_removes_all_tests(self) -> None:
        suite, _ = _visit("nonexistent")
        assert len(suite.tests) == 0

    def test_prunes_empty_child_suites(self, tmp_path: Path) -> None:
        (tmp_path / "a.robot").write_text(
            "*** Test Cases ***\nA\n    [Tags]    keep\n    Log    a\n"
        )
        (tmp_path / "b.robot").write_text(
            "*** Test Cases ***\nB\n    [Tags]    other\n    Log    b\n"
        )
        suite = TestSuite.from_file_system(str(tmp_path))
        modifier = TagSelectorModifier("keep")
        suite.visit(modifier)

        assert [s.name for s in suite.suites] == ["A"]
        assert suite.test_count == 1
        assert modifier.stats == {"kept": 1, "removed": 1, "pruned_suites": 1}

    def test_colon_split_arguments_are_rejoined(self) -> None:
        suite = TestSuite.from_file_system(str(SAMPLE_ROBOT))
        suite.tests[0].tags.add("env:prod")
        suite.visit(TagSelectorModifier("env", "prod"))
        assert [t.name for t in suite.tests] == ["Login With Valid Credentials"]

    def test_malformed_expression_is_rejected(self) -> None:
        with pytest.raises(TagExpressionError):
            TagSelectorModifier("smoke,")
