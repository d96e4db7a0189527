"""Integration tests: discover, select, execute and accumulate the fixture suite."""
from __future__ import annotations

from pathlib import Path

import pytest

from SpecRunner.cli import EXIT_FAIL, EXIT_PASS, main
from SpecRunner.execution.engine import ExecutorEngine
from SpecRunner.execution.executor import StepStatus
from SpecRunner.pipeline.driver import Driver
from SpecRunner.pipeline.filesystem import LocalFileSystem


class TestFullPipeline:
    def test_all_scenarios(self, run_suite) -> None:
        result = run_suite()

        assert [f.name for f in result.features] == ["Login", "Checkout"]
        login, checkout = result.features
        assert (login.n_success, login.n_failure) == (3, 0)
        assert (checkout.n_success, checkout.n_failure) == (1, 1)
        assert not result.is_success

    def test_failing_step_is_reported_as_data(self, run_suite) -> None:
        checkout = run_suite().features[1]
        failed = checkout.result.scenarios[1]

        assert failed.scenario.name == "Pay with an expired card"
        statuses = [s.status for s in failed.steps]
        assert statuses == [
            StepStatus.SUCCESS,
            StepStatus.SUCCESS,
            StepStatus.SUCCESS,
            StepStatus.FAILED,
        ]
        assert "order was not confirmed" in failed.steps[-1].message

    def test_smoke_selection(self, run_suite) -> None:
        result = run_suite("@smoke")

        assert [(f.name, f.n_success, f.n_failure) for f in result.features] == [
            ("Login", 1, 0),
            ("Checkout", 1, 0),
        ]
        assert result.is_success

    def test_feature_tag_selects_whole_feature(self, run_suite) -> None:
        result = run_suite("@checkout")
        assert [f.name for f in result.features] == ["Checkout"]
        assert result.n_success + result.n_failure == 2

    def test_negation_excludes_slow_scenario(self, run_suite) -> None:
        result = run_suite("not @slow")
        assert result.n_success == 4
        assert result.n_failure == 0
        assert result.is_success

    def test_vacuous_features_are_absent(self, run_suite) -> None:
        result = run_suite("@report")
        assert result.features == ()
        assert result.n_success == 0
        assert result.n_failure == 0

    def test_or_across_features(self, run_suite) -> None:
        result = run_suite("@auth,@slow")
        assert [(f.name, f.n_success + f.n_failure) for f in result.features] == [
            ("Login", 3),
            ("Checkout", 1),
        ]

    def test_parse_failure_does_not_block_other_features(
        self, tmp_path: Path, steps_path: Path, features_path: Path
    ) -> None:
        (tmp_path / "a_broken.feature").write_text(
            "Feature: Broken\n  Scenario: S\n    Given x\n  Oops\n"
        )
        good = (features_path / "checkout.feature").read_text()
        (tmp_path / "b_checkout.feature").write_text(good)

        engine = ExecutorEngine()
        driver = Driver(LocalFileSystem(), engine)
        driver.read_step_definitions(str(steps_path))
        result = driver.run_features(str(tmp_path))

        (failure,) = result.parse_failures
        assert failure.feature_file.endswith("a_broken.feature")
        assert [f.name for f in result.features] == ["Checkout"]
        assert not result.is_success


class TestCli:
    def test_run_passes_with_selection(self, steps_path: Path, features_path: Path) -> None:
        assert main([
            "run", "--steps", str(steps_path), "--features", str(features_path),
            "--tags", "not @slow",
        ]) == EXIT_PASS

    def test_run_fails_without_selection(
        self, steps_path: Path, features_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SPECRUNNER_TAGS", raising=False)
        assert main([
            "run", "--steps", str(steps_path), "--features", str(features_path),
        ]) == EXIT_FAIL
