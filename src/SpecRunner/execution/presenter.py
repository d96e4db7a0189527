"""Live progress reporting while features run."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from SpecRunner.execution.executor import ScenarioResult, StepResult
    from SpecRunner.shared.types import Feature, Scenario

logger = logging.getLogger("SpecRunner.progress")


@runtime_checkable
class RealTimePresenter(Protocol):
    def feature_started(self, feature: Feature) -> None: ...

    def scenario_started(self, scenario: Scenario) -> None: ...

    def step_finished(self, result: StepResult) -> None: ...

    def scenario_finished(self, result: ScenarioResult) -> None: ...


class QuietRealTimePresenter:
    """Presenter that shows nothing."""

    def feature_started(self, feature: Feature) -> None:
        pass

    def scenario_started(self, scenario: Scenario) -> None:
        pass

    def step_finished(self, result: StepResult) -> None:
        pass

    def scenario_finished(self, result: ScenarioResult) -> None:
        pass


class LoggingRealTimePresenter:
    """Presenter that reports progress through ``logging``.

    Feature and scenario progress is logged at INFO, individual steps at
    DEBUG, and step failures at WARNING with their message.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def feature_started(self, feature: Feature) -> None:
        self._log.info("Feature: %s", feature.name)

    def scenario_started(self, scenario: Scenario) -> None:
        self._log.info("  %s: %s", scenario.keyword, scenario.name)

    def step_finished(self, result: StepResult) -> None:
        if result.is_success:
            self._log.debug(
                "    %s%s ... %s",
                result.step.keyword,
                result.step.text,
                result.status.value,
            )
        else:
            self._log.warning(
                "    %s%s ... %s %s",
                result.step.keyword,
                result.step.text,
                result.status.value,
                result.message,
            )

    def scenario_finished(self, result: ScenarioResult) -> None:
        if result.hook_error:
            self._log.warning("    hook failed: %s", result.hook_error)
        self._log.info(
            "  => %s", "passed" if result.is_success else "failed"
        )
