"""Execute the scenarios of a feature and collect their outcomes."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from types import SimpleNamespace
from typing import TYPE_CHECKING

from SpecRunner.execution.presenter import QuietRealTimePresenter
from SpecRunner.pipeline.errors import (
    NoMatchingStepDefinition,
    NonUniqueStepDefinition,
)

if TYPE_CHECKING:
    from SpecRunner.execution.matcher import StepDefinitionMatcher
    from SpecRunner.execution.presenter import RealTimePresenter
    from SpecRunner.shared.types import Feature, Scenario, Step

logger = logging.getLogger(__name__)


class StepStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"
    UNDEFINED = "undefined"
    AMBIGUOUS = "ambiguous"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StepResult:
    step: Step
    status: StepStatus
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.status is StepStatus.SUCCESS


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario: one result per step, plus any hook failure."""

    scenario: Scenario
    steps: tuple[StepResult, ...]
    hook_error: str = ""

    @property
    def is_success(self) -> bool:
        return not self.hook_error and all(s.is_success for s in self.steps)


@dataclass(frozen=True)
class FeatureResult:
    """Aggregate of the scenario outcomes of one feature."""

    feature: Feature
    scenarios: tuple[ScenarioResult, ...]

    @property
    def n_success(self) -> int:
        return sum(1 for s in self.scenarios if s.is_success)

    @property
    def n_failure(self) -> int:
        return len(self.scenarios) - self.n_success

    @property
    def is_success(self) -> bool:
        return self.n_failure == 0


class ScenarioContext(SimpleNamespace):
    """Attribute bag shared by the steps of one scenario."""


class ExecutionEnvironment:
    """Hooks run around features and scenarios. The defaults do nothing."""

    def before_feature(self, feature: Feature) -> None:
        pass

    def after_feature(self, feature: Feature) -> None:
        pass

    def before_scenario(self, scenario: Scenario, context: ScenarioContext) -> None:
        pass

    def after_scenario(self, scenario: Scenario, context: ScenarioContext) -> None:
        pass


class NoExecutionEnvironment(ExecutionEnvironment):
    pass


class Executor:
    """Runs each scenario of a feature against a step definition matcher.

    Failures never escape: a failing, erroring or undefined step marks its
    scenario as failed, skips that scenario's remaining steps, and execution
    continues with the next scenario. An exception from an environment hook
    is recorded as the ``hook_error`` of the scenarios it affects.
    """

    def __init__(
        self,
        matcher: StepDefinitionMatcher,
        presenter: RealTimePresenter | None = None,
        environment: ExecutionEnvironment | None = None,
    ) -> None:
        self._matcher = matcher
        self._presenter = presenter or QuietRealTimePresenter()
        self._environment = environment or NoExecutionEnvironment()

    def execute_feature(self, feature: Feature) -> FeatureResult:
        self._presenter.feature_started(feature)
        setup_error = self._run_hook("before_feature", feature)
        results = tuple(
            self.execute_scenario(feature, scenario, setup_error)
            for scenario in feature.scenarios
        )
        teardown_error = self._run_hook("after_feature", feature)
        if teardown_error:
            results = tuple(
                r if r.hook_error else replace(r, hook_error=teardown_error)
                for r in results
            )
        return FeatureResult(feature=feature, scenarios=results)

    def execute_scenario(
        self, feature: Feature, scenario: Scenario, setup_error: str = ""
    ) -> ScenarioResult:
        """Run ``scenario``; with a ``setup_error`` every step is skipped."""
        self._presenter.scenario_started(scenario)
        context = ScenarioContext()
        steps = scenario.steps
        if feature.background is not None:
            steps = feature.background.steps + steps

        hook_error = setup_error
        ran_setup = False
        if not hook_error:
            hook_error = self._run_hook("before_scenario", scenario, context)
            ran_setup = True

        results: list[StepResult] = []
        failed = bool(hook_error)
        for step in steps:
            if failed:
                result = StepResult(step, StepStatus.SKIPPED)
            else:
                result = self._execute_step(step, context)
                failed = not result.is_success
            results.append(result)
            self._presenter.step_finished(result)

        if ran_setup:
            teardown_error = self._run_hook("after_scenario", scenario, context)
            hook_error = hook_error or teardown_error

        scenario_result = ScenarioResult(
            scenario=scenario, steps=tuple(results), hook_error=hook_error
        )
        self._presenter.scenario_finished(scenario_result)
        return scenario_result

    def _run_hook(self, name: str, *args: object) -> str:
        """Call an environment hook; return its error message, or ``""``."""
        try:
            getattr(self._environment, name)(*args)
        except Exception as exc:
            logger.warning(
                "[SPECRUNNER] stage=execute event=hook_error hook=%s error=%s",
                name,
                exc,
                exc_info=True,
            )
            return f"{name}: {type(exc).__name__}: {exc}"
        return ""

    def _execute_step(self, step: Step, context: ScenarioContext) -> StepResult:
        try:
            definition = self._matcher.find_step_definition(step)
        except NoMatchingStepDefinition as exc:
            return StepResult(step, StepStatus.UNDEFINED, str(exc))
        except NonUniqueStepDefinition as exc:
            return StepResult(step, StepStatus.AMBIGUOUS, str(exc))

        try:
            definition.func(context)
        except AssertionError as exc:
            return StepResult(step, StepStatus.FAILED, str(exc) or "assertion failed")
        except Exception as exc:
            logger.debug(
                "[SPECRUNNER] stage=execute event=step_error step=%r",
                step.text,
                exc_info=True,
            )
            return StepResult(
                step, StepStatus.ERROR, f"{type(exc).__name__}: {exc}"
            )
        return StepResult(step, StepStatus.SUCCESS)
