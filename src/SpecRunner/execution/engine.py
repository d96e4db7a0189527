"""Feature orchestration: select, run and record the features of a suite."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from SpecRunner.execution.accumulator import ResultAccumulator
from SpecRunner.execution.executor import Executor
from SpecRunner.execution.matcher import CompositeStepDefinitionMatcher
from SpecRunner.selection.selector import ALL_SCENARIOS, TagSelector
from SpecRunner.shared.types import FeatureParseFailure

if TYPE_CHECKING:
    from SpecRunner.execution.executor import ExecutionEnvironment
    from SpecRunner.execution.matcher import StepDefinitionMatcher
    from SpecRunner.execution.presenter import RealTimePresenter
    from SpecRunner.shared.types import Feature, FeatureParseResult

logger = logging.getLogger(__name__)


class Engine(Protocol):
    """What the Driver needs from an engine."""

    def add_matcher(self, matcher: StepDefinitionMatcher) -> None: ...

    def run_parse_result(
        self, result: FeatureParseResult, feature_file: str
    ) -> None: ...

    def finish(self) -> ResultAccumulator: ...


class ExecutorEngine:
    """Runs features one at a time and folds their results into a suite.

    Each feature is filtered through the tag selector first. A feature left
    without scenarios is not run and is not recorded, so it never shows up as
    a feature with zero successes and zero failures. Features that failed to
    parse are recorded against their file without being filtered.
    """

    def __init__(
        self,
        presenter: RealTimePresenter | None = None,
        selector: TagSelector = ALL_SCENARIOS,
        environment: ExecutionEnvironment | None = None,
        accumulator: ResultAccumulator | None = None,
    ) -> None:
        self.selector = selector
        self.matcher = CompositeStepDefinitionMatcher()
        self.executor = Executor(
            self.matcher, presenter=presenter, environment=environment
        )
        self.accumulator = accumulator if accumulator is not None else ResultAccumulator()

    def add_matcher(self, matcher: StepDefinitionMatcher) -> None:
        self.matcher.add_matcher(matcher)

    def run_feature(self, feature: Feature) -> None:
        """Run the scenarios of ``feature`` chosen by the selector."""
        filtered = self.selector.filter_feature(feature)
        if not filtered.scenarios:
            logger.debug(
                "[SPECRUNNER] stage=execute event=feature_skipped "
                "feature=%r reason=no_selected_scenarios",
                feature.name,
            )
            return

        logger.debug(
            "[SPECRUNNER] stage=execute event=feature_start feature=%r "
            "scenarios=%d/%d",
            feature.name,
            len(filtered.scenarios),
            len(feature.scenarios),
        )
        result = self.executor.execute_feature(filtered)
        self.accumulator.accumulate_feature(result)

    def run_parse_result(
        self, result: FeatureParseResult, feature_file: str
    ) -> None:
        """Run a parsed feature, or record why ``feature_file`` did not parse."""
        if isinstance(result, FeatureParseFailure):
            logger.warning(
                "[SPECRUNNER] stage=parse event=error file=%s error=%s",
                feature_file,
                result,
            )
            self.accumulator.accumulate_parse_failure(result, feature_file)
            return
        self.run_feature(result)

    def finish(self) -> ResultAccumulator:
        return self.accumulator
