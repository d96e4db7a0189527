"""Drive a run: discover step definitions and features, feed the engine."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from SpecRunner.execution.matcher import FromSourceStepDefinitionMatcher
from SpecRunner.parsing.feature_reader import parse_feature
from SpecRunner.shared.config import FEATURE_FILE_EXTENSION, STEP_FILE_EXTENSION

if TYPE_CHECKING:
    from SpecRunner.execution.accumulator import ResultAccumulator
    from SpecRunner.execution.engine import Engine
    from SpecRunner.pipeline.filesystem import OSAbstraction
    from SpecRunner.shared.types import FeatureParseResult

logger = logging.getLogger(__name__)


class Driver:
    """Connects file discovery to an engine.

    Discovery and read failures (DiscoveryError) propagate immediately and
    abort the run. Features processed before the failure stay recorded in
    the engine.
    """

    def __init__(
        self,
        os: OSAbstraction,
        engine: Engine,
        feature_parser: Callable[[str], FeatureParseResult] = parse_feature,
    ) -> None:
        self.os = os
        self.engine = engine
        self._parse_feature = feature_parser

    def read_step_definitions(
        self, path: str, extension: str = STEP_FILE_EXTENSION
    ) -> int:
        """Load every step definition file under ``path``; return the count."""
        files = self.os.find_files_with_extension(path, extension)
        for step_file in files:
            source = self.os.read_file(step_file)
            self.engine.add_matcher(
                FromSourceStepDefinitionMatcher(source, filename=step_file)
            )
        logger.info(
            "[SPECRUNNER] stage=load event=complete path=%s files=%d",
            path,
            len(files),
        )
        return len(files)

    def run_features(
        self, path: str, extension: str = FEATURE_FILE_EXTENSION
    ) -> ResultAccumulator:
        """Run every feature file under ``path`` and return the suite result."""
        feature_files = self.os.find_files_with_extension(path, extension)
        logger.info(
            "[SPECRUNNER] stage=execute event=start path=%s features=%d",
            path,
            len(feature_files),
        )
        for feature_file in feature_files:
            result = self._parse_feature(self.os.read_file(feature_file))
            self.engine.run_parse_result(result, feature_file)
        return self.engine.finish()
