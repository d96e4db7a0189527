"""Suite-wide accumulation of feature results and parse failures."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from SpecRunner.execution.executor import FeatureResult
    from SpecRunner.shared.types import FeatureParseFailure


@dataclass(frozen=True)
class FeatureSummary:
    """Scenario counts for one feature that was run."""

    name: str
    n_success: int
    n_failure: int
    result: FeatureResult


@dataclass(frozen=True)
class ParseFailureRecord:
    """A feature file that could not be parsed."""

    feature_file: str
    failure: FeatureParseFailure


class ResultAccumulator:
    """Running record of a suite: one entry per feature, in fold order.

    Created once per run by its owner. Folds are serialized, so the order of
    ``features`` is always the order in which results were accumulated.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._features: list[FeatureSummary] = []
        self._parse_failures: list[ParseFailureRecord] = []

    def accumulate_feature(self, result: FeatureResult) -> None:
        summary = FeatureSummary(
            name=result.feature.name,
            n_success=result.n_success,
            n_failure=result.n_failure,
            result=result,
        )
        with self._lock:
            self._features.append(summary)

    def accumulate_parse_failure(
        self, failure: FeatureParseFailure, feature_file: str
    ) -> None:
        with self._lock:
            self._parse_failures.append(ParseFailureRecord(feature_file, failure))

    @property
    def features(self) -> tuple[FeatureSummary, ...]:
        with self._lock:
            return tuple(self._features)

    @property
    def parse_failures(self) -> tuple[ParseFailureRecord, ...]:
        with self._lock:
            return tuple(self._parse_failures)

    @property
    def n_success(self) -> int:
        return sum(f.n_success for f in self.features)

    @property
    def n_failure(self) -> int:
        return sum(f.n_failure for f in self.features)

    @property
    def is_success(self) -> bool:
        """True when nothing failed to parse and no scenario failed."""
        return not self.parse_failures and all(
            f.n_failure == 0 for f in self.features
        )
