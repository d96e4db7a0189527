from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

STEP_FILE_EXTENSION = ".py"
FEATURE_FILE_EXTENSION = ".feature"


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a complete run of a feature suite."""

    steps_path: Path = Path("features/steps")
    features_path: Path = Path("features")
    tags: str = ""
    step_extension: str = STEP_FILE_EXTENSION
    feature_extension: str = FEATURE_FILE_EXTENSION

    @classmethod
    def from_env(cls) -> RunConfig:
        """Build a config from ``SPECRUNNER_*`` environment variables."""
        defaults = cls()
        return cls(
            steps_path=Path(os.environ.get("SPECRUNNER_STEPS", str(defaults.steps_path))),
            features_path=Path(
                os.environ.get("SPECRUNNER_FEATURES", str(defaults.features_path))
            ),
            tags=os.environ.get("SPECRUNNER_TAGS", defaults.tags),
        )
