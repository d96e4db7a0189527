from __future__ import annotations

from pathlib import Path

import pytest

from SpecRunner.execution.engine import ExecutorEngine
from SpecRunner.pipeline.driver import Driver
from SpecRunner.pipeline.filesystem import LocalFileSystem
from SpecRunner.selection.selector import parse_tag_selector


@pytest.fixture
def features_path() -> Path:
    return Path(__file__).parent.parent / "fixtures" / "features"


@pytest.fixture
def steps_path(features_path: Path) -> Path:
    return features_path / "steps"


@pytest.fixture
def run_suite(features_path: Path, steps_path: Path):
    """Run the fixture suite through a real Driver with a tag expression."""

    def _run(tags: str = ""):
        engine = ExecutorEngine(selector=parse_tag_selector(tags))
        driver = Driver(LocalFileSystem(), engine)
        driver.read_step_definitions(str(steps_path))
        return driver.run_features(str(features_path))

    return _run
