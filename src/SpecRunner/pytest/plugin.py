"""pytest plugin for tag expression selection.

Registered as a ``pytest11`` entry point. Activated via CLI options:

    pytest --spec-tags="@smoke,@auth" tests/

Every marker on a test is exposed as a tag named ``@<marker>``. When
``--spec-tags`` is blank (default), the plugin is inactive.
"""
from __future__ import annotations

import logging

import pytest

from SpecRunner.pipeline.errors import TagExpressionError
from SpecRunner.selection.selector import parse_tag_selector

logger = logging.getLogger("SpecRunner.pytest")

_IGNORED_MARKERS = ("parametrize", "usefixtures")


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register CLI options for tag expression selection."""
    group = parser.getgroup("specrunner", "Tag expression selection")
    group.addoption(
        "--spec-tags",
        default="",
        help="Only run tests whose markers match this tag expression, "
        "e.g. '@smoke,@auth' or 'not @slow' (default: run all).",
    )


def item_tags(item: pytest.Item) -> frozenset[str]:
    """Return the tags of a collected item: its markers, prefixed with '@'."""
    return frozenset(
        f"@{mark.name}"
        for mark in item.iter_markers()
        if mark.name not in _IGNORED_MARKERS
    )


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item],
) -> None:
    """Deselect collected items whose tags do not match ``--spec-tags``."""
    text = config.getoption("--spec-tags", default="")
    if not text or not text.strip():
        return

    try:
        selector = parse_tag_selector(text)
    except TagExpressionError as exc:
        raise pytest.UsageError(str(exc)) from exc

    selected: list[pytest.Item] = []
    deselected: list[pytest.Item] = []
    for item in items:
        if selector.matches(item_tags(item)):
            selected.append(item)
        else:
            deselected.append(item)

    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected

    logger.info(
        "[SPECRUNNER] Selected %d/%d tests (tags=%r).",
        len(selected), len(selected) + len(deselected), text,
    )
