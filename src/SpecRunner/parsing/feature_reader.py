"""ACL: translates Gherkin documents into domain Feature objects.

Parsing is delegated to the official Gherkin parser. Malformed text is never
raised to the caller; it comes back as a FeatureParseFailure.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any

from gherkin.errors import ParserError
from gherkin.parser import Parser

from SpecRunner.shared.types import (
    Background,
    Feature,
    FeatureHeader,
    FeatureParseFailure,
    FeatureParseResult,
    Scenario,
    Step,
    StepKind,
)

logger = logging.getLogger(__name__)

_KEYWORD_TYPES = {
    "Context": StepKind.GIVEN,
    "Action": StepKind.WHEN,
    "Outcome": StepKind.THEN,
}

_KEYWORDS = {
    "given": StepKind.GIVEN,
    "when": StepKind.WHEN,
    "then": StepKind.THEN,
}

_PLACEHOLDER = re.compile(r"<([^<>]+)>")


def parse_feature(text: str) -> FeatureParseResult:
    """Parse Gherkin ``text`` into a Feature or a FeatureParseFailure."""
    try:
        document = Parser().parse(text)
    except ParserError as exc:
        logger.debug("[SPECRUNNER] stage=parse event=gherkin_error error=%s", exc)
        return FeatureParseFailure(reason=str(exc), line=_error_line(exc))

    feature = document.get("feature")
    if not feature:
        return FeatureParseFailure(reason="No feature found")
    return _build_feature(feature)


def _error_line(exc: ParserError) -> int | None:
    errors = getattr(exc, "errors", None) or [exc]
    location = getattr(errors[0], "location", None) or {}
    return location.get("line")


def _tag_names(node: dict[str, Any]) -> tuple[str, ...]:
    return tuple(tag["name"] for tag in node.get("tags", []))


def _build_feature(node: dict[str, Any]) -> Feature:
    header = FeatureHeader(
        name=node.get("name", ""),
        tags=_tag_names(node),
        description=(node.get("description") or "").strip(),
    )
    background = None
    scenarios: list[Scenario] = []
    for child in node.get("children", []):
        if "background" in child:
            background = _build_background(child["background"])
        elif "scenario" in child:
            scenarios.extend(_build_scenarios(child["scenario"], ()))
        elif "rule" in child:
            scenarios.extend(_build_rule(child["rule"]))
    return Feature(header=header, scenarios=tuple(scenarios), background=background)


def _build_rule(node: dict[str, Any]) -> list[Scenario]:
    rule_tags = _tag_names(node)
    prefix: tuple[Step, ...] = ()
    scenarios: list[Scenario] = []
    for child in node.get("children", []):
        if "background" in child:
            prefix = _build_background(child["background"]).steps
        elif "scenario" in child:
            scenarios.extend(
                replace(s, steps=prefix + s.steps)
                for s in _build_scenarios(child["scenario"], rule_tags)
            )
    return scenarios


def _build_background(node: dict[str, Any]) -> Background:
    return Background(name=node.get("name", ""), steps=_build_steps(node.get("steps", [])))


def _build_scenarios(
    node: dict[str, Any], inherited_tags: tuple[str, ...]
) -> list[Scenario]:
    """Build one scenario, or one per example row for a Scenario Outline."""
    name = node.get("name", "")
    keyword = node.get("keyword", "Scenario").strip()
    tags = inherited_tags + _tag_names(node)
    steps = _build_steps(node.get("steps", []))

    examples = node.get("examples", [])
    if not examples:
        return [Scenario(name=name, tags=tags, steps=steps, keyword=keyword)]

    scenarios: list[Scenario] = []
    for block in examples:
        header = [cell["value"] for cell in block.get("tableHeader", {}).get("cells", [])]
        block_tags = tags + _tag_names(block)
        for row in block.get("tableBody", []):
            values = dict(zip(header, (cell["value"] for cell in row["cells"])))
            scenarios.append(
                Scenario(
                    name=_substitute(name, values),
                    tags=block_tags,
                    steps=tuple(
                        Step(s.kind, _substitute(s.text, values), s.keyword)
                        for s in steps
                    ),
                    keyword=keyword,
                )
            )
    return scenarios


def _substitute(text: str, values: dict[str, str]) -> str:
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), text)


def _build_steps(nodes: list[dict[str, Any]]) -> tuple[Step, ...]:
    steps: list[Step] = []
    previous = StepKind.GIVEN
    for node in nodes:
        keyword = node.get("keyword", "")
        kind = _KEYWORD_TYPES.get(node.get("keywordType", ""))
        if kind is None:
            kind = _KEYWORDS.get(keyword.strip().lower(), previous)
        steps.append(Step(kind=kind, text=node.get("text", ""), keyword=keyword))
        previous = kind
    return tuple(steps)
