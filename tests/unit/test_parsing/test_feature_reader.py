"""Tests for translating Gherkin text into Feature objects."""
from __future__ import annotations

from pathlib import Path

from SpecRunner.parsing.feature_reader import parse_feature
from SpecRunner.shared.types import Feature, FeatureParseFailure, StepKind

FIXTURES = Path(__file__).resolve().parents[2] / "fixtures" / "features"


class TestParseFeature:
    def test_header_and_tags(self) -> None:
        feature = parse_feature((FIXTURES / "checkout.feature").read_text())

        assert isinstance(feature, Feature)
        assert feature.name == "Checkout"
        assert feature.header.tags == ("@checkout",)
        assert "Customers pay" in feature.header.description

    def test_scenarios_in_order_with_tags(self) -> None:
        feature = parse_feature((FIXTURES / "checkout.feature").read_text())

        assert [s.name for s in feature.scenarios] == [
            "Pay for a single item",
            "Pay with an expired card",
        ]
        assert feature.scenarios[0].tags == ("@smoke",)
        assert feature.scenarios[1].tags == ("@slow",)

    def test_background(self) -> None:
        feature = parse_feature((FIXTURES / "checkout.feature").read_text())

        assert feature.background is not None
        assert [s.text for s in feature.background.steps] == ["an empty basket"]

    def test_step_kinds(self) -> None:
        feature = parse_feature((FIXTURES / "checkout.feature").read_text())

        steps = feature.scenarios[0].steps
        assert [s.kind for s in steps] == [StepKind.GIVEN, StepKind.WHEN, StepKind.THEN]
        assert steps[1].text == "the customer pays"

    def test_and_but_inherit_previous_kind(self) -> None:
        text = (
            "Feature: F\n"
            "  Scenario: S\n"
            "    Given a\n"
            "    And b\n"
            "    When c\n"
            "    But d\n"
            "    Then e\n"
            "    And f\n"
        )
        feature = parse_feature(text)
        kinds = [s.kind for s in feature.scenarios[0].steps]
        assert kinds == [
            StepKind.GIVEN, StepKind.GIVEN,
            StepKind.WHEN, StepKind.WHEN,
            StepKind.THEN, StepKind.THEN,
        ]

    def test_scenario_outline_is_expanded(self) -> None:
        feature = parse_feature((FIXTURES / "account" / "login.feature").read_text())

        names = [s.name for s in feature.scenarios]
        assert names == ["Valid credentials", "Rejected credentials", "Rejected credentials"]
        expanded = [s.steps[1].text for s in feature.scenarios[1:]]
        assert expanded == [
            'the user logs in with "wrong"',
            'the user logs in with "empty"',
        ]
        assert feature.scenarios[1].tags == ("@auth",)

    def test_examples_tags_are_added(self) -> None:
        text = (
            "Feature: F\n"
            "  @outline\n"
            "  Scenario Outline: S <n>\n"
            "    Given number <n>\n"
            "    @first\n"
            "    Examples:\n"
            "      | n |\n"
            "      | 1 |\n"
            "    @second\n"
            "    Examples:\n"
            "      | n |\n"
            "      | 2 |\n"
        )
        feature = parse_feature(text)
        assert [(s.name, s.tags) for s in feature.scenarios] == [
            ("S 1", ("@outline", "@first")),
            ("S 2", ("@outline", "@second")),
        ]

    def test_rule_scenarios_are_flattened(self) -> None:
        text = (
            "Feature: F\n"
            "  Scenario: Before\n"
            "    Given a\n"
            "  @billing\n"
            "  Rule: Invoices\n"
            "    @pdf\n"
            "    Scenario: Inside\n"
            "      Given b\n"
        )
        feature = parse_feature(text)
        assert [(s.name, s.tags) for s in feature.scenarios] == [
            ("Before", ()),
            ("Inside", ("@billing", "@pdf")),
        ]

    def test_rule_background_prefixes_rule_scenarios(self) -> None:
        text = (
            "Feature: F\n"
            "  Rule: R\n"
            "    Background:\n"
            "      Given setup\n"
            "    Scenario: Inside\n"
            "      When act\n"
        )
        feature = parse_feature(text)
        assert feature.background is None
        assert [s.text for s in feature.scenarios[0].steps] == ["setup", "act"]

    def test_feature_without_scenarios(self) -> None:
        feature = parse_feature("Feature: Empty\n")
        assert isinstance(feature, Feature)
        assert feature.scenarios == ()


class TestParseFailures:
    def test_malformed_text_is_a_failure_not_an_exception(self) -> None:
        result = parse_feature("Feature: F\n  Scenario: S\n    Given a\n  Nonsense here\n")
        assert isinstance(result, FeatureParseFailure)
        assert result.line == 4

    def test_empty_text_has_no_feature(self) -> None:
        result = parse_feature("")
        assert isinstance(result, FeatureParseFailure)
        assert result.reason == "No feature found"

    def test_comment_only_text_has_no_feature(self) -> None:
        result = parse_feature("# just a comment\n")
        assert isinstance(result, FeatureParseFailure)
