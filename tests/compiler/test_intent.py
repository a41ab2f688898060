"""Tests for intent parsing."""

from __future__ import annotations

import pytest

from promptdial.compiler.intent import extract_constraints, parse_intent


def test_detects_template_from_keywords() -> None:
    parsed = parse_intent("Write a brief summary of the market")

    assert parsed.template_id == "research-brief"
    assert parsed.confidence == pytest.approx(0.9)


def test_falls_back_to_first_template_without_keywords() -> None:
    parsed = parse_intent("hello there")

    assert parsed.template_id == "academic-report"
    assert parsed.confidence == pytest.approx(0.3)


def test_ties_keep_the_earlier_template() -> None:
    parsed = parse_intent("study the product")

    assert parsed.template_id == "academic-report"
    assert parsed.confidence == pytest.approx(0.7)


def test_confidence_is_capped_at_one() -> None:
    parsed = parse_intent("research report study paper academic thesis")

    assert parsed.template_id == "academic-report"
    assert parsed.confidence == 1.0


def test_override_wins_with_full_confidence() -> None:
    parsed = parse_intent("Write a brief summary", "critique")

    assert parsed.template_id == "critique"
    assert parsed.confidence == 1.0


def test_override_is_not_validated_here() -> None:
    parsed = parse_intent("anything", "novel")

    assert parsed.template_id == "novel"


def test_extracts_refs_and_cleans_input() -> None:
    parsed = parse_intent("Use @AI and @ux_design please")

    assert parsed.artifact_refs == ("AI", "ux_design")
    assert parsed.cleaned_input == "Use  and  please"


def test_extracts_constraints_in_pattern_order() -> None:
    constraints = extract_constraints(
        "Write a brief for executives, in formal tone, under 500 words"
    )

    assert constraints == ("Audience: executives", "Tone: formal", "Max words: 500")


def test_bare_tone_word_and_max_length() -> None:
    constraints = extract_constraints("A casual post, maximum 200 tokens")

    assert constraints == ("Tone: casual", "Max length: 200 tokens")


def test_upper_case_token_unit_is_reported_as_words() -> None:
    assert extract_constraints("MAX 200 TOKENS") == ("Max length: 200 words",)
    assert extract_constraints("Max 200 Tokens") == ("Max length: 200 words",)


def test_one_constraint_per_prefix() -> None:
    constraints = extract_constraints("in technical tone but also conversational")

    assert constraints == ("Tone: technical",)


def test_constraints_come_from_cleaned_input() -> None:
    parsed = parse_intent("Summarise @ai for engineers.")

    assert parsed.constraints == ("Audience: engineers",)
    assert "@" not in parsed.cleaned_input
