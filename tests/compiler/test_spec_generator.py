"""Tests for spec assembly."""

from __future__ import annotations

from datetime import datetime

from promptdial.compiler.intent import parse_intent
from promptdial.compiler.spec_generator import generate_spec
from promptdial.models import ArtifactRef, InjectedBlock
from promptdial.templates import get_template


def _block(block_id: str) -> InjectedBlock:
    return InjectedBlock(
        artifact_id="a1",
        artifact_name="Alpha",
        block_id=block_id,
        block_label=f"Label {block_id}",
        content="Some content.",
        tags=("background",),
        priority=50,
        token_count=3,
    )


def test_generate_spec_keeps_sections_active_at_dial() -> None:
    parsed = parse_intent("Write a report on AI")
    template = get_template("academic-report")

    spec = generate_spec(parsed, template, 1, 0, {}, [])

    assert [section.heading for section in spec.sections] == [
        "Executive Summary",
        "Introduction",
        "Background",
        "Analysis",
        "Conclusion",
    ]
    assert all(section.injected_blocks == () for section in spec.sections)


def test_generate_spec_attaches_blocks_by_heading() -> None:
    parsed = parse_intent("Write a report on @ai")
    template = get_template("academic-report")
    refs = [ArtifactRef(raw="ai", artifact_id="a1", artifact_name="Alpha", resolved=True)]

    spec = generate_spec(
        parsed,
        template,
        3,
        250,
        {"Background": [_block("b1")], "Future Work": [_block("b2")]},
        refs,
    )

    background = next(section for section in spec.sections if section.heading == "Background")
    assert [block.block_id for block in background.injected_blocks] == ["b1"]
    # Future Work needs dial 4, so its blocks are dropped with the section.
    assert all(section.heading != "Future Work" for section in spec.sections)
    assert spec.artifact_refs == tuple(refs)
    assert spec.token_budget == 250


def test_generate_spec_copies_template_and_intent_fields() -> None:
    parsed = parse_intent("Review this argument in formal tone")
    template = get_template(parsed.template_id)

    spec = generate_spec(parsed, template, 0, 0, {}, [])

    assert spec.template_id == "critique"
    assert spec.system_instruction == template.system_instruction
    assert spec.raw_input == parsed.cleaned_input
    assert spec.constraints == ("Tone: formal",)
    assert spec.meta.total_tokens == 0
    assert spec.meta.lint_score == 0
    assert spec.meta.compiled_at.endswith("Z")
    datetime.fromisoformat(spec.meta.compiled_at)


def test_generate_spec_assigns_fresh_ids() -> None:
    parsed = parse_intent("Write a report")
    template = get_template("academic-report")

    first = generate_spec(parsed, template, 0, 0, {}, [])
    second = generate_spec(parsed, template, 0, 0, {}, [])

    assert first.id != second.id
