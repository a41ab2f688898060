"""End-to-end tests for the compilation pipeline."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

import pytest

from promptdial.artifacts import ArtifactStore, store_collaborators
from promptdial.compiler import PromptCompiler, compile_prompt
from promptdial.models import (
    REASON_DO_NOT_SEND,
    Artifact,
    ArtifactRef,
    CompileInput,
    CompileOutput,
)
from promptdial.templates import UnknownTemplateError
from promptdial.tokens import estimate_tokens


def _compile(collaborators, compile_input: CompileInput) -> CompileOutput:
    resolve, fetch = collaborators
    return asyncio.run(compile_prompt(compile_input, resolve, fetch))


def test_short_report_request(collaborators) -> None:
    output = _compile(
        collaborators, CompileInput(raw_input="Write a report on AI", dial=3, token_budget=1000)
    )

    assert output.spec.template_id == "academic-report"
    assert len(output.spec.sections) == 9
    assert [result.rule_id for result in output.lint.results] == ["vague-input", "missing-constraints"]
    assert output.lint.score == 80
    assert output.lint.passed is True
    assert output.spec.meta.lint_score == 80
    assert output.spec.meta.total_tokens == estimate_tokens(output.rendered)
    assert output.spec.meta.compile_duration_ms >= 0
    assert output.injection.entries == ()
    assert output.injection.total_tokens_budget == 1000


def test_whitespace_input_at_dial_zero(collaborators) -> None:
    output = _compile(collaborators, CompileInput(raw_input="   ", dial=0, token_budget=0))

    assert output.spec.template_id == "academic-report"
    assert len(output.spec.sections) == 3
    rule_ids = [result.rule_id for result in output.lint.results]
    assert "vague-input" in rule_ids
    assert "budget-exceeded" not in rule_ids


def test_unknown_override_is_fatal(collaborators) -> None:
    with pytest.raises(UnknownTemplateError):
        _compile(collaborators, CompileInput(raw_input="anything", template_override="novel"))


def test_referenced_artifact_blocks_are_injected(collaborators) -> None:
    output = _compile(collaborators, CompileInput(raw_input="Write a report on @ai", dial=3))

    background = next(section for section in output.spec.sections if section.heading == "Background")
    labels = [block.block_label for block in background.injected_blocks]
    assert labels == ["Working Definition", "Historical Milestones"]
    assert "## [Context: Historical Milestones]" in output.rendered
    assert output.spec.artifact_refs == (
        ArtifactRef(raw="ai", artifact_id="seed-ai", artifact_name="Artificial Intelligence", resolved=True),
    )


def test_do_not_send_blocks_are_excluded_and_audited(collaborators) -> None:
    output = _compile(collaborators, CompileInput(raw_input="Write a report on @ai", dial=5))

    injected_ids = {
        block.block_id for section in output.spec.sections for block in section.injected_blocks
    }
    assert "seed-ai-vendor-notes" not in injected_ids
    assert "Vendor Evaluation Notes" not in output.rendered
    vendor_entries = [
        entry for entry in output.injection.entries if entry.block_id == "seed-ai-vendor-notes"
    ]
    assert vendor_entries
    assert all(entry.reason == REASON_DO_NOT_SEND for entry in vendor_entries)
    assert "do-not-send-leak" not in [result.rule_id for result in output.lint.results]


def test_shared_budget_is_never_exceeded(collaborators) -> None:
    budget = 40
    output = _compile(
        collaborators,
        CompileInput(raw_input="Write a report on @ai and @ux", dial=5, token_budget=budget),
    )

    injected = [
        block.token_count for section in output.spec.sections for block in section.injected_blocks
    ]
    assert sum(injected) <= budget
    assert output.injection.total_tokens_used == sum(injected)
    assert output.injection.blocks_included == len(injected)
    assert output.injection.blocks_included + output.injection.blocks_omitted == len(
        output.injection.entries
    )


def test_unresolved_refs_are_reported_not_fatal(collaborators) -> None:
    output = _compile(collaborators, CompileInput(raw_input="Write a report on @nothing"))

    assert output.spec.artifact_refs == (ArtifactRef(raw="nothing"),)
    assert output.injection.entries == ()


def test_force_artifacts_are_resolved_after_inline_refs(collaborators) -> None:
    output = _compile(
        collaborators,
        CompileInput(raw_input="Write a report on @ai", force_artifacts=("ux",)),
    )

    assert [ref.raw for ref in output.spec.artifact_refs] == ["ai", "ux"]
    assert all(ref.resolved for ref in output.spec.artifact_refs)


def test_fetch_runs_once_per_resolved_reference(seeded_store: ArtifactStore) -> None:
    resolve, fetch = store_collaborators(seeded_store)
    fetched: List[str] = []

    async def counting_fetch(artifact_id: str) -> Optional[Artifact]:
        fetched.append(artifact_id)
        return await fetch(artifact_id)

    output = asyncio.run(
        compile_prompt(
            CompileInput(raw_input="Report on @ai, @nothing and @AI", dial=3),
            resolve,
            counting_fetch,
        )
    )

    assert [ref.resolved for ref in output.spec.artifact_refs] == [True, False, True]
    assert fetched == ["seed-ai", "seed-ai"]
    background = next(section for section in output.spec.sections if section.heading == "Background")
    assert [block.block_label for block in background.injected_blocks] == [
        "Working Definition",
        "Working Definition",
        "Historical Milestones",
        "Historical Milestones",
    ]


def test_resolver_is_skipped_without_refs() -> None:
    calls: List[Sequence[str]] = []

    async def resolve(tokens: Sequence[str]) -> List[ArtifactRef]:
        calls.append(tokens)
        return []

    async def fetch(artifact_id: str) -> Optional[Artifact]:
        return None

    asyncio.run(compile_prompt(CompileInput(raw_input="Write a report"), resolve, fetch))

    assert calls == []


def test_missing_fetch_results_are_skipped() -> None:
    async def resolve(tokens: Sequence[str]) -> List[ArtifactRef]:
        return [ArtifactRef(raw=token, artifact_id="gone", artifact_name="Gone", resolved=True) for token in tokens]

    async def fetch(artifact_id: str) -> Optional[Artifact]:
        return None

    output = asyncio.run(compile_prompt(CompileInput(raw_input="Report on @gone"), resolve, fetch))

    assert output.spec.artifact_refs[0].resolved is True
    assert output.injection.entries == ()


def test_compilation_is_deterministic_apart_from_ids_and_timing(collaborators) -> None:
    compile_input = CompileInput(
        raw_input="Compare the options for @pm in formal tone", dial=4, token_budget=60
    )

    first = _compile(collaborators, compile_input)
    second = _compile(collaborators, compile_input)

    assert first.rendered == second.rendered
    assert first.lint == second.lint
    assert first.injection == second.injection
    assert first.spec.sections == second.spec.sections
    assert first.spec.id != second.spec.id


def test_raising_the_dial_only_adds_sections(collaborators) -> None:
    headings = [
        [
            section.heading
            for section in _compile(
                collaborators, CompileInput(raw_input="Write a PRD for the feature", dial=dial)
            ).spec.sections
        ]
        for dial in range(6)
    ]

    assert headings[0]
    for lower, higher in zip(headings, headings[1:]):
        assert set(lower) <= set(higher)
        assert [heading for heading in higher if heading in lower] == lower


def test_sensitive_tags_without_flag_trigger_leak_rule(
    store: ArtifactStore, make_block, make_artifact
) -> None:
    store.create(
        make_artifact(
            "art-1",
            "Notes",
            [make_block("leaky", tags=["analysis", "Sensitive"], token_count=4)],
            aliases=["notes"],
        )
    )
    resolve, fetch = store_collaborators(store)

    output = asyncio.run(
        PromptCompiler().compile(CompileInput(raw_input="Report on @notes", dial=1), resolve, fetch)
    )

    rule_ids = [result.rule_id for result in output.lint.results]
    assert "do-not-send-leak" in rule_ids
