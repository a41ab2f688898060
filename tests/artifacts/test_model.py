"""Tests for artifact constructors and seeds."""

from __future__ import annotations

from promptdial.artifacts import create_artifact, create_block, generate_aliases, seed_artifacts
from promptdial.tokens import estimate_tokens


def test_generate_aliases_for_single_word() -> None:
    assert generate_aliases("Security") == ["security"]


def test_generate_aliases_for_multiple_words() -> None:
    assert generate_aliases("Product Management") == [
        "productmanagement",
        "product-management",
        "pm",
    ]


def test_create_block_estimates_tokens() -> None:
    block = create_block("Facts", "one two three", ["background"], 70, do_not_send=True)

    assert block.token_count == estimate_tokens("one two three")
    assert block.priority == 70
    assert block.do_not_send is True
    assert block.id


def test_create_artifact_defaults() -> None:
    artifact = create_artifact("UX Design", "Heuristics")

    assert artifact.version == 1
    assert artifact.is_seed is False
    assert artifact.blocks == []
    assert artifact.created_at == artifact.updated_at
    assert artifact.aliases == ["uxdesign", "ux-design", "ud"]


def test_seed_artifacts_are_well_formed() -> None:
    seeds = seed_artifacts()

    assert len(seeds) == 8
    for artifact in seeds:
        assert artifact.id.startswith("seed-")
        assert artifact.is_seed is True
        assert 3 <= len(artifact.blocks) <= 5
        for block in artifact.blocks:
            assert block.token_count == estimate_tokens(block.content)
    assert any(block.do_not_send for artifact in seeds for block in artifact.blocks)


def test_seed_ids_and_aliases_are_unique_and_lowercase() -> None:
    seeds = seed_artifacts()
    aliases = [alias for artifact in seeds for alias in artifact.aliases]
    block_ids = [block.id for artifact in seeds for block in artifact.blocks]

    assert len({artifact.id for artifact in seeds}) == len(seeds)
    assert len(set(aliases)) == len(aliases)
    assert all(alias == alias.lower() for alias in aliases)
    assert len(set(block_ids)) == len(block_ids)


def test_seed_artifacts_are_fresh_copies() -> None:
    first = seed_artifacts()
    first[0].blocks.clear()

    assert seed_artifacts()[0].blocks
