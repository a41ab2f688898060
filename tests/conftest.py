from __future__ import annotations

from typing import Callable, Iterable

import pytest

from promptdial.artifacts import ArtifactStore, store_collaborators
from promptdial.artifacts.resolver import FetchFn, ResolveFn
from promptdial.models import Artifact, ArtifactBlock

BlockFactory = Callable[..., ArtifactBlock]


@pytest.fixture
def make_block() -> BlockFactory:
    """Build blocks with explicit token counts so budgets are easy to reason about."""

    def _make(
        block_id: str,
        *,
        tags: Iterable[str] = ("analysis",),
        priority: int = 50,
        token_count: int = 10,
        do_not_send: bool = False,
        label: str | None = None,
        content: str | None = None,
    ) -> ArtifactBlock:
        return ArtifactBlock(
            id=block_id,
            label=label or f"Block {block_id}",
            content=content or f"Content of {block_id}.",
            tags=list(tags),
            priority=priority,
            do_not_send=do_not_send,
            token_count=token_count,
        )

    return _make


@pytest.fixture
def make_artifact() -> Callable[..., Artifact]:
    def _make(artifact_id: str, name: str, blocks: Iterable[ArtifactBlock], aliases: Iterable[str] = ()) -> Artifact:
        return Artifact(
            id=artifact_id,
            name=name,
            aliases=list(aliases) or [name.lower()],
            blocks=list(blocks),
            created_at="2025-01-01T00:00:00Z",
            updated_at="2025-01-01T00:00:00Z",
        )

    return _make


@pytest.fixture
def store() -> ArtifactStore:
    """An empty in-memory store."""
    return ArtifactStore()


@pytest.fixture
def seeded_store() -> ArtifactStore:
    artifact_store = ArtifactStore()
    artifact_store.seed()
    return artifact_store


@pytest.fixture
def collaborators(seeded_store: ArtifactStore) -> tuple[ResolveFn, FetchFn]:
    return store_collaborators(seeded_store)
