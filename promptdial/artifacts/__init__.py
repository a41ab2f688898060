"""Artifact construction, storage and reference resolution."""

from .model import create_artifact, create_block, generate_aliases
from .resolver import FetchFn, ResolveFn, extract_artifact_refs, resolve_refs, store_collaborators
from .seeds import seed_artifacts
from .store import ArtifactNotFoundError, ArtifactStore, ArtifactStoreError, open_store

__all__ = [
    "ArtifactNotFoundError",
    "ArtifactStore",
    "ArtifactStoreError",
    "FetchFn",
    "ResolveFn",
    "create_artifact",
    "create_block",
    "extract_artifact_refs",
    "generate_aliases",
    "open_store",
    "resolve_refs",
    "seed_artifacts",
    "store_collaborators",
]
