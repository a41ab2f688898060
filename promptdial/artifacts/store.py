"""Artifact storage with optional JSON persistence."""

from __future__ import annotations

import copy
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pydantic

from ..logging import get_logger
from ..models import Artifact, utc_timestamp
from ..validators.schema import artifact_from_dict, artifact_to_dict
from .seeds import seed_artifacts

_STORE_VERSION = 1

_UPDATABLE_FIELDS = frozenset({"name", "aliases", "description", "blocks", "is_seed"})


class ArtifactStoreError(RuntimeError):
    """Raised when a store operation would violate its invariants."""


class ArtifactNotFoundError(ArtifactStoreError, LookupError):
    """Raised when an artifact id is not present in the store."""

    def __init__(self, artifact_id: str) -> None:
        super().__init__(f"Artifact not found: {artifact_id}")
        self.artifact_id = artifact_id


class ArtifactStore:
    """Keeps artifacts keyed by id with a lowercase alias index.

    Aliases are unique across all artifacts. Reads hand out copies, so callers
    cannot change stored state except through ``update``. When ``path`` is set
    every mutation is written through to disk.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._artifacts: Dict[str, Artifact] = {}
        self._aliases: Dict[str, str] = {}
        self.logger = get_logger("artifacts.store")
        if self._path is not None:
            self._load(self._path)

    def create(self, artifact: Artifact) -> str:
        if artifact.id in self._artifacts:
            raise ArtifactStoreError(f"Artifact already exists: {artifact.id}")
        stored = copy.deepcopy(artifact)
        stored.aliases = _normalise_aliases(stored.aliases)
        self._check_aliases(stored.aliases, owner=None)
        self._insert(stored)
        self._persist()
        self.logger.debug("Created artifact %s (%s)", stored.id, stored.name)
        return stored.id

    def get(self, artifact_id: str) -> Optional[Artifact]:
        artifact = self._artifacts.get(artifact_id)
        return copy.deepcopy(artifact) if artifact is not None else None

    def get_by_alias(self, alias: str) -> Optional[Artifact]:
        artifact_id = self._aliases.get(alias.strip().lower())
        if artifact_id is None:
            return None
        return self.get(artifact_id)

    def update(self, artifact_id: str, **changes: Any) -> Artifact:
        """Apply ``changes`` and bump ``version`` and ``updated_at``."""
        existing = self._artifacts.get(artifact_id)
        if existing is None:
            raise ArtifactNotFoundError(artifact_id)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update artifact fields: {', '.join(sorted(unknown))}")

        changes = copy.deepcopy(changes)
        if "aliases" in changes:
            changes["aliases"] = _normalise_aliases(changes["aliases"])
            self._check_aliases(changes["aliases"], owner=artifact_id)

        updated = replace(
            existing,
            **changes,
            version=existing.version + 1,
            updated_at=utc_timestamp(),
        )
        self._remove(artifact_id)
        self._insert(updated)
        self._persist()
        self.logger.debug("Updated artifact %s to version %d", artifact_id, updated.version)
        return copy.deepcopy(updated)

    def delete(self, artifact_id: str) -> bool:
        if artifact_id not in self._artifacts:
            return False
        self._remove(artifact_id)
        self._persist()
        return True

    def list_all(self) -> List[Artifact]:
        return [copy.deepcopy(artifact) for artifact in self._artifacts.values()]

    def count(self) -> int:
        return len(self._artifacts)

    def seed(self, artifacts: Iterable[Artifact] | None = None) -> int:
        """Populate an empty store; does nothing once any artifact exists."""
        if self._artifacts:
            return 0
        if artifacts is None:
            artifacts = seed_artifacts()
        added = 0
        for artifact in artifacts:
            stored = copy.deepcopy(artifact)
            stored.aliases = _normalise_aliases(stored.aliases)
            self._check_aliases(stored.aliases, owner=None)
            self._insert(stored)
            added += 1
        self._persist()
        self.logger.info("Seeded artifact store with %d artifact(s)", added)
        return added

    # ------------------------------------------------------------------
    # Internal helpers

    def _check_aliases(self, aliases: Iterable[str], *, owner: Optional[str]) -> None:
        for alias in aliases:
            holder = self._aliases.get(alias)
            if holder is not None and holder != owner:
                raise ArtifactStoreError(f"Alias '{alias}' is already used by artifact {holder}")

    def _insert(self, artifact: Artifact) -> None:
        self._artifacts[artifact.id] = artifact
        for alias in artifact.aliases:
            self._aliases[alias] = artifact.id

    def _remove(self, artifact_id: str) -> None:
        artifact = self._artifacts.pop(artifact_id)
        for alias in artifact.aliases:
            if self._aliases.get(alias) == artifact_id:
                del self._aliases[alias]

    def _persist(self) -> None:
        if self._path is None:
            return
        payload = {
            "version": _STORE_VERSION,
            "artifacts": [artifact_to_dict(artifact) for artifact in self._artifacts.values()],
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError) as exc:
            raise ArtifactStoreError(f"Failed to read artifact store {path}: {exc}") from exc
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            raise ArtifactStoreError(f"Unsupported artifact store format in {path}")
        entries = data.get("artifacts")
        if not isinstance(entries, list):
            return
        for raw in entries:
            try:
                artifact = artifact_from_dict(raw)
            except pydantic.ValidationError as exc:
                self.logger.warning("Skipping invalid artifact record in %s: %s", path, exc.errors()[0])
                continue
            artifact.aliases = _normalise_aliases(artifact.aliases)
            self._check_aliases(artifact.aliases, owner=None)
            self._insert(artifact)


def open_store(path: Path | None = None, *, seed: bool = True) -> ArtifactStore:
    """Open (or create) a store and seed it when it is empty."""
    store = ArtifactStore(path)
    if seed:
        store.seed()
    return store


def _normalise_aliases(aliases: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for alias in aliases:
        cleaned = alias.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


__all__ = ["ArtifactNotFoundError", "ArtifactStore", "ArtifactStoreError", "open_store"]
