"""Resolution of ``@alias`` references against an artifact store."""

from __future__ import annotations

import re
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from ..models import Artifact, ArtifactRef
from .store import ArtifactStore

AliasLookupFn = Callable[[str], Awaitable[Optional[Artifact]]]
ResolveFn = Callable[[Sequence[str]], Awaitable[List[ArtifactRef]]]
FetchFn = Callable[[str], Awaitable[Optional[Artifact]]]

_ARTIFACT_REF = re.compile(r"@([A-Za-z][A-Za-z0-9_]*)")


def extract_artifact_refs(text: str) -> List[str]:
    """Return alias tokens (without ``@``) in the order they appear."""
    return _ARTIFACT_REF.findall(text)


async def resolve_refs(raw_refs: Sequence[str], lookup: AliasLookupFn) -> List[ArtifactRef]:
    """Resolve each token through ``lookup``, one ref per input token.

    Tokens are matched case-insensitively and each distinct lowercase token is
    looked up once. Unknown aliases produce an unresolved ref with empty ids.
    """
    found: Dict[str, Optional[Artifact]] = {}
    refs: List[ArtifactRef] = []
    for raw in raw_refs:
        key = raw.lower()
        if key not in found:
            found[key] = await lookup(key)
        artifact = found[key]
        if artifact is None:
            refs.append(ArtifactRef(raw=raw))
        else:
            refs.append(
                ArtifactRef(raw=raw, artifact_id=artifact.id, artifact_name=artifact.name, resolved=True)
            )
    return refs


def store_collaborators(store: ArtifactStore) -> Tuple[ResolveFn, FetchFn]:
    """Adapt ``store`` into the ``(resolve, fetch)`` callables the compiler awaits."""

    async def lookup(alias: str) -> Optional[Artifact]:
        return store.get_by_alias(alias)

    async def resolve(tokens: Sequence[str]) -> List[ArtifactRef]:
        return await resolve_refs(tokens, lookup)

    async def fetch(artifact_id: str) -> Optional[Artifact]:
        return store.get(artifact_id)

    return resolve, fetch


__all__ = [
    "AliasLookupFn",
    "FetchFn",
    "ResolveFn",
    "extract_artifact_refs",
    "resolve_refs",
    "store_collaborators",
]
