"""Constructors for artifacts and their blocks."""

from __future__ import annotations

import uuid
from typing import Iterable, List

from ..models import Artifact, ArtifactBlock, utc_timestamp
from ..tokens import estimate_tokens


def generate_aliases(name: str) -> List[str]:
    """Derive lowercase ``@`` aliases: squashed, hyphenated and (multi-word) acronym."""
    lowered = name.lower()
    words = lowered.split()
    squashed = "".join(words)
    hyphenated = "-".join(words)
    aliases = [squashed]
    if hyphenated != squashed:
        aliases.append(hyphenated)
    if len(words) > 1:
        acronym = "".join(word[0] for word in words)
        if acronym not in aliases:
            aliases.append(acronym)
    return aliases


def create_block(
    label: str,
    content: str,
    tags: Iterable[str],
    priority: int = 50,
    *,
    do_not_send: bool = False,
) -> ArtifactBlock:
    return ArtifactBlock(
        id=str(uuid.uuid4()),
        label=label,
        content=content,
        tags=list(tags),
        priority=priority,
        do_not_send=do_not_send,
        token_count=estimate_tokens(content),
    )


def create_artifact(name: str, description: str = "") -> Artifact:
    now = utc_timestamp()
    return Artifact(
        id=str(uuid.uuid4()),
        name=name,
        aliases=generate_aliases(name),
        description=description,
        blocks=[],
        version=1,
        created_at=now,
        updated_at=now,
        is_seed=False,
    )


__all__ = ["create_artifact", "create_block", "generate_aliases"]
