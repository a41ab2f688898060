"""Budgeted selection of artifact blocks for a single document section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..models import (
    REASON_DO_NOT_SEND,
    REASON_INCLUDED,
    REASON_NO_MATCHING_TAGS,
    REASON_OVER_BUDGET,
    Artifact,
    ArtifactBlock,
    InjectedBlock,
    InjectionReportEntry,
)


@dataclass(frozen=True)
class BlockSelection:
    """Outcome of one selection pass."""

    included: Tuple[InjectedBlock, ...]
    entries: Tuple[InjectionReportEntry, ...]
    tokens_used: int


def section_tags(heading: str) -> frozenset[str]:
    """Tag set a section admits blocks for."""
    return frozenset({heading.lower()})


def select_blocks(
    artifacts: Sequence[Artifact],
    tags: Iterable[str],
    token_budget: int,
    *,
    tokens_used: int = 0,
    section: str = "",
) -> BlockSelection:
    """Choose blocks from ``artifacts`` for one section.

    Blocks flagged ``do_not_send`` are always dropped. A non-empty ``tags`` set
    drops blocks without a (case-insensitive) tag overlap. Survivors are taken
    in descending priority, stable across artifacts, and admitted greedily in a
    single pass while ``tokens_used`` plus the block's token count fits within
    ``token_budget``; a budget of 0 is unlimited. A block skipped for budget is
    never reconsidered, so a later, smaller block may still fit.

    ``tokens_used`` carries consumption from earlier sections of the same
    compilation; the returned ``tokens_used`` counts only this pass.
    """
    wanted = {tag.lower() for tag in tags}
    entries: List[InjectionReportEntry] = []
    candidates: List[Tuple[Artifact, ArtifactBlock]] = []

    for artifact in artifacts:
        for block in artifact.blocks:
            if block.do_not_send:
                entries.append(_entry(section, artifact, block, False, REASON_DO_NOT_SEND))
                continue
            if wanted and not any(tag.lower() in wanted for tag in block.tags):
                entries.append(_entry(section, artifact, block, False, REASON_NO_MATCHING_TAGS))
                continue
            candidates.append((artifact, block))

    # sorted() is stable, so equal priorities keep encounter order.
    candidates = sorted(candidates, key=lambda pair: -pair[1].priority)

    included: List[InjectedBlock] = []
    used = 0
    for artifact, block in candidates:
        if token_budget > 0 and tokens_used + used + block.token_count > token_budget:
            entries.append(_entry(section, artifact, block, False, REASON_OVER_BUDGET))
            continue
        used += block.token_count
        included.append(
            InjectedBlock(
                artifact_id=artifact.id,
                artifact_name=artifact.name,
                block_id=block.id,
                block_label=block.label,
                content=block.content,
                tags=tuple(block.tags),
                priority=block.priority,
                token_count=block.token_count,
            )
        )
        entries.append(_entry(section, artifact, block, True, REASON_INCLUDED))

    return BlockSelection(included=tuple(included), entries=tuple(entries), tokens_used=used)


def _entry(
    section: str,
    artifact: Artifact,
    block: ArtifactBlock,
    included: bool,
    reason: str,
) -> InjectionReportEntry:
    return InjectionReportEntry(
        section=section,
        artifact_id=artifact.id,
        artifact_name=artifact.name,
        block_id=block.id,
        block_label=block.label,
        included=included,
        reason=reason,
        priority=block.priority,
        token_count=block.token_count,
    )


__all__ = ["BlockSelection", "section_tags", "select_blocks"]
