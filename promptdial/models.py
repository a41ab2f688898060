"""Core data models shared across promptdial components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import List, Literal, Optional, Tuple

TemplateId = Literal["academic-report", "prd", "decision-memo", "critique", "research-brief"]
LintSeverity = Literal["error", "warning", "info"]

MIN_DIAL = 0
MAX_DIAL = 5
DEFAULT_DIAL = 3

# Injection report reasons.
REASON_DO_NOT_SEND = "do_not_send flag"
REASON_NO_MATCHING_TAGS = "no matching tags"
REASON_OVER_BUDGET = "exceeded token budget"
REASON_INCLUDED = "included"


@dataclass(frozen=True)
class SectionSpec:
    """One section of a template; eligible when ``min_dial <= dial``.

    ``required`` is descriptive only and never overrides ``min_dial``.
    """

    heading: str
    instruction: str
    min_dial: int
    required: bool = False


@dataclass(frozen=True)
class TemplateDefinition:
    """Immutable document template."""

    id: str
    name: str
    description: str
    system_instruction: str
    sections: Tuple[SectionSpec, ...]


@dataclass
class ArtifactBlock:
    """Tagged, prioritised unit of artifact content."""

    id: str
    label: str
    content: str
    tags: List[str] = field(default_factory=list)
    priority: int = 50
    do_not_send: bool = False
    token_count: int = 0


@dataclass
class Artifact:
    """User-owned bundle of reusable blocks referenced via ``@alias``."""

    id: str
    name: str
    aliases: List[str] = field(default_factory=list)
    description: str = ""
    blocks: List[ArtifactBlock] = field(default_factory=list)
    version: int = 1
    created_at: str = ""
    updated_at: str = ""
    is_seed: bool = False


@dataclass(frozen=True)
class ArtifactRef:
    """Resolution result for a single raw ``@token``."""

    raw: str
    artifact_id: str = ""
    artifact_name: str = ""
    resolved: bool = False


@dataclass(frozen=True)
class InjectedBlock:
    """A selected block annotated with its owning artifact."""

    artifact_id: str
    artifact_name: str
    block_id: str
    block_label: str
    content: str
    tags: Tuple[str, ...] = ()
    priority: int = 0
    token_count: int = 0


@dataclass(frozen=True)
class PromptSpecSection:
    heading: str
    instruction: str
    injected_blocks: Tuple[InjectedBlock, ...] = ()


@dataclass(frozen=True)
class CompilationMeta:
    total_tokens: int = 0
    compile_duration_ms: float = 0
    compiled_at: str = ""
    lint_score: int = 0


@dataclass(frozen=True)
class PromptSpec:
    """Intermediate representation produced by compilation."""

    id: str
    raw_input: str
    template_id: str
    dial: int
    token_budget: int
    system_instruction: str
    sections: Tuple[PromptSpecSection, ...]
    constraints: Tuple[str, ...] = ()
    artifact_refs: Tuple[ArtifactRef, ...] = ()
    meta: CompilationMeta = field(default_factory=CompilationMeta)


@dataclass(frozen=True)
class LintResult:
    rule_id: str
    rule_name: str
    severity: LintSeverity
    message: str
    fix: Optional[str] = None


@dataclass(frozen=True)
class LintReport:
    score: int
    results: Tuple[LintResult, ...]
    passed: bool


@dataclass(frozen=True)
class InjectionReportEntry:
    """Audit record for one candidate block considered for one section."""

    section: str
    artifact_id: str
    artifact_name: str
    block_id: str
    block_label: str
    included: bool
    reason: str
    priority: int
    token_count: int


@dataclass(frozen=True)
class InjectionReport:
    entries: Tuple[InjectionReportEntry, ...]
    total_tokens_used: int
    total_tokens_budget: int
    blocks_included: int
    blocks_omitted: int


@dataclass(frozen=True)
class CompileInput:
    """A single compilation request."""

    raw_input: str
    dial: int = DEFAULT_DIAL
    token_budget: int = 0
    template_override: Optional[str] = None
    force_artifacts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CompileOutput:
    spec: PromptSpec
    rendered: str
    lint: LintReport
    injection: InjectionReport


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with a trailing Z."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


__all__ = [
    "Artifact",
    "ArtifactBlock",
    "ArtifactRef",
    "CompilationMeta",
    "CompileInput",
    "CompileOutput",
    "DEFAULT_DIAL",
    "InjectedBlock",
    "InjectionReport",
    "InjectionReportEntry",
    "LintReport",
    "LintResult",
    "LintSeverity",
    "MAX_DIAL",
    "MIN_DIAL",
    "PromptSpec",
    "PromptSpecSection",
    "REASON_DO_NOT_SEND",
    "REASON_INCLUDED",
    "REASON_NO_MATCHING_TAGS",
    "REASON_OVER_BUDGET",
    "SectionSpec",
    "TemplateDefinition",
    "TemplateId",
    "utc_timestamp",
]
