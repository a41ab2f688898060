"""Structural contract for specs, artifacts and compile I/O.

The wire shape uses camelCase keys (``rawInput``, ``tokenBudget``); the
models also accept the snake_case attribute names. Nothing here depends on
the compiler, so persisted or transmitted data can be checked on its own.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)
from pydantic.alias_generators import to_camel

from ..models import (
    Artifact,
    ArtifactBlock,
    ArtifactRef,
    CompilationMeta,
    CompileOutput,
    InjectedBlock,
    PromptSpec,
    PromptSpecSection,
)


def _check_range(low: float, high: float | None = None):
    def check(value: float) -> float:
        if value < low or (high is not None and value > high):
            bound = f"between {low} and {high}" if high is not None else f"at least {low}"
            raise ValueError(f"must be {bound}")
        return value

    return AfterValidator(check)


def _check_timestamp(value: str) -> str:
    if "T" not in value:
        raise ValueError("must be an ISO-8601 datetime")
    try:
        datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError("must be an ISO-8601 datetime") from exc
    return value


TemplateIdField = Literal["academic-report", "prd", "decision-memo", "critique", "research-brief"]
DialLevelField = Annotated[StrictInt, Field(ge=0, le=5)]
NonNegativeInt = Annotated[StrictInt, Field(ge=0)]
Number = Union[StrictInt, StrictFloat]
NonNegativeNumber = Annotated[Number, _check_range(0)]
ScoreNumber = Annotated[Number, _check_range(0, 100)]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
Timestamp = Annotated[StrictStr, AfterValidator(_check_timestamp)]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionSpecModel(WireModel):
    heading: NonEmptyStr
    min_dial: DialLevelField
    instruction: NonEmptyStr
    required: StrictBool


class TemplateDefinitionModel(WireModel):
    id: TemplateIdField
    name: NonEmptyStr
    description: NonEmptyStr
    sections: Annotated[List[SectionSpecModel], Field(min_length=1)]
    system_instruction: NonEmptyStr


class ArtifactBlockModel(WireModel):
    id: NonEmptyStr
    label: NonEmptyStr
    content: StrictStr
    tags: List[StrictStr]
    priority: Annotated[StrictInt, Field(ge=0, le=100)]
    do_not_send: StrictBool = False
    token_count: NonNegativeInt

    def to_dataclass(self) -> ArtifactBlock:
        return ArtifactBlock(
            id=self.id,
            label=self.label,
            content=self.content,
            tags=list(self.tags),
            priority=self.priority,
            do_not_send=self.do_not_send,
            token_count=self.token_count,
        )


class ArtifactModel(WireModel):
    id: NonEmptyStr
    name: NonEmptyStr
    aliases: List[StrictStr]
    description: StrictStr
    blocks: List[ArtifactBlockModel]
    version: Annotated[StrictInt, Field(ge=1)]
    created_at: Timestamp
    updated_at: Timestamp
    is_seed: StrictBool = False

    def to_dataclass(self) -> Artifact:
        return Artifact(
            id=self.id,
            name=self.name,
            aliases=list(self.aliases),
            description=self.description,
            blocks=[block.to_dataclass() for block in self.blocks],
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
            is_seed=self.is_seed,
        )


class InjectedBlockModel(WireModel):
    artifact_id: StrictStr
    artifact_name: StrictStr
    block_id: StrictStr
    block_label: StrictStr
    content: StrictStr
    tags: List[StrictStr]
    priority: Number
    token_count: NonNegativeInt

    def to_dataclass(self) -> InjectedBlock:
        return InjectedBlock(
            artifact_id=self.artifact_id,
            artifact_name=self.artifact_name,
            block_id=self.block_id,
            block_label=self.block_label,
            content=self.content,
            tags=tuple(self.tags),
            priority=self.priority,
            token_count=self.token_count,
        )


class PromptSpecSectionModel(WireModel):
    heading: NonEmptyStr
    instruction: StrictStr
    injected_blocks: List[InjectedBlockModel]


class ArtifactRefModel(WireModel):
    raw: StrictStr
    artifact_id: StrictStr
    artifact_name: StrictStr
    resolved: StrictBool


class CompilationMetaModel(WireModel):
    total_tokens: NonNegativeInt
    compile_duration_ms: NonNegativeNumber
    compiled_at: Timestamp
    lint_score: ScoreNumber


class PromptSpecModel(WireModel):
    id: NonEmptyStr
    raw_input: StrictStr
    template_id: TemplateIdField
    dial: DialLevelField
    token_budget: NonNegativeInt
    system_instruction: StrictStr
    sections: Annotated[List[PromptSpecSectionModel], Field(min_length=1)]
    constraints: List[StrictStr]
    artifact_refs: List[ArtifactRefModel]
    meta: CompilationMetaModel

    def to_dataclass(self) -> PromptSpec:
        return PromptSpec(
            id=self.id,
            raw_input=self.raw_input,
            template_id=self.template_id,
            dial=self.dial,
            token_budget=self.token_budget,
            system_instruction=self.system_instruction,
            sections=tuple(
                PromptSpecSection(
                    heading=section.heading,
                    instruction=section.instruction,
                    injected_blocks=tuple(block.to_dataclass() for block in section.injected_blocks),
                )
                for section in self.sections
            ),
            constraints=tuple(self.constraints),
            artifact_refs=tuple(
                ArtifactRef(
                    raw=ref.raw,
                    artifact_id=ref.artifact_id,
                    artifact_name=ref.artifact_name,
                    resolved=ref.resolved,
                )
                for ref in self.artifact_refs
            ),
            meta=CompilationMeta(
                total_tokens=self.meta.total_tokens,
                compile_duration_ms=self.meta.compile_duration_ms,
                compiled_at=self.meta.compiled_at,
                lint_score=self.meta.lint_score,
            ),
        )


class LintResultModel(WireModel):
    rule_id: StrictStr
    rule_name: StrictStr
    severity: Literal["error", "warning", "info"]
    message: StrictStr
    fix: Optional[StrictStr] = None


class LintReportModel(WireModel):
    score: ScoreNumber
    results: List[LintResultModel]
    passed: StrictBool


class InjectionReportEntryModel(WireModel):
    section: StrictStr = ""
    artifact_id: StrictStr
    artifact_name: StrictStr
    block_id: StrictStr
    block_label: StrictStr
    included: StrictBool
    reason: StrictStr
    priority: Number
    token_count: NonNegativeInt


class InjectionReportModel(WireModel):
    entries: List[InjectionReportEntryModel]
    total_tokens_used: NonNegativeInt
    total_tokens_budget: NonNegativeInt
    blocks_included: NonNegativeInt
    blocks_omitted: NonNegativeInt


class CompileInputModel(WireModel):
    raw_input: NonEmptyStr
    dial: DialLevelField
    token_budget: NonNegativeInt
    template_override: Optional[TemplateIdField] = None
    force_artifacts: Optional[List[StrictStr]] = None


class CompileOutputModel(WireModel):
    spec: PromptSpecModel
    rendered: StrictStr
    lint: LintReportModel
    injection: InjectionReportModel


def wire_key(key: Any) -> str:
    """camelCase a snake_case key; keys without underscores pass through."""
    text = str(key)
    return to_camel(text) if "_" in text else text


def to_wire(value: Any) -> Any:
    """Convert a models dataclass (or nested containers) into the camelCase wire shape."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_wire(asdict(value))
    if isinstance(value, Mapping):
        return {wire_key(key): to_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    return value


def spec_to_dict(spec: PromptSpec) -> dict[str, Any]:
    return to_wire(spec)


def spec_from_dict(data: Mapping[str, Any]) -> PromptSpec:
    """Validate wire data and build a ``PromptSpec``; raises ``pydantic.ValidationError``."""
    return PromptSpecModel.model_validate(data).to_dataclass()


def artifact_to_dict(artifact: Artifact) -> dict[str, Any]:
    return to_wire(artifact)


def artifact_from_dict(data: Mapping[str, Any]) -> Artifact:
    return ArtifactModel.model_validate(data).to_dataclass()


def compile_output_to_dict(output: CompileOutput) -> dict[str, Any]:
    return to_wire(output)


__all__ = [
    "ArtifactBlockModel",
    "ArtifactModel",
    "ArtifactRefModel",
    "CompilationMetaModel",
    "CompileInputModel",
    "CompileOutputModel",
    "InjectedBlockModel",
    "InjectionReportEntryModel",
    "InjectionReportModel",
    "LintReportModel",
    "LintResultModel",
    "PromptSpecModel",
    "PromptSpecSectionModel",
    "SectionSpecModel",
    "TemplateDefinitionModel",
    "WireModel",
    "artifact_from_dict",
    "artifact_to_dict",
    "compile_output_to_dict",
    "spec_from_dict",
    "spec_to_dict",
    "to_wire",
    "wire_key",
]
