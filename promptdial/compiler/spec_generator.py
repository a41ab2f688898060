"""Assembly of the PromptSpec intermediate representation."""

from __future__ import annotations

import uuid
from typing import Mapping, Sequence

from ..models import (
    ArtifactRef,
    CompilationMeta,
    InjectedBlock,
    PromptSpec,
    PromptSpecSection,
    TemplateDefinition,
    utc_timestamp,
)
from .intent import ParsedIntent


def generate_spec(
    parsed_intent: ParsedIntent,
    template: TemplateDefinition,
    dial: int,
    token_budget: int,
    resolved_blocks: Mapping[str, Sequence[InjectedBlock]],
    artifact_refs: Sequence[ArtifactRef],
) -> PromptSpec:
    """Build a spec with zeroed metadata; the pipeline fills ``meta`` afterwards."""
    sections = tuple(
        PromptSpecSection(
            heading=section.heading,
            instruction=section.instruction,
            injected_blocks=tuple(resolved_blocks.get(section.heading, ())),
        )
        for section in template.sections
        if section.min_dial <= dial
    )
    return PromptSpec(
        id=str(uuid.uuid4()),
        raw_input=parsed_intent.cleaned_input,
        template_id=template.id,
        dial=dial,
        token_budget=token_budget,
        system_instruction=template.system_instruction,
        sections=sections,
        constraints=tuple(parsed_intent.constraints),
        artifact_refs=tuple(artifact_refs),
        meta=CompilationMeta(compiled_at=utc_timestamp()),
    )


__all__ = ["generate_spec"]
