"""Deterministic text rendering of a PromptSpec."""

from __future__ import annotations

from typing import List

from ..models import PromptSpec

RULE = "---"


def render_prompt(spec: PromptSpec) -> str:
    lines: List[str] = ["[System Instruction]", spec.system_instruction, "", RULE]

    for section in spec.sections:
        lines.extend(["", f"# {section.heading}", "", section.instruction])
        for block in section.injected_blocks:
            lines.extend(["", f"## [Context: {block.block_label}]", block.content])
        lines.extend(["", RULE])

    if spec.constraints:
        lines.extend(["", "[Constraints]", "\n".join(spec.constraints)])

    return "\n".join(lines)


__all__ = ["render_prompt"]
