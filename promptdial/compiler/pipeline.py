"""End-to-end compilation of a raw request into a rendered prompt."""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..artifacts.resolver import FetchFn, ResolveFn
from ..lint import LintEngine
from ..logging import get_logger
from ..models import (
    Artifact,
    ArtifactRef,
    CompileInput,
    CompileOutput,
    InjectedBlock,
    InjectionReport,
    InjectionReportEntry,
)
from ..templates import DEFAULT_REGISTRY, TemplateRegistry
from ..tokens import estimate_tokens
from .intent import parse_intent
from .renderer import render_prompt
from .selector import section_tags, select_blocks
from .spec_generator import generate_spec


class PromptCompiler:
    """Runs parse, resolve, select, generate, render and lint for one input.

    The only suspension points are the two collaborators. Everything else is
    synchronous and keeps no state between calls, so one compiler can serve
    concurrent compilations.
    """

    def __init__(
        self,
        registry: TemplateRegistry | None = None,
        lint_engine: LintEngine | None = None,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.lint_engine = lint_engine or LintEngine()
        self.logger = get_logger("compiler")

    async def compile(
        self,
        compile_input: CompileInput,
        resolve_artifacts: ResolveFn,
        fetch_artifact: FetchFn,
    ) -> CompileOutput:
        """Compile ``compile_input``; raises ``UnknownTemplateError`` for a bad template id."""
        start = time.perf_counter()

        parsed = parse_intent(
            compile_input.raw_input,
            compile_input.template_override,
            registry=self.registry,
        )
        template = self.registry.get(parsed.template_id)
        self.logger.debug(
            "Detected template %s (confidence %.2f)", template.id, parsed.confidence
        )

        tokens = [*parsed.artifact_refs, *compile_input.force_artifacts]
        refs: List[ArtifactRef] = list(await resolve_artifacts(tokens)) if tokens else []
        artifacts = await self._fetch_artifacts(refs, fetch_artifact)

        budget = compile_input.token_budget
        resolved_blocks: Dict[str, Tuple[InjectedBlock, ...]] = {}
        entries: List[InjectionReportEntry] = []
        tokens_used = 0
        for section in template.sections:
            if section.min_dial > compile_input.dial:
                continue
            selection = select_blocks(
                artifacts,
                section_tags(section.heading),
                budget,
                tokens_used=tokens_used,
                section=section.heading,
            )
            tokens_used += selection.tokens_used
            entries.extend(selection.entries)
            if selection.included:
                resolved_blocks[section.heading] = selection.included

        spec = generate_spec(
            parsed,
            template,
            compile_input.dial,
            budget,
            resolved_blocks,
            refs,
        )
        rendered = render_prompt(spec)
        lint = self.lint_engine.report(spec, rendered)

        duration_ms = (time.perf_counter() - start) * 1000
        spec = replace(
            spec,
            meta=replace(
                spec.meta,
                total_tokens=estimate_tokens(rendered),
                compile_duration_ms=duration_ms,
                lint_score=lint.score,
            ),
        )

        included = sum(1 for entry in entries if entry.included)
        injection = InjectionReport(
            entries=tuple(entries),
            total_tokens_used=tokens_used,
            total_tokens_budget=budget,
            blocks_included=included,
            blocks_omitted=len(entries) - included,
        )
        self.logger.debug(
            "Compiled %s at dial %d: %d section(s), %d/%d block(s), lint %d",
            template.id,
            compile_input.dial,
            len(spec.sections),
            included,
            len(entries),
            lint.score,
        )
        return CompileOutput(spec=spec, rendered=rendered, lint=lint, injection=injection)

    async def _fetch_artifacts(self, refs: List[ArtifactRef], fetch_artifact: FetchFn) -> List[Artifact]:
        # One fetch per resolved reference, in order; repeated refs repeat.
        artifacts: List[Artifact] = []
        for ref in refs:
            if not ref.resolved:
                self.logger.debug("Unresolved artifact reference @%s", ref.raw)
                continue
            artifact = await fetch_artifact(ref.artifact_id)
            if artifact is None:
                self.logger.warning("Artifact %s resolved but could not be fetched", ref.artifact_id)
                continue
            artifacts.append(artifact)
        return artifacts


async def compile_prompt(
    compile_input: CompileInput,
    resolve_artifacts: ResolveFn,
    fetch_artifact: FetchFn,
    *,
    registry: Optional[TemplateRegistry] = None,
) -> CompileOutput:
    return await PromptCompiler(registry=registry).compile(compile_input, resolve_artifacts, fetch_artifact)


__all__ = ["PromptCompiler", "compile_prompt"]
