"""Lint rules evaluated over a compiled spec and its rendered text."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from ..models import LintResult, PromptSpec
from ..tokens import estimate_tokens

RuleCheck = Callable[[PromptSpec, str], Optional[LintResult]]

MIN_INPUT_WORDS = 10

# Separate from the intent parser's keyword table; the two are not kept in sync.
LINT_TEMPLATE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "academic-report": (
            "research",
            "study",
            "analysis",
            "findings",
            "methodology",
            "hypothesis",
            "literature",
            "academic",
            "paper",
            "thesis",
            "report",
        ),
        "prd": (
            "product",
            "feature",
            "requirements",
            "user story",
            "stakeholder",
            "roadmap",
            "specification",
            "mvp",
            "sprint",
        ),
        "decision-memo": (
            "decision",
            "options",
            "tradeoff",
            "recommend",
            "evaluate",
            "compare",
            "choose",
            "pros",
            "cons",
            "alternative",
        ),
        "critique": (
            "critique",
            "review",
            "evaluate",
            "strengths",
            "weaknesses",
            "feedback",
            "assess",
            "opinion",
            "argument",
        ),
        "research-brief": (
            "brief",
            "overview",
            "summary",
            "landscape",
            "market",
            "trends",
            "survey",
            "competitive",
            "insights",
        ),
    }
)

SENSITIVE_TAGS = frozenset({"do-not-send", "donotsend", "sensitive", "internal-only"})


@dataclass(frozen=True)
class LintRule:
    """A named check returning at most one finding."""

    id: str
    name: str
    check: RuleCheck

    def __call__(self, spec: PromptSpec, rendered: str) -> Optional[LintResult]:
        return self.check(spec, rendered)


def _check_vague_input(spec: PromptSpec, rendered: str) -> Optional[LintResult]:
    words = spec.raw_input.split()
    if len(words) >= MIN_INPUT_WORDS:
        return None
    return LintResult(
        rule_id="vague-input",
        rule_name="Vague Input",
        severity="warning",
        message=f"Input is only {len(words)} words. More specific inputs produce better prompts.",
        fix="Add more detail: specify the topic, audience, purpose, and desired depth.",
    )


def _check_missing_constraints(spec: PromptSpec, rendered: str) -> Optional[LintResult]:
    if spec.constraints:
        return None
    return LintResult(
        rule_id="missing-constraints",
        rule_name="Missing Constraints",
        severity="warning",
        message=(
            "No constraints detected. Prompts without audience, tone, or length guidance "
            "tend to produce generic output."
        ),
        fix="Specify constraints like target audience, tone (formal/casual), length, or format requirements.",
    )


def _check_template_match(spec: PromptSpec, rendered: str) -> Optional[LintResult]:
    lowered = spec.raw_input.lower()
    keywords = LINT_TEMPLATE_KEYWORDS.get(spec.template_id, ())
    if any(keyword in lowered for keyword in keywords):
        return None
    return LintResult(
        rule_id="no-template-match",
        rule_name="Weak Template Match",
        severity="warning",
        message=(
            f'Input doesn\'t contain keywords typical for the "{spec.template_id}" template. '
            "The auto-detected template may not be the best fit."
        ),
        fix=(
            "Consider using a different template, or add context that aligns with the "
            f'"{spec.template_id}" format.'
        ),
    )


def _check_budget(spec: PromptSpec, rendered: str) -> Optional[LintResult]:
    if spec.token_budget <= 0:
        return None
    estimated = estimate_tokens(rendered)
    if estimated <= spec.token_budget:
        return None
    return LintResult(
        rule_id="budget-exceeded",
        rule_name="Budget Exceeded",
        severity="error",
        message=(
            f"Rendered prompt is ~{estimated} tokens, exceeding the "
            f"{spec.token_budget} token budget."
        ),
        fix="Lower the dial level, reduce artifact inclusions, or increase the token budget.",
    )


def _check_empty_sections(spec: PromptSpec, rendered: str) -> Optional[LintResult]:
    empty = [
        section
        for section in spec.sections
        if not section.instruction.strip() and not section.injected_blocks
    ]
    if not empty:
        return None
    names = ", ".join(f'"{section.heading}"' for section in empty)
    return LintResult(
        rule_id="empty-sections",
        rule_name="Empty Sections",
        severity="warning",
        message=f"{len(empty)} section(s) have no content: {names}.",
        fix="Remove empty sections by lowering the dial, or add instructions/artifacts to fill them.",
    )


def _check_sensitive_leak(spec: PromptSpec, rendered: str) -> Optional[LintResult]:
    # Matches on tags only; the do_not_send flag is not consulted.
    leaked = [
        f"{block.artifact_name}/{block.block_label}"
        for section in spec.sections
        for block in section.injected_blocks
        if any(tag.lower() in SENSITIVE_TAGS for tag in block.tags)
    ]
    if not leaked:
        return None
    return LintResult(
        rule_id="do-not-send-leak",
        rule_name="Do-Not-Send Leak",
        severity="error",
        message=f"{len(leaked)} potentially sensitive block(s) in output: {', '.join(leaked)}.",
        fix=(
            "Review blocks with sensitive tags (do-not-send, sensitive, internal-only). "
            "Mark them doNotSend: true in the artifact to exclude from output."
        ),
    )


DEFAULT_RULES: Tuple[LintRule, ...] = (
    LintRule("vague-input", "Vague Input", _check_vague_input),
    LintRule("missing-constraints", "Missing Constraints", _check_missing_constraints),
    LintRule("no-template-match", "Weak Template Match", _check_template_match),
    LintRule("budget-exceeded", "Budget Exceeded", _check_budget),
    LintRule("empty-sections", "Empty Sections", _check_empty_sections),
    LintRule("do-not-send-leak", "Do-Not-Send Leak", _check_sensitive_leak),
)


__all__ = [
    "DEFAULT_RULES",
    "LINT_TEMPLATE_KEYWORDS",
    "LintRule",
    "MIN_INPUT_WORDS",
    "SENSITIVE_TAGS",
]
