"""Keyword and regex based classification of raw compile requests."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence, Tuple

from ..templates import DEFAULT_REGISTRY, TemplateRegistry

_REF_PATTERN = re.compile(r"@(\w+)", re.ASCII)

DEFAULT_CONFIDENCE = 0.3
OVERRIDE_CONFIDENCE = 1.0

# Template-selection keywords. The lint rule ``no-template-match`` keeps its
# own table in ``promptdial.lint.rules``; the two are not kept in sync.
TEMPLATE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "academic-report": ("report", "research", "study", "paper", "academic", "thesis"),
        "prd": ("prd", "product", "requirements", "feature", "spec", "specification"),
        "decision-memo": ("decide", "decision", "choose", "option", "memo", "compare"),
        "critique": ("critique", "review", "evaluate", "assess", "assessment", "criticism"),
        "research-brief": ("brief", "summary", "overview", "findings", "digest"),
    }
)

_TONES = r"(formal|casual|technical|conversational|academic)"
_FLAGS = re.IGNORECASE | re.ASCII


def _max_length(match: re.Match[str]) -> str:
    # Case-sensitive: "MAX 200 TOKENS" is reported in words.
    unit = "tokens" if "token" in match.group(0) else "words"
    return f"Max length: {match.group(1)} {unit}"


# Ordered; only the first constraint per prefix is kept.
CONSTRAINT_PATTERNS: Tuple[Tuple[re.Pattern[str], Callable[[re.Match[str]], str]], ...] = (
    (
        re.compile(r"\bfor\s+([\w\s]+?)(?:\s+audience|\s*[,.])", _FLAGS),
        lambda m: f"Audience: {m.group(1).strip()}",
    ),
    (re.compile(rf"\bin\s+{_TONES}\s+tone\b", _FLAGS), lambda m: f"Tone: {m.group(1)}"),
    (re.compile(r"\bunder\s+(\d+)\s+words?\b", _FLAGS), lambda m: f"Max words: {m.group(1)}"),
    (re.compile(rf"\b{_TONES}\b", _FLAGS), lambda m: f"Tone: {m.group(1)}"),
    (re.compile(r"\bmax(?:imum)?\s+(\d+)\s+(?:words?|tokens?)\b", _FLAGS), _max_length),
)


@dataclass(frozen=True)
class ParsedIntent:
    """Classification of one raw input."""

    template_id: str
    confidence: float
    constraints: Tuple[str, ...]
    artifact_refs: Tuple[str, ...]
    cleaned_input: str


def parse_intent(
    raw_input: str,
    template_override: Optional[str] = None,
    *,
    registry: TemplateRegistry = DEFAULT_REGISTRY,
    keywords: Mapping[str, Sequence[str]] = TEMPLATE_KEYWORDS,
) -> ParsedIntent:
    """Classify ``raw_input`` against the registry and extract refs and constraints.

    The override is trusted as-is; validating it is the template lookup's job.
    """
    artifact_refs = tuple(_REF_PATTERN.findall(raw_input))
    # Removing refs can leave doubled inner spaces; only the ends are trimmed.
    cleaned_input = _REF_PATTERN.sub("", raw_input).strip()

    if template_override:
        template_id = template_override
        confidence = OVERRIDE_CONFIDENCE
    else:
        template_id, confidence = _detect_template(cleaned_input, registry, keywords)

    return ParsedIntent(
        template_id=template_id,
        confidence=confidence,
        constraints=extract_constraints(cleaned_input),
        artifact_refs=artifact_refs,
        cleaned_input=cleaned_input,
    )


def extract_constraints(text: str) -> Tuple[str, ...]:
    constraints: list[str] = []
    seen: set[str] = set()
    for pattern, extract in CONSTRAINT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        constraint = extract(match)
        prefix = constraint.split(":", 1)[0]
        if prefix in seen:
            continue
        seen.add(prefix)
        constraints.append(constraint)
    return tuple(constraints)


def _detect_template(
    text: str,
    registry: TemplateRegistry,
    keywords: Mapping[str, Sequence[str]],
) -> Tuple[str, float]:
    lowered = text.lower()
    best_id = registry.default.id
    best_score = 0
    confidence = DEFAULT_CONFIDENCE
    for template in registry:
        score = sum(1 for keyword in keywords.get(template.id, ()) if keyword in lowered)
        # Strictly greater: ties keep the earlier declared template.
        if score > best_score:
            best_score = score
            best_id = template.id
            confidence = min(0.5 + score * 0.2, 1.0)
    return best_id, confidence


__all__ = [
    "CONSTRAINT_PATTERNS",
    "ParsedIntent",
    "TEMPLATE_KEYWORDS",
    "extract_constraints",
    "parse_intent",
]
