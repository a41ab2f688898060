"""Template catalog for prompt compilation."""

from .definitions import (
    ACADEMIC_REPORT,
    BUILTIN_TEMPLATES,
    CRITIQUE,
    DECISION_MEMO,
    PRD,
    RESEARCH_BRIEF,
)
from .registry import DEFAULT_REGISTRY, TemplateRegistry, UnknownTemplateError, get_template

__all__ = [
    "ACADEMIC_REPORT",
    "BUILTIN_TEMPLATES",
    "CRITIQUE",
    "DECISION_MEMO",
    "DEFAULT_REGISTRY",
    "PRD",
    "RESEARCH_BRIEF",
    "TemplateRegistry",
    "UnknownTemplateError",
    "get_template",
]
