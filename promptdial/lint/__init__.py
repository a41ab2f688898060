"""Rule-based lint and scoring for compiled prompts."""

from .engine import LintEngine, run_lint
from .rules import DEFAULT_RULES, LINT_TEMPLATE_KEYWORDS, SENSITIVE_TAGS, LintRule
from .scorer import PASS_THRESHOLD, calculate_score

__all__ = [
    "DEFAULT_RULES",
    "LINT_TEMPLATE_KEYWORDS",
    "LintEngine",
    "LintRule",
    "PASS_THRESHOLD",
    "SENSITIVE_TAGS",
    "calculate_score",
    "run_lint",
]
