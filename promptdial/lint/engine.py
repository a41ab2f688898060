"""Runs lint rules over a compiled spec."""

from __future__ import annotations

from typing import Iterable, List

from ..logging import get_logger
from ..models import LintReport, LintResult, PromptSpec
from .rules import DEFAULT_RULES, LintRule
from .scorer import calculate_score


class LintEngine:
    """Evaluates a fixed rule set; findings are data and never abort compilation."""

    def __init__(self, rules: Iterable[LintRule] = DEFAULT_RULES) -> None:
        self.rules = tuple(rules)
        self.logger = get_logger("lint")

    def run(self, spec: PromptSpec, rendered: str) -> List[LintResult]:
        results: List[LintResult] = []
        for rule in self.rules:
            result = rule(spec, rendered)
            if result is not None:
                self.logger.debug("Lint rule %s fired (%s)", rule.id, result.severity)
                results.append(result)
        return results

    def report(self, spec: PromptSpec, rendered: str) -> LintReport:
        return calculate_score(self.run(spec, rendered))


def run_lint(spec: PromptSpec, rendered: str) -> List[LintResult]:
    return LintEngine().run(spec, rendered)


__all__ = ["LintEngine", "run_lint"]
