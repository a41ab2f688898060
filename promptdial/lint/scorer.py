"""Lint score computation."""

from __future__ import annotations

from typing import Iterable

from ..models import LintReport, LintResult

PASS_THRESHOLD = 70

SEVERITY_PENALTIES = {
    "error": 25,
    "warning": 10,
    "info": 3,
}


def calculate_score(results: Iterable[LintResult]) -> LintReport:
    """Score 100 minus a fixed penalty per finding, floored at 0."""
    findings = tuple(results)
    score = 100
    for result in findings:
        score -= SEVERITY_PENALTIES.get(result.severity, 0)
    score = max(score, 0)
    return LintReport(score=score, results=findings, passed=score >= PASS_THRESHOLD)


__all__ = ["PASS_THRESHOLD", "SEVERITY_PENALTIES", "calculate_score"]
