"""Tests for lint scoring."""

from __future__ import annotations

from promptdial.lint import PASS_THRESHOLD, calculate_score
from promptdial.models import LintResult


def _result(severity: str) -> LintResult:
    return LintResult(rule_id="r", rule_name="Rule", severity=severity, message="m")  # type: ignore[arg-type]


def test_no_findings_scores_full_marks() -> None:
    report = calculate_score([])

    assert report.score == 100
    assert report.passed is True
    assert report.results == ()


def test_penalties_per_severity() -> None:
    assert calculate_score([_result("error")]).score == 75
    assert calculate_score([_result("warning")]).score == 90
    assert calculate_score([_result("info")]).score == 97
    assert calculate_score([_result("error"), _result("warning"), _result("info")]).score == 62


def test_pass_threshold_is_inclusive() -> None:
    report = calculate_score([_result("warning")] * 3)

    assert report.score == PASS_THRESHOLD
    assert report.passed is True
    assert calculate_score([_result("warning")] * 4).passed is False


def test_score_is_floored_at_zero() -> None:
    report = calculate_score([_result("error")] * 5)

    assert report.score == 0
    assert report.passed is False
