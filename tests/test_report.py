"""Tests for webcheck.report."""

from __future__ import annotations

from webcheck.models import AnalysisResponse, CheckResult, Issue, Severity
from webcheck.report import format_issue, format_text_report


def _issue(severity: Severity, rule_id: str, message: str) -> Issue:
    return Issue(
        message=message,
        file_path="index.html",
        line=3,
        column=0,
        severity=severity,
        rule_id=rule_id,
        source="test",
    )


def test_clean_report() -> None:
    response = AnalysisResponse(lint=CheckResult.from_issues([]))
    assert format_text_report(response) == "No issues found"


def test_report_groups_by_severity_and_summarises() -> None:
    issues = [
        _issue(Severity.WARNING, "class-undefined", 'CSS class "x" is used'),
        _issue(Severity.ERROR, "tag-unclosed", "Unclosed tag <div>"),
    ]
    report = format_text_report(AnalysisResponse(lint=CheckResult.from_issues(issues)))

    lines = report.splitlines()
    assert lines[0] == "ERRORS (1):"
    assert lines[1] == "  index.html:3:0 [tag-unclosed] Unclosed tag <div>"
    assert "WARNINGS (1):" in lines
    assert "INFO" not in report
    assert lines[-1] == "Summary: 1 errors, 1 warnings, 0 info"


def test_batch_level_issue_has_placeholder_location() -> None:
    issue = Issue("boom", "", 1, 0, Severity.ERROR, "analyzer-internal-error", "x")
    assert format_issue(issue).startswith("  <batch>:1:0")
