"""Plain-text rendering of analysis responses."""

from __future__ import annotations

from typing import List

from .models import AnalysisResponse, Issue, Severity

_HEADINGS = (
    (Severity.ERROR, "ERRORS"),
    (Severity.WARNING, "WARNINGS"),
    (Severity.INFO, "INFO"),
)


def format_issue(issue: Issue) -> str:
    location = f"{issue.file_path or '<batch>'}:{issue.line}:{issue.column}"
    return f"  {location} [{issue.rule_id}] {issue.message}"


def format_text_report(response: AnalysisResponse) -> str:
    """Group issues by severity and finish with a one-line summary."""
    issues = response.lint.issues
    if not issues:
        return "No issues found"

    lines: List[str] = []
    for severity, heading in _HEADINGS:
        grouped = [issue for issue in issues if issue.severity is severity]
        if not grouped:
            continue
        lines.append(f"{heading} ({len(grouped)}):")
        lines.extend(format_issue(issue) for issue in grouped)
        lines.append("")

    summary = response.lint.summary
    lines.append(
        f"Summary: {summary.error_count} errors, {summary.warning_count} warnings, "
        f"{summary.info_count} info"
    )
    return "\n".join(lines)


__all__ = ["format_issue", "format_text_report"]
