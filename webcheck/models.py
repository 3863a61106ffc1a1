"""Core data models shared across webcheck components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List


class Severity(str, Enum):
    """Issue severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class RuleId:
    """Stable rule identifiers reported on every issue."""

    BRACE_UNEXPECTED = "unbalanced-brace-unexpected"
    BRACE_UNCLOSED = "unbalanced-brace-unclosed"
    COMMENT_UNCLOSED = "comment-unclosed"
    STRING_UNCLOSED = "string-unclosed"
    TAG_UNEXPECTED_CLOSE = "tag-unexpected-close"
    TAG_MISMATCH = "tag-mismatch"
    TAG_UNCLOSED = "tag-unclosed"
    MARKUP_PARSE_ERROR = "markup-parse-error"
    SCRIPT_SYNTAX_ERROR = "script-syntax-error"
    SCRIPT_PARSE_ERROR = "script-parse-error"
    CLASS_UNDEFINED = "class-undefined"
    ID_UNDEFINED = "id-undefined"
    INTERNAL_ERROR = "analyzer-internal-error"


@dataclass(frozen=True)
class FileInput:
    """A single source file handed to the analyzers."""

    path: str
    content: str


@dataclass(frozen=True)
class Issue:
    """One reported defect with its location and origin."""

    message: str
    file_path: str
    line: int
    column: int
    severity: Severity
    rule_id: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "filePath": self.file_path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "ruleId": self.rule_id,
            "source": self.source,
        }


@dataclass
class IssueSummary:
    """Per-severity tally of a list of issues."""

    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> "IssueSummary":
        summary = cls()
        for issue in issues:
            if issue.severity is Severity.ERROR:
                summary.error_count += 1
            elif issue.severity is Severity.WARNING:
                summary.warning_count += 1
            elif issue.severity is Severity.INFO:
                summary.info_count += 1
        return summary

    def to_dict(self) -> Dict[str, int]:
        return {
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
        }


@dataclass
class CheckResult:
    """Issues produced by one family of checks plus their summary."""

    issues: List[Issue] = field(default_factory=list)
    summary: IssueSummary = field(default_factory=IssueSummary)

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> "CheckResult":
        collected = list(issues)
        return cls(issues=collected, summary=IssueSummary.from_issues(collected))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary.to_dict(),
        }


@dataclass
class AnalysisResponse:
    """Envelope returned for one batch analysis.

    ``typecheck`` is reserved and always empty.
    """

    lint: CheckResult
    typecheck: CheckResult = field(default_factory=CheckResult)
    success: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "lint": self.lint.to_dict(),
            "typecheck": self.typecheck.to_dict(),
        }
