"""Structural checks for script, markup and stylesheet sources."""

from .models import (
    AnalysisResponse,
    CheckResult,
    FileInput,
    Issue,
    IssueSummary,
    RuleId,
    Severity,
)
from .orchestrator import StaticAnalyzer, analyze

__all__ = [
    "AnalysisResponse",
    "CheckResult",
    "FileInput",
    "Issue",
    "IssueSummary",
    "RuleId",
    "Severity",
    "StaticAnalyzer",
    "analyze",
]
