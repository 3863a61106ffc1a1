"""Batch analysis pipeline: per-file analyzers, then cross-file validators."""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Sequence

from .analyzers import LanguageAnalyzer, discover_analyzers
from .config import WebCheckConfig
from .logging import get_logger
from .models import AnalysisResponse, CheckResult, FileInput, Issue, RuleId, Severity
from .validators import CrossFileValidator, discover_validators

logger = get_logger("orchestrator")


class StaticAnalyzer:
    """Coordinates single-file analyzers and cross-file validators for one batch.

    ``analyze`` never raises. A component that fails unexpectedly is logged
    and reported as an ``analyzer-internal-error`` issue; the remaining
    components still run.
    """

    def __init__(
        self,
        analyzers: Optional[Iterable[LanguageAnalyzer]] = None,
        validators: Optional[Iterable[CrossFileValidator]] = None,
    ) -> None:
        self.analyzers: List[LanguageAnalyzer] = (
            list(analyzers) if analyzers is not None else discover_analyzers()
        )
        self.validators: List[CrossFileValidator] = (
            list(validators) if validators is not None else discover_validators()
        )

    @classmethod
    def from_config(cls, config: WebCheckConfig) -> "StaticAnalyzer":
        """Build an analyzer honoring the enablement settings of ``config``."""
        return cls(
            analyzers=discover_analyzers(config.analyzers.enabled),
            validators=discover_validators(
                config.validators.enabled,
                ignore_patterns=config.validators.ignore_classes,
            ),
        )

    def analyze(self, files: Sequence[FileInput]) -> AnalysisResponse:
        issues: List[Issue] = []

        for file in files:
            analyzer = self.analyzer_for(file.path)
            if analyzer is None:
                logger.debug("No analyzer for %s; skipping", file.path)
                continue
            try:
                issues.extend(analyzer.analyze(file))
            except Exception as exc:
                logger.exception("Analyzer %s failed on %s", analyzer.name, file.path)
                issues.append(_internal_error(file.path, analyzer.name, exc))

        for validator in self.validators:
            try:
                issues.extend(validator.validate(files))
            except Exception as exc:
                logger.exception("Validator %s failed", validator.name)
                issues.append(_internal_error("", validator.name, exc))

        response = AnalysisResponse(lint=CheckResult.from_issues(issues))
        summary = response.lint.summary
        logger.info(
            "Analyzed %d file(s): %d error(s), %d warning(s), %d info",
            len(files),
            summary.error_count,
            summary.warning_count,
            summary.info_count,
        )
        return response

    async def analyze_async(self, files: Sequence[FileInput]) -> AnalysisResponse:
        """Run ``analyze`` in the default executor so event loops stay responsive."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.analyze, files)

    def analyzer_for(self, path: str) -> Optional[LanguageAnalyzer]:
        for analyzer in self.analyzers:
            if analyzer.supports(path):
                return analyzer
        return None


def analyze(files: Sequence[FileInput]) -> AnalysisResponse:
    """Analyze ``files`` with the default analyzers and validators."""
    return StaticAnalyzer().analyze(files)


def _internal_error(file_path: str, component: str, exc: Exception) -> Issue:
    return Issue(
        message=f"{component} failed: {exc}",
        file_path=file_path,
        line=1,
        column=0,
        severity=Severity.ERROR,
        rule_id=RuleId.INTERNAL_ERROR,
        source=component,
    )


__all__ = ["StaticAnalyzer", "analyze"]
