"""Tests for webcheck.orchestrator."""

from __future__ import annotations

import asyncio
from typing import List, Sequence

from webcheck import analyze
from webcheck.analyzers import LanguageAnalyzer, StylesheetAnalyzer
from webcheck.config import AnalyzerConfig, ValidatorConfig, WebCheckConfig
from webcheck.models import FileInput, Issue, RuleId, Severity
from webcheck.orchestrator import StaticAnalyzer
from webcheck.validators import CrossFileValidator, StyleMarkupValidator


class ExplodingAnalyzer(LanguageAnalyzer):
    name = "exploding"
    supported_extensions = (".css",)

    def analyze(self, file: FileInput) -> List[Issue]:
        raise KeyError("missing state")


class RecordingValidator(CrossFileValidator):
    name = "recording"

    def __init__(self) -> None:
        self.batches: list[list[str]] = []

    def validate(self, files: Sequence[FileInput]) -> List[Issue]:
        self.batches.append([file.path for file in files])
        return [
            Issue(
                message="batch note",
                file_path="",
                line=1,
                column=0,
                severity=Severity.INFO,
                rule_id="batch-note",
                source=self.name,
            )
        ]


def test_end_to_end_batch_reports_structure_and_selectors() -> None:
    files = [
        FileInput("styles.css", ".a{color:red"),
        FileInput("index.html", '<div class="a b"></div>'),
    ]

    response = analyze(files)

    assert response.success is True
    assert [(issue.rule_id, issue.file_path) for issue in response.lint.issues] == [
        (RuleId.BRACE_UNCLOSED, "styles.css"),
        (RuleId.CLASS_UNDEFINED, "index.html"),
    ]
    assert '"b"' in response.lint.issues[1].message
    assert response.lint.summary.error_count == 1
    assert response.lint.summary.warning_count == 1


def test_type_selector_defines_no_class_and_open_div_is_reported() -> None:
    files = [
        FileInput("styles.css", "a{color:red"),
        FileInput("index.html", '<div class="a b">'),
    ]

    response = analyze(files)

    assert [
        (issue.rule_id, issue.file_path, issue.line) for issue in response.lint.issues
    ] == [
        (RuleId.BRACE_UNCLOSED, "styles.css", 1),
        (RuleId.TAG_UNCLOSED, "index.html", 1),
        (RuleId.CLASS_UNDEFINED, "index.html", 1),
        (RuleId.CLASS_UNDEFINED, "index.html", 1),
    ]
    assert [issue.message for issue in response.lint.issues[2:]] == [
        'CSS class "a" is used but not defined in any CSS file',
        'CSS class "b" is used but not defined in any CSS file',
    ]
    assert response.lint.summary.error_count == 2
    assert response.lint.summary.warning_count == 2
    assert response.lint.summary.info_count == 0
    assert response.typecheck.issues == []


def test_unsupported_and_extensionless_files_are_skipped() -> None:
    files = [
        FileInput("README.md", "}}}"),
        FileInput("Makefile", "</div>"),
    ]

    response = analyze(files)

    assert response.lint.issues == []


def test_dispatch_is_case_insensitive() -> None:
    response = analyze([FileInput("THEME.CSS", "}")])

    assert [issue.rule_id for issue in response.lint.issues] == [RuleId.BRACE_UNEXPECTED]


def test_first_matching_analyzer_wins() -> None:
    analyzer = StaticAnalyzer(
        analyzers=[StylesheetAnalyzer(), ExplodingAnalyzer()],
        validators=[],
    )

    assert analyzer.analyzer_for("a.css").name == "stylesheet"
    assert analyzer.analyze([FileInput("a.css", ".a {}")]).lint.issues == []


def test_component_failures_are_absorbed_into_issues() -> None:
    validator = RecordingValidator()
    analyzer = StaticAnalyzer(analyzers=[ExplodingAnalyzer()], validators=[validator])

    response = analyzer.analyze([FileInput("a.css", ""), FileInput("b.css", "")])

    internal = [issue for issue in response.lint.issues if issue.rule_id == RuleId.INTERNAL_ERROR]
    assert [issue.file_path for issue in internal] == ["a.css", "b.css"]
    assert all(issue.source == "exploding" for issue in internal)
    assert validator.batches == [["a.css", "b.css"]]
    assert response.lint.summary.info_count == 1


def test_failing_validator_does_not_escape() -> None:
    class BrokenValidator(CrossFileValidator):
        name = "broken"

        def validate(self, files):
            raise RuntimeError("nope")

    response = StaticAnalyzer(analyzers=[], validators=[BrokenValidator()]).analyze([])

    assert [issue.rule_id for issue in response.lint.issues] == [RuleId.INTERNAL_ERROR]
    assert "nope" in response.lint.issues[0].message


def test_response_dict_uses_wire_field_names() -> None:
    payload = analyze([FileInput("index.html", "</p>")]).to_dict()

    assert payload["success"] is True
    assert payload["lint"]["summary"] == {"errorCount": 1, "warningCount": 0, "infoCount": 0}
    assert payload["lint"]["issues"] == [
        {
            "message": "Unexpected closing tag </p>",
            "filePath": "index.html",
            "line": 1,
            "column": 0,
            "severity": "error",
            "ruleId": "tag-unexpected-close",
            "source": "html-parser",
        }
    ]
    assert payload["typecheck"] == {
        "issues": [],
        "summary": {"errorCount": 0, "warningCount": 0, "infoCount": 0},
    }


def test_from_config_applies_enablement(tmp_path) -> None:
    config = WebCheckConfig(
        root=tmp_path,
        analyzers=AnalyzerConfig(enabled=["markup"]),
        validators=ValidatorConfig(enabled=["style-markup"], ignore_classes=["^js-"]),
    )

    analyzer = StaticAnalyzer.from_config(config)
    response = analyzer.analyze(
        [
            FileInput("a.css", "}"),
            FileInput("index.html", '<a class="js-open"></a>'),
        ]
    )

    assert [a.name for a in analyzer.analyzers] == ["markup"]
    assert isinstance(analyzer.validators[0], StyleMarkupValidator)
    assert response.lint.issues == []


def test_analyze_async_matches_sync_result() -> None:
    files = [FileInput("index.html", "<div>")]
    analyzer = StaticAnalyzer()

    response = asyncio.run(analyzer.analyze_async(files))

    assert response.to_dict() == analyzer.analyze(files).to_dict()
