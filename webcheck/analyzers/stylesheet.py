"""Brace, comment and string balance checks for stylesheets."""

from __future__ import annotations

from typing import List

from .base import LanguageAnalyzer
from ..logging import get_logger
from ..models import FileInput, Issue, RuleId, Severity

_SOURCE = "stylesheet-analyzer"
_QUOTES = ('"', "'")

logger = get_logger("analyzers.stylesheet")


class StylesheetAnalyzer(LanguageAnalyzer):
    """Single-pass scanner tracking nesting depth, strings and block comments.

    This is not a tokenizer. It only answers whether braces, comments and
    quoted strings are balanced, so a selector or declaration that is
    otherwise malformed goes unnoticed.
    """

    name = "stylesheet"
    supported_extensions = (".css",)

    def analyze(self, file: FileInput) -> List[Issue]:
        issues: List[Issue] = []
        lines = file.content.split("\n")

        depth = 0
        in_string = False
        string_char = ""
        in_comment = False

        for line_index, line in enumerate(lines):
            line_number = line_index + 1
            length = len(line)
            i = 0
            while i < length:
                char = line[i]
                next_char = line[i + 1] if i + 1 < length else ""

                if not in_string and not in_comment and char == "/" and next_char == "*":
                    in_comment = True
                    i += 2
                    continue
                if in_comment and char == "*" and next_char == "/":
                    in_comment = False
                    i += 2
                    continue
                if in_comment:
                    i += 1
                    continue

                if not in_string and char in _QUOTES:
                    in_string = True
                    string_char = char
                    i += 1
                    continue
                if in_string and char == string_char and (i == 0 or line[i - 1] != "\\"):
                    in_string = False
                    i += 1
                    continue
                if in_string:
                    i += 1
                    continue

                if char == "{":
                    depth += 1
                elif char == "}":
                    depth -= 1
                    if depth < 0:
                        issues.append(
                            self._issue(
                                file,
                                "Unexpected closing brace",
                                RuleId.BRACE_UNEXPECTED,
                                line_number,
                                i,
                            )
                        )
                        depth = 0
                i += 1

        last_line = len(lines)
        if depth > 0:
            issues.append(
                self._issue(
                    file,
                    f"Unclosed brace: {depth} opening brace(s) without matching close",
                    RuleId.BRACE_UNCLOSED,
                    last_line,
                )
            )
        if in_comment:
            issues.append(self._issue(file, "Unclosed comment", RuleId.COMMENT_UNCLOSED, last_line))
        if in_string:
            issues.append(self._issue(file, "Unclosed string", RuleId.STRING_UNCLOSED, last_line))

        logger.debug("Stylesheet %s: %d issue(s)", file.path, len(issues))
        return issues

    @staticmethod
    def _issue(file: FileInput, message: str, rule_id: str, line: int, column: int = 0) -> Issue:
        return Issue(
            message=message,
            file_path=file.path,
            line=line,
            column=column,
            severity=Severity.ERROR,
            rule_id=rule_id,
            source=_SOURCE,
        )


__all__ = ["StylesheetAnalyzer"]
