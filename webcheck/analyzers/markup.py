"""Tag nesting checks for HTML documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .base import LanguageAnalyzer
from .tag_events import VOID_ELEMENTS, ParserFactory, TagEventParser
from ..logging import get_logger
from ..models import FileInput, Issue, RuleId, Severity

_SOURCE = "html-parser"

logger = get_logger("analyzers.markup")


@dataclass
class TagFrame:
    """An element that has been opened and not yet closed."""

    name: str
    line: int


class MarkupAnalyzer(LanguageAnalyzer):
    """Tracks open elements on a stack and reports unbalanced tags.

    A closing tag that does not match the innermost open element is reported
    and then dropped; the stack is not unwound. One stray tag therefore
    produces one issue instead of a cascade.
    """

    name = "markup"
    supported_extensions = (".html", ".htm")

    def __init__(self, parser_factory: ParserFactory = TagEventParser) -> None:
        self._parser_factory = parser_factory

    def analyze(self, file: FileInput) -> List[Issue]:
        issues: List[Issue] = []
        stack: List[TagFrame] = []
        current_line = 1

        def on_open(name: str, _attributes: Dict[str, str]) -> None:
            lowered = name.lower()
            if lowered not in VOID_ELEMENTS:
                stack.append(TagFrame(name=lowered, line=current_line))

        def on_close(name: str) -> None:
            lowered = name.lower()
            if lowered in VOID_ELEMENTS:
                return
            if not stack:
                issues.append(
                    self._issue(
                        file,
                        f"Unexpected closing tag </{name}>",
                        RuleId.TAG_UNEXPECTED_CLOSE,
                        current_line,
                    )
                )
                return
            expected = stack[-1]
            if expected.name != lowered:
                issues.append(
                    self._issue(
                        file,
                        f"Mismatched closing tag: expected </{expected.name}>, found </{name}>",
                        RuleId.TAG_MISMATCH,
                        current_line,
                    )
                )
            else:
                stack.pop()

        def on_text(text: str) -> None:
            nonlocal current_line
            current_line += text.count("\n")

        parser = self._parser_factory(on_open=on_open, on_close=on_close, on_text=on_text)
        try:
            parser.run(file.content)
        except Exception as exc:
            logger.debug("Markup parser failed on %s: %s", file.path, exc)
            issues.append(
                self._issue(file, str(exc) or type(exc).__name__, RuleId.MARKUP_PARSE_ERROR, current_line)
            )

        for frame in stack:
            issues.append(
                self._issue(file, f"Unclosed tag <{frame.name}>", RuleId.TAG_UNCLOSED, frame.line)
            )

        logger.debug("Markup %s: %d issue(s)", file.path, len(issues))
        return issues

    @staticmethod
    def _issue(file: FileInput, message: str, rule_id: str, line: int) -> Issue:
        return Issue(
            message=message,
            file_path=file.path,
            line=line,
            column=0,
            severity=Severity.ERROR,
            rule_id=rule_id,
            source=_SOURCE,
        )


__all__ = ["MarkupAnalyzer", "TagFrame"]
