"""Tree-sitter powered syntax check for JavaScript files."""

from __future__ import annotations

from typing import List, Optional, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from .base import LanguageAnalyzer
from ..logging import get_logger
from ..models import FileInput, Issue, RuleId, Severity

_SOURCE = "tree-sitter"
_SNIPPET_LIMIT = 40

logger = get_logger("analyzers.script")


class ScriptAnalyzer(LanguageAnalyzer):
    """Reports the first syntax error tree-sitter finds in a script.

    tree-sitter recovers from errors instead of raising, so the tree is
    searched for the first ``ERROR`` or missing node in document order.
    """

    name = "script"
    supported_extensions = (".js", ".mjs")

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def analyze(self, file: FileInput) -> List[Issue]:
        source_bytes = file.content.encode("utf-8")
        try:
            tree = self._get_parser().parse(source_bytes)
        except Exception as exc:
            logger.debug("tree-sitter failed on %s: %s", file.path, exc)
            return [
                self._issue(
                    file, str(exc) or type(exc).__name__, RuleId.SCRIPT_PARSE_ERROR, 1, 0
                )
            ]

        if not tree.root_node.has_error:
            return []

        node = _first_error_node(tree.root_node)
        if node is None:
            return [self._issue(file, "Syntax error", RuleId.SCRIPT_SYNTAX_ERROR, 1, 0)]

        line, column = _position(node, file.content)
        if node.is_missing:
            message = f"Missing `{node.type}`"
        else:
            message = f"Syntax error near `{_snippet(node, source_bytes)}`"
        return [self._issue(file, message, RuleId.SCRIPT_SYNTAX_ERROR, line, column)]

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_javascript.language()))
        return self._parser

    @staticmethod
    def _issue(file: FileInput, message: str, rule_id: str, line: int, column: int) -> Issue:
        return Issue(
            message=message,
            file_path=file.path,
            line=line,
            column=column,
            severity=Severity.ERROR,
            rule_id=rule_id,
            source=_SOURCE,
        )


def _first_error_node(root: Node) -> Optional[Node]:
    pending = [root]
    while pending:
        node = pending.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Children are pushed in reverse to keep document order.
        for child in reversed(node.children):
            if child.has_error or child.is_missing:
                pending.append(child)
    return None


def _position(node: Node, content: str) -> Tuple[int, int]:
    row, byte_column = node.start_point
    lines = content.split("\n")
    if row >= len(lines):
        return row + 1, 0
    prefix = lines[row].encode("utf-8")[:byte_column]
    return row + 1, len(prefix.decode("utf-8", errors="ignore"))


def _snippet(node: Node, source_bytes: bytes) -> str:
    text = source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")
    first_line = text.strip().split("\n", 1)[0]
    if len(first_line) > _SNIPPET_LIMIT:
        first_line = first_line[: _SNIPPET_LIMIT - 3].rstrip() + "..."
    return first_line


__all__ = ["ScriptAnalyzer"]
