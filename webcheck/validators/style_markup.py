"""Cross-file check that markup only references defined classes and ids."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Pattern, Sequence, Set

from .base import CrossFileValidator
from ..analyzers.tag_events import ParserFactory, TagEventParser
from ..logging import get_logger
from ..models import FileInput, Issue, RuleId, Severity

_SOURCE = "html-css-validator"
_STYLESHEET_SUFFIX = ".css"
_MARKUP_SUFFIXES = (".html", ".htm")

_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
_URL_PATTERN = re.compile(r"url\s*\([^)]*\)", re.IGNORECASE)
_INLINE_STYLE_PATTERN = re.compile(r"<style[^>]*>(.*?)</style>", re.IGNORECASE | re.DOTALL)
_CLASS_SELECTOR = re.compile(r"\.([a-zA-Z_-][a-zA-Z0-9_-]*)")
_ID_SELECTOR = re.compile(r"#([a-zA-Z_][a-zA-Z0-9_-]*)")
_WHITESPACE = re.compile(r"\s+")

# Template placeholders and framework bindings that only resolve at runtime.
_DYNAMIC_CLASS_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"^\{\{.*\}\}$"),
    re.compile(r"^<%.*%>$"),
    re.compile(r"^\$\{.*\}$"),
    re.compile(r"^\[.*\]$"),
    re.compile(r"^:.*$"),
    re.compile(r"^v-"),
    re.compile(r"^ng-"),
    re.compile(r"^x-"),
)

# Utility-first CSS framework shapes (Tailwind and friends).
_UTILITY_FRAMEWORK_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"^-?[mpwh][trblxy]?-"),
    re.compile(r"^(flex|grid|block|inline|hidden|visible|absolute|relative|fixed|sticky)"),
    re.compile(r"^(text|bg|border|rounded|shadow|opacity|z)-"),
    re.compile(r"^(sm|md|lg|xl|2xl):"),
    re.compile(r"^(hover|focus|active|disabled|dark):"),
    re.compile(r"^(justify|items|content|self)-"),
    re.compile(r"^(gap|space)-"),
    re.compile(r"^(font|leading|tracking)-"),
    re.compile(r"^(overflow|cursor|pointer|transition|duration|ease)-"),
)

_GENERATED_CLASS_PATTERNS = _DYNAMIC_CLASS_PATTERNS + _UTILITY_FRAMEWORK_PATTERNS

logger = get_logger("validators.style_markup")


@dataclass
class SelectorUsage:
    """A class or id referenced from a markup attribute."""

    name: str
    kind: str
    file_path: str
    line: int


@dataclass
class SelectorDefinitions:
    """Class and id names declared anywhere in the batch."""

    classes: Set[str] = field(default_factory=set)
    ids: Set[str] = field(default_factory=set)


def is_generated_class_name(name: str, extra: Iterable[Pattern[str]] = ()) -> bool:
    """Return True when ``name`` looks templated or framework-supplied."""
    for pattern in _GENERATED_CLASS_PATTERNS:
        if pattern.search(name):
            return True
    return any(pattern.search(name) for pattern in extra)


def extract_definitions(stylesheet: str, definitions: SelectorDefinitions) -> None:
    """Add every class and id named in the top-level selectors of ``stylesheet``."""
    cleaned = _COMMENT_PATTERN.sub("", stylesheet)
    cleaned = _URL_PATTERN.sub("", cleaned)

    selectors: List[str] = []
    current: List[str] = []
    depth = 0
    for char in cleaned:
        if char == "{":
            if depth == 0:
                selectors.append("".join(current))
                current = []
            depth += 1
        elif char == "}":
            depth -= 1
        elif depth == 0:
            current.append(char)

    selector_text = " ".join(selectors)
    definitions.classes.update(_CLASS_SELECTOR.findall(selector_text))
    definitions.ids.update(_ID_SELECTOR.findall(selector_text))


def extract_inline_definitions(markup: str, definitions: SelectorDefinitions) -> None:
    """Run definition extraction over each ``<style>`` block of a document."""
    for match in _INLINE_STYLE_PATTERN.finditer(markup):
        extract_definitions(match.group(1), definitions)


class StyleMarkupValidator(CrossFileValidator):
    """Reports classes and ids used in markup but defined in no stylesheet.

    Definitions are gathered from every stylesheet and inline style block
    before any usage is checked, so a rule in one file covers markup in
    another.
    """

    name = "style-markup"

    def __init__(
        self,
        ignore_patterns: Sequence[str] = (),
        parser_factory: ParserFactory = TagEventParser,
    ) -> None:
        self._ignore_patterns = [re.compile(pattern) for pattern in ignore_patterns]
        self._parser_factory = parser_factory

    def validate(self, files: Sequence[FileInput]) -> List[Issue]:
        definitions = self.collect_definitions(files)

        usages: List[SelectorUsage] = []
        for file in files:
            if file.path.endswith(_MARKUP_SUFFIXES):
                usages.extend(self.collect_usages(file))

        issues: List[Issue] = []
        for usage in usages:
            if usage.kind == "class" and usage.name not in definitions.classes:
                if is_generated_class_name(usage.name, self._ignore_patterns):
                    continue
                issues.append(
                    self._issue(
                        usage,
                        f'CSS class "{usage.name}" is used but not defined in any CSS file',
                        RuleId.CLASS_UNDEFINED,
                    )
                )
            elif usage.kind == "id" and usage.name not in definitions.ids:
                issues.append(
                    self._issue(
                        usage,
                        f'CSS ID "{usage.name}" is used but not defined in any CSS file',
                        RuleId.ID_UNDEFINED,
                    )
                )

        logger.debug(
            "Checked %d selector usage(s) against %d class(es) and %d id(s): %d issue(s)",
            len(usages),
            len(definitions.classes),
            len(definitions.ids),
            len(issues),
        )
        return issues

    def collect_definitions(self, files: Sequence[FileInput]) -> SelectorDefinitions:
        definitions = SelectorDefinitions()
        for file in files:
            if file.path.endswith(_STYLESHEET_SUFFIX):
                extract_definitions(file.content, definitions)
            if file.path.endswith(_MARKUP_SUFFIXES):
                extract_inline_definitions(file.content, definitions)
        return definitions

    def collect_usages(self, file: FileInput) -> List[SelectorUsage]:
        usages: List[SelectorUsage] = []
        current_line = 1

        def on_open(_name: str, attributes: Dict[str, str]) -> None:
            class_attr = attributes.get("class")
            if class_attr:
                for token in _WHITESPACE.split(class_attr):
                    if token:
                        usages.append(SelectorUsage(token, "class", file.path, current_line))
            id_attr = attributes.get("id")
            if id_attr:
                usages.append(SelectorUsage(id_attr, "id", file.path, current_line))

        def on_text(text: str) -> None:
            nonlocal current_line
            current_line += text.count("\n")

        parser = self._parser_factory(on_open=on_open, on_text=on_text)
        try:
            parser.run(file.content)
        except Exception as exc:
            # The markup analyzer reports parse failures for this file.
            logger.debug("Ignoring parse failure in %s: %s", file.path, exc)
        return usages

    @staticmethod
    def _issue(usage: SelectorUsage, message: str, rule_id: str) -> Issue:
        return Issue(
            message=message,
            file_path=usage.file_path,
            line=usage.line,
            column=0,
            severity=Severity.WARNING,
            rule_id=rule_id,
            source=_SOURCE,
        )


__all__ = [
    "SelectorDefinitions",
    "SelectorUsage",
    "StyleMarkupValidator",
    "extract_definitions",
    "extract_inline_definitions",
    "is_generated_class_name",
]
