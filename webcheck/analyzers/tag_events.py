"""Callback-driven tag event source built on the standard HTML parser."""

from __future__ import annotations

from html.parser import HTMLParser
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

OpenTagHandler = Callable[[str, Dict[str, str]], None]
CloseTagHandler = Callable[[str], None]
TextHandler = Callable[[str], None]

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_PARAGRAPH = frozenset({"p"})
_FORM_CONTROLS = frozenset(
    {"input", "option", "optgroup", "select", "button", "datalist", "textarea"}
)
_DEFINITION_TERMS = frozenset({"dt", "dd"})
_RUBY_TEXT = frozenset({"rt", "rp"})
_TABLE_SECTIONS = frozenset({"thead", "tbody"})

# Opening the key tag ends any of the listed elements still innermost.
IMPLIED_CLOSES: Dict[str, FrozenSet[str]] = {
    "tr": frozenset({"tr", "th", "td"}),
    "th": frozenset({"th"}),
    "td": frozenset({"thead", "th", "td"}),
    "body": frozenset({"head", "link", "script"}),
    "li": frozenset({"li"}),
    "option": frozenset({"option"}),
    "optgroup": frozenset({"optgroup", "option"}),
    "dd": _DEFINITION_TERMS,
    "dt": _DEFINITION_TERMS,
    "rt": _RUBY_TEXT,
    "rp": _RUBY_TEXT,
    "tbody": _TABLE_SECTIONS,
    "tfoot": _TABLE_SECTIONS,
}
IMPLIED_CLOSES.update(
    (tag, _FORM_CONTROLS)
    for tag in ("select", "input", "output", "button", "datalist", "textarea")
)
IMPLIED_CLOSES.update(
    (tag, _PARAGRAPH)
    for tag in (
        "p", "h1", "h2", "h3", "h4", "h5", "h6",
        "address", "article", "aside", "blockquote", "details", "div", "dl",
        "fieldset", "figcaption", "figure", "footer", "form", "header", "hr",
        "main", "nav", "ol", "pre", "section", "table", "ul",
    )
)

# Elements whose end tag may be omitted when an ancestor closes.
OPTIONAL_END_TAGS = frozenset(
    {
        "li", "p", "dt", "dd", "rt", "rp", "option", "optgroup",
        "thead", "tbody", "tfoot", "tr", "td", "th",
    }
)


class TagEventParser(HTMLParser):
    """Streams open-tag, close-tag and text events to plain callbacks.

    Tag and attribute names arrive lowercased. Attributes without a value
    are reported with an empty string.

    Omitted end tags are filled in the way browsers infer them: opening an
    ``<li>`` ends the previous ``<li>``, a block element ends an open
    ``<p>``, and closing ``</ul>`` or ``</table>`` first ends the list items
    and cells still open inside it. Anything else is forwarded untouched, so
    a stray or mismatched end tag still reaches ``on_close`` as written and
    elements left open at the end of input get no close event.
    """

    def __init__(
        self,
        on_open: Optional[OpenTagHandler] = None,
        on_close: Optional[CloseTagHandler] = None,
        on_text: Optional[TextHandler] = None,
    ) -> None:
        super().__init__(convert_charrefs=True)
        self._on_open = on_open
        self._on_close = on_close
        self._on_text = on_text
        self._open: List[str] = []

    def run(self, text: str) -> None:
        """Feed the complete document and flush buffered data."""
        self.feed(text)
        self.close()

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        ended = IMPLIED_CLOSES.get(tag)
        if ended:
            while self._open and self._open[-1] in ended:
                self._emit_close(self._open.pop())
        if tag not in VOID_ELEMENTS:
            self._open.append(tag)

        if self._on_open is not None:
            attributes: Dict[str, str] = {}
            for name, value in attrs:
                # First occurrence wins for duplicated attributes.
                attributes.setdefault(name, value or "")
            self._on_open(tag, attributes)

    def handle_endtag(self, tag: str) -> None:
        if tag in self._open:
            position = len(self._open) - 1 - self._open[::-1].index(tag)
            inner = self._open[position + 1 :]
            if all(name in OPTIONAL_END_TAGS for name in inner):
                for name in reversed(inner):
                    self._emit_close(name)
                del self._open[position:]
        self._emit_close(tag)

    def handle_data(self, data: str) -> None:
        if self._on_text is not None:
            self._on_text(data)

    def _emit_close(self, tag: str) -> None:
        if self._on_close is not None:
            self._on_close(tag)


ParserFactory = Callable[..., TagEventParser]


__all__ = [
    "IMPLIED_CLOSES",
    "OPTIONAL_END_TAGS",
    "ParserFactory",
    "TagEventParser",
    "VOID_ELEMENTS",
]
