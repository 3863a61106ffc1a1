"""Tests for the markup structural analyzer."""

from __future__ import annotations

from webcheck.analyzers.markup import MarkupAnalyzer
from webcheck.analyzers.tag_events import TagEventParser
from webcheck.models import FileInput, RuleId


def _analyze(content: str, analyzer: MarkupAnalyzer | None = None):
    analyzer = analyzer or MarkupAnalyzer()
    return analyzer.analyze(FileInput(path="index.html", content=content))


class ExplodingParser(TagEventParser):
    """Emits a couple of real events and then fails like a broken lexer."""

    def run(self, text: str) -> None:
        self.feed("<div>\n<p>")
        raise RuntimeError("lexer exploded")


def test_well_formed_document_has_no_issues() -> None:
    content = """<!DOCTYPE html>
<html>
  <head><meta charset="utf-8"><title>Home</title></head>
  <body>
    <div class="card"><p>Hello<br>world</p><img src="a.png"></div>
    <input type="text">
  </body>
</html>
"""
    assert _analyze(content) == []


def test_tag_names_are_compared_case_insensitively() -> None:
    assert _analyze("<DIV><Span>x</SPAN></div>") == []


def test_void_closing_tags_are_ignored() -> None:
    assert _analyze("<div><br></br></div>") == []


def test_unexpected_closing_tag_on_empty_stack() -> None:
    issues = _analyze("</section>")

    assert len(issues) == 1
    assert issues[0].rule_id == RuleId.TAG_UNEXPECTED_CLOSE
    assert issues[0].line == 1
    assert "</section>" in issues[0].message


def test_mismatched_close_leaves_stack_unchanged() -> None:
    issues = _analyze("<div>\n<span>\n</div>\n</span>\n</div>")

    assert len(issues) == 1
    issue = issues[0]
    assert issue.rule_id == RuleId.TAG_MISMATCH
    assert issue.line == 3
    assert "expected </span>, found </div>" in issue.message


def test_unclosed_tags_reported_at_opening_line() -> None:
    issues = _analyze("<main>\n<section>\n<p>text</p>\n")

    assert [(issue.rule_id, issue.line) for issue in issues] == [
        (RuleId.TAG_UNCLOSED, 1),
        (RuleId.TAG_UNCLOSED, 2),
    ]
    assert issues[0].message == "Unclosed tag <main>"


def test_parser_failure_becomes_single_issue_and_keeps_open_tags() -> None:
    issues = _analyze("ignored", MarkupAnalyzer(parser_factory=ExplodingParser))

    assert [issue.rule_id for issue in issues] == [
        RuleId.MARKUP_PARSE_ERROR,
        RuleId.TAG_UNCLOSED,
        RuleId.TAG_UNCLOSED,
    ]
    assert issues[0].message == "lexer exploded"
    assert issues[0].line == 2
    assert [issue.line for issue in issues[1:]] == [1, 2]


def test_newlines_inside_script_content_advance_lines() -> None:
    issues = _analyze("<script>\nlet a = 1;\n</script>\n</div>")

    assert [(issue.rule_id, issue.line) for issue in issues] == [
        (RuleId.TAG_UNEXPECTED_CLOSE, 4),
    ]


def test_list_items_close_each_other() -> None:
    assert _analyze("<ul><li>a<li>b</ul>") == []


def test_table_cells_and_rows_close_implicitly() -> None:
    assert _analyze("<table><tr><td>x<td>y</table>") == []
    assert _analyze("<table>\n<tr><td>1<td>2\n<tr><td>3\n</table>") == []


def test_block_element_ends_open_paragraph() -> None:
    assert _analyze("<body><p>intro<div>block</div><p>tail</body>") == []


def test_definition_and_option_lists_close_implicitly() -> None:
    assert _analyze("<dl><dt>term<dd>one<dt>next<dd>two</dl>") == []
    assert _analyze("<select><option>a<option>b</select>") == []


def test_omitted_end_tags_still_unclosed_at_end_of_input() -> None:
    issues = _analyze("<ul>\n<li>a\n<li>b\n")

    assert [(issue.rule_id, issue.message, issue.line) for issue in issues] == [
        (RuleId.TAG_UNCLOSED, "Unclosed tag <ul>", 1),
        (RuleId.TAG_UNCLOSED, "Unclosed tag <li>", 3),
    ]


def test_required_end_tag_is_not_inferred_by_ancestor_close() -> None:
    issues = _analyze("<ul><li><span>a</ul>")

    assert [issue.rule_id for issue in issues] == [
        RuleId.TAG_MISMATCH,
        RuleId.TAG_UNCLOSED,
        RuleId.TAG_UNCLOSED,
        RuleId.TAG_UNCLOSED,
    ]
    assert "expected </span>, found </ul>" in issues[0].message


def test_event_stream_includes_inferred_closes() -> None:
    events = []
    parser = TagEventParser(
        on_open=lambda name, _attrs: events.append(("open", name)),
        on_close=lambda name: events.append(("close", name)),
    )
    parser.run("<ul><li>a<li>b</ul>")

    assert events == [
        ("open", "ul"),
        ("open", "li"),
        ("close", "li"),
        ("open", "li"),
        ("close", "li"),
        ("close", "ul"),
    ]
