"""Tests for kanblock.board.parser -- line classification and block parsing."""

from kanblock.board.parser import classify_line, indent_width, parse, split_lines
from kanblock.board.types import Stage


SCENARIO = (
    "- [ ] write spec\n"
    "  details here\n"
    "- [x] done task\n"
    "random note\n"
    "- [/] in progress\n"
)


def test_classify_task_line():
    assert classify_line("- [ ] write spec") == (" ", "write spec")
    assert classify_line("- [x] done task") == ("x", "done task")
    assert classify_line("- [?] maybe") == ("?", "maybe")


def test_classify_strips_text():
    assert classify_line("- [/]   padded   ") == ("/", "padded")


def test_classify_tolerates_missing_spaces():
    assert classify_line("-[x]tight") == ("x", "tight")


def test_classify_rejects_indented_task():
    assert classify_line("  - [ ] nested") is None
    assert classify_line("\t- [ ] nested") is None


def test_classify_rejects_other_lines():
    assert classify_line("random note") is None
    assert classify_line("- plain bullet") is None
    assert classify_line("- [] empty brackets") is None
    assert classify_line("- [xx] two chars") is None


def test_indent_width():
    assert indent_width("abc") == 0
    assert indent_width("  abc") == 2
    assert indent_width("\t\tabc") == 2
    assert indent_width("   ") == 3


def test_parse_scenario():
    result = parse(SCENARIO)

    assert len(result.items) == 3
    first, second, third = result.items
    assert first.stage == Stage.TODO
    assert first.text == "write spec"
    assert first.continuation_lines == ["  details here"]
    assert second.stage == Stage.DONE
    assert second.text == "done task"
    assert second.continuation_lines == []
    assert third.stage == Stage.IN_PROGRESS
    assert third.text == "in progress"

    assert len(result.ignored) == 1
    assert result.ignored[0].text == "random note"
    assert result.ignored[0].line_number == 4


def test_parse_stores_original_marker():
    result = parse("- [?] question\n- [!] urgent\n- [x] done\n")
    assert [i.original_marker for i in result.items] == ["?", "!", "x"]
    assert [i.stage for i in result.items] == [Stage.TODO, Stage.TODO, Stage.DONE]


def test_parse_assigns_unique_ids():
    result = parse("- [ ] a\n- [ ] a\n- [ ] a\n")
    ids = [i.id for i in result.items]
    assert len(set(ids)) == 3


def test_parse_drops_blank_lines():
    result = parse("- [ ] a\n\n   \n- [ ] b\n")
    assert [i.text for i in result.items] == ["a", "b"]
    assert result.items[0].continuation_lines == []
    assert result.ignored == []


def test_stray_line_before_first_item_is_ignored():
    result = parse("  indented preface\n- [ ] a\n")
    assert [l.text for l in result.ignored] == ["  indented preface"]
    assert result.items[0].continuation_lines == []


def test_unindented_line_after_item_is_ignored():
    result = parse("- [ ] a\nnot attached\n")
    assert result.items[0].continuation_lines == []
    assert [l.text for l in result.ignored] == ["not attached"]


def test_continuation_is_sticky_once_started():
    text = (
        "- [ ] a\n"
        "    deep note\n"
        "flush paragraph\n"
        "  shallow\n"
        "- [ ] b\n"
        "after b\n"
    )
    result = parse(text)
    a, b = result.items
    assert a.continuation_lines == ["    deep note", "flush paragraph", "  shallow"]
    assert b.continuation_lines == []
    assert [l.text for l in result.ignored] == ["after b"]


def test_indented_task_line_is_continuation():
    result = parse("- [ ] parent\n  - [ ] child\n")
    assert len(result.items) == 1
    assert result.items[0].continuation_lines == ["  - [ ] child"]


def test_parse_empty_text():
    result = parse("")
    assert result.items == []
    assert result.ignored == []


def test_parse_handles_crlf():
    result = parse("- [x] a\r\n  note\r\n- [ ] b\r\n")
    assert [i.text for i in result.items] == ["a", "b"]
    assert result.items[0].continuation_lines == ["  note"]


def test_split_lines_breaks_only_on_newline():
    assert split_lines("a\x0cb\r\nc d\n") == ["a\x0cb", "c d", ""]


def test_form_feed_stays_in_item_text():
    result = parse("- [ ] a\x0cb\n- [x] c")
    assert [i.text for i in result.items] == ["a\x0cb", "c"]
    assert result.ignored == []
