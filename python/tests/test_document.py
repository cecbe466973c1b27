"""Tests for kanblock.document -- fenced block location and hosts."""

import logging

import pytest

from kanblock.document import (
    BufferBlockHost,
    DocumentHost,
    MarkdownBlockHost,
    find_blocks,
    replace_block,
)


DOC = (
    "# Notes\n"
    "\n"
    "```todo\n"
    "- [ ] a\n"
    "- [x] b\n"
    "```\n"
    "\n"
    "```python\n"
    "print('hi')\n"
    "```\n"
    "\n"
    "```todo\n"
    "- [/] c\n"
    "```\n"
)


def test_find_blocks():
    blocks = find_blocks(DOC)
    assert len(blocks) == 2
    assert blocks[0].bounds == (2, 5)
    assert blocks[0].source == "- [ ] a\n- [x] b"
    assert blocks[1].bounds == (11, 13)
    assert blocks[1].source == "- [/] c"


def test_find_blocks_other_language():
    blocks = find_blocks(DOC, "python")
    assert [b.source for b in blocks] == ["print('hi')"]


def test_language_is_matched_literally():
    doc = "```to.o\n- [ ] a\n```\n```todo\n- [ ] b\n```\n"
    assert [b.source for b in find_blocks(doc, "to.o")] == ["- [ ] a"]


def test_unclosed_block_is_skipped():
    assert find_blocks("```todo\n- [ ] a\n") == []


def test_form_feed_does_not_split_lines():
    doc = "```todo\n- [ ] a\x0cb\n```\n"
    assert find_blocks(doc)[0].bounds == (0, 2)
    updated = replace_block(doc, "- [ ] a\x0cb", "- [x] a\x0cb", bounds=(0, 2))
    assert updated == "```todo\n- [x] a\x0cb\n```\n"


def test_empty_block():
    blocks = find_blocks("```todo\n```\n")
    assert len(blocks) == 1
    assert blocks[0].source == ""


def test_replace_by_text():
    updated = replace_block(DOC, "- [/] c", "- [x] c")
    assert updated.endswith("```todo\n- [x] c\n```\n")
    assert "- [ ] a\n- [x] b\n" in updated


def test_replace_by_text_ignores_surrounding_whitespace():
    updated = replace_block(DOC, "\n- [ ] a\n- [x] b\n\n", "- [ ] z")
    assert updated.startswith("# Notes\n\n```todo\n- [ ] z\n```\n")


def test_replace_by_bounds():
    updated = replace_block(DOC, "- [/] c", "- [ ] new", bounds=(11, 13))
    assert updated.endswith("```todo\n- [ ] new\n```\n")


def test_bounds_pick_between_identical_blocks():
    doc = "```todo\n- [ ] same\n```\n```todo\n- [ ] same\n```\n"
    updated = replace_block(doc, "- [ ] same", "- [x] same", bounds=(3, 5))
    assert updated == "```todo\n- [ ] same\n```\n```todo\n- [x] same\n```\n"


def test_bounds_over_other_block_fall_back_to_text():
    # Lines 11-13 still hold a todo block, but not the one being replaced.
    updated = replace_block(DOC, "- [ ] a\n- [x] b", "- [ ] z", bounds=(11, 13))
    assert [b.source for b in find_blocks(updated)] == ["- [ ] z", "- [/] c"]


def test_invalid_bounds_fall_back_to_text():
    updated = replace_block(DOC, "- [ ] a\n- [x] b", "- [ ] z", bounds=(7, 9))
    assert "```todo\n- [ ] z\n```" in updated
    assert "print('hi')" in updated


def test_replace_no_match(caplog):
    with caplog.at_level(logging.WARNING, logger="kanblock.document"):
        assert replace_block(DOC, "- [ ] nowhere", "- [ ] x") is None
    assert "could not find matching todo block" in caplog.text


def test_replace_with_empty_text():
    updated = replace_block("```todo\n- [ ] a\n```\n", "- [ ] a", "")
    assert updated == "```todo\n```\n"


def test_base_host_contract():
    host = DocumentHost()
    assert host.get_section_bounds() is None
    with pytest.raises(NotImplementedError):
        host.get_text()
    with pytest.raises(NotImplementedError):
        host.replace_text("x")


class TestBufferBlockHost:
    def test_get_text(self):
        host = BufferBlockHost(DOC, index=1)
        assert host.get_text() == "- [/] c"
        assert host.get_section_bounds() == (11, 13)

    def test_missing_block(self):
        host = BufferBlockHost(DOC, index=5)
        with pytest.raises(LookupError):
            host.get_text()

    def test_replace_text_grows_block(self):
        host = BufferBlockHost(DOC, index=0)
        host.get_text()
        host.replace_text("- [ ] a\n- [x] b\n- [ ] c")
        assert "```todo\n- [ ] a\n- [x] b\n- [ ] c\n```\n" in host.content
        assert host.get_section_bounds() == (2, 6)
        assert host.get_text() == "- [ ] a\n- [x] b\n- [ ] c"

    def test_replace_twice_uses_new_bounds(self):
        host = BufferBlockHost(DOC, index=0)
        host.get_text()
        host.replace_text("- [ ] one")
        host.replace_text("- [ ] two")
        assert host.get_text() == "- [ ] two"
        assert find_blocks(host.content)[1].source == "- [/] c"

    def test_replace_falls_back_to_text_after_lines_shift(self):
        host = BufferBlockHost(DOC, index=1)
        host.get_text()
        host.content = "intro line\n" + host.content
        host.replace_text("- [x] c")
        assert host.content.endswith("```todo\n- [x] c\n```\n")

    def test_block_prepended_above_does_not_get_overwritten(self):
        doc = "```todo\n- [ ] A\n```\n```todo\n- [ ] B\n```\n"
        host = BufferBlockHost(doc, index=1)
        assert host.get_text() == "- [ ] B"
        host.content = "```todo\n- [ ] C\n```\n" + host.content
        host.replace_text("- [x] B")
        sources = [b.source for b in find_blocks(host.content)]
        assert sources == ["- [ ] C", "- [ ] A", "- [x] B"]

    def test_replace_block_gone(self):
        host = BufferBlockHost(DOC, index=1)
        host.get_text()
        host.content = "# nothing here\n"
        with pytest.raises(LookupError):
            host.replace_text("- [ ] x")


def test_markdown_block_host(tmp_path):
    path = tmp_path / "note.md"
    path.write_text(DOC)
    host = MarkdownBlockHost(path, index=0)
    assert host.get_text() == "- [ ] a\n- [x] b"
    host.replace_text("- [x] a")
    text = path.read_text()
    assert text.startswith("# Notes\n\n```todo\n- [x] a\n```\n")
    assert text.endswith("```todo\n- [/] c\n```\n")
