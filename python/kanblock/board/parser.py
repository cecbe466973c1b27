"""Checklist block parsing.

Turns the raw text of a todo block into an ordered list of items plus the
lines that fit nowhere. Only zero-indent ``- [c] text`` lines start items;
everything else is either attached to the item above it as an opaque
continuation line or reported as ignored.
"""

from __future__ import annotations

import logging
import re

from .markers import DEFAULT_MARKERS, MarkerMap
from .types import IgnoredLine, Item, ParseResult

logger = logging.getLogger(__name__)

# Any single character is accepted between the brackets.
_TASK_RE = re.compile(r"^-\s*\[(.)\]\s*(.*)$")
_INDENT_RE = re.compile(r"^(\s*)")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Other characters ``str.splitlines`` treats as breaks (form feed, vertical
    tab, U+2028 ...) are ordinary item text.
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def indent_width(line: str) -> int:
    """Number of leading whitespace characters."""
    return len(_INDENT_RE.match(line).group(1))


def classify_line(line: str) -> tuple[str, str] | None:
    """Classify one line as a top-level task.

    Returns (marker, text) or None when the line is not a zero-indent
    checklist line.
    """
    if indent_width(line) != 0:
        return None
    match = _TASK_RE.match(line)
    if match is None:
        return None
    return match.group(1), match.group(2).strip()


def parse(text: str, markers: MarkerMap | None = None) -> ParseResult:
    """Parse a todo block into items and ignored lines.

    A non-task line attaches to the current item when it is indented deeper
    than the item (which always sits at column zero) or when the item already
    has continuation lines. Once an item starts collecting continuation lines,
    every following non-blank, non-task line sticks to it regardless of its
    indentation. Blank lines are dropped.
    """
    markers = markers if markers is not None else DEFAULT_MARKERS
    result = ParseResult()
    current: Item | None = None
    current_indent = 0

    for line_idx, line in enumerate(split_lines(text)):
        classified = classify_line(line)
        if classified is not None:
            marker, item_text = classified
            current = Item(
                text=item_text,
                stage=markers.stage_for(marker),
                original_marker=marker,
            )
            current_indent = 0
            result.items.append(current)
            continue

        if not line.strip():
            continue

        if current is not None and (
            indent_width(line) > current_indent or current.continuation_lines
        ):
            current.continuation_lines.append(line)
        else:
            result.ignored.append(IgnoredLine(text=line, line_number=line_idx + 1))

    if result.ignored:
        logger.debug(
            "parsed %d items, ignored %d lines", len(result.items), len(result.ignored)
        )
    return result
