"""Host document access -- locating and rewriting fenced todo blocks.

A board lives inside a fenced code block of a markdown document::

    ```todo
    - [ ] write spec
    - [x] done task
    ```

Rewrites prefer the block's known line range, but only while that range still
holds the block's previous text; otherwise the block is found again by that
text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_CLOSE_FENCE_RE = re.compile(r"^```[ \t]*\r?\n?$")


@dataclass
class FencedBlock:
    """A fenced block; line numbers are 0-based and point at the fences."""

    open_line: int
    close_line: int
    raw: str  # content between the fences, newline-terminated

    @property
    def source(self) -> str:
        """Block content as handed to the parser (no trailing newline)."""
        return self.raw[:-1] if self.raw.endswith("\n") else self.raw

    @property
    def bounds(self) -> tuple[int, int]:
        return self.open_line, self.close_line


class DocumentHost:
    """Contract the board uses to read and write its block.

    ``replace_text`` may return an awaitable for hosts that write
    asynchronously.
    """

    def get_text(self) -> str:
        raise NotImplementedError

    def replace_text(self, new_text: str):
        raise NotImplementedError

    def get_section_bounds(self) -> tuple[int, int] | None:
        return None


# ---------------------------------------------------------------------------
# Block location
# ---------------------------------------------------------------------------

def _split_lines(content: str) -> list[str]:
    """Lines of ``content`` with their newlines; only ``\\n`` ends a line."""
    lines = [line + "\n" for line in content.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _open_fence_re(language: str) -> re.Pattern[str]:
    return re.compile(r"^```" + re.escape(language) + r"[ \t]*\r?\n?$")


def find_blocks(content: str, language: str = "todo") -> list[FencedBlock]:
    """All closed fenced blocks whose info string is ``language``."""
    open_re = _open_fence_re(language)
    lines = _split_lines(content)
    blocks: list[FencedBlock] = []
    idx = 0
    while idx < len(lines):
        if open_re.match(lines[idx]):
            for close_idx in range(idx + 1, len(lines)):
                if _CLOSE_FENCE_RE.match(lines[close_idx]):
                    raw = "".join(lines[idx + 1:close_idx])
                    blocks.append(FencedBlock(idx, close_idx, raw))
                    idx = close_idx
                    break
        idx += 1
    return blocks


def _block_at(lines: list[str], bounds: tuple[int, int], language: str) -> FencedBlock | None:
    start, end = bounds
    if not (0 <= start < end < len(lines)):
        return None
    if not _open_fence_re(language).match(lines[start]):
        return None
    if not _CLOSE_FENCE_RE.match(lines[end]):
        return None
    for line in lines[start + 1:end]:
        if _CLOSE_FENCE_RE.match(line):
            return None
    return FencedBlock(start, end, "".join(lines[start + 1:end]))


def replace_block(
    content: str,
    old_source: str,
    new_source: str,
    language: str = "todo",
    bounds: tuple[int, int] | None = None,
) -> str | None:
    """Return ``content`` with the block's body replaced by ``new_source``.

    Returns None when no block can be located.
    """
    lines = _split_lines(content)

    block: FencedBlock | None = None
    wanted = old_source.strip()
    if bounds is not None:
        block = _block_at(lines, bounds, language)
        if block is not None and block.raw.strip() != wanted:
            logger.debug("block at lines %d-%d changed; searching by text", *bounds)
            block = None
    if block is None:
        for candidate in find_blocks(content, language):
            if candidate.raw.strip() == wanted:
                block = candidate
                break
    if block is None:
        logger.warning("could not find matching %s block to update", language)
        return None

    replacement = new_source + "\n" if new_source else ""
    return "".join(lines[:block.open_line + 1]) + replacement + "".join(lines[block.close_line:])


# ---------------------------------------------------------------------------
# Hosts
# ---------------------------------------------------------------------------

class BufferBlockHost(DocumentHost):
    """The n-th todo block of an in-memory markdown buffer."""

    def __init__(self, content: str, index: int = 0, language: str = "todo") -> None:
        self.content = content
        self.index = index
        self.language = language
        self._known_source: str | None = None
        self._bounds: tuple[int, int] | None = None

    def _read(self) -> str:
        return self.content

    def _write(self, content: str) -> None:
        self.content = content

    def get_text(self) -> str:
        blocks = find_blocks(self._read(), self.language)
        if self.index >= len(blocks):
            raise LookupError(f"no {self.language} block #{self.index}")
        block = blocks[self.index]
        self._known_source = block.source
        self._bounds = block.bounds
        return block.source

    def get_section_bounds(self) -> tuple[int, int] | None:
        return self._bounds

    def replace_text(self, new_text: str) -> None:
        if self._known_source is None:
            self.get_text()
        updated = replace_block(
            self._read(),
            self._known_source or "",
            new_text,
            self.language,
            self.get_section_bounds(),
        )
        if updated is None:
            raise LookupError(f"{self.language} block #{self.index} not found")
        self._write(updated)
        start = self._bounds[0] if self._bounds else 0
        # Relocate by the text just written; the block may have moved.
        self._known_source = new_text
        self._bounds = None
        for block in find_blocks(updated, self.language):
            if block.open_line >= start and block.source == new_text:
                self._bounds = block.bounds
                break


class MarkdownBlockHost(BufferBlockHost):
    """The n-th todo block of a markdown file on disk."""

    def __init__(self, path: Path, index: int = 0, language: str = "todo") -> None:
        super().__init__("", index, language)
        self.path = Path(path)

    def _read(self) -> str:
        return self.path.read_text()

    def _write(self, content: str) -> None:
        self.path.write_text(content)
