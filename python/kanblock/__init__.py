"""kanblock -- a kanban board over a markdown checklist block."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .board import Item, ParseResult, Sequence, Stage
from .board.parser import parse as _parse
from .board.serializer import serialize as _serialize
from .document import BufferBlockHost, DocumentHost, MarkdownBlockHost
from .session import BoardSession
from .settings import Settings, load_settings
from .watch import BlockWatcher


def parse(text: str) -> ParseResult:
    """Parse checklist text into items and ignored lines."""
    return _parse(text)


def serialize(items: Iterable[Item]) -> str:
    """Write items back as checklist text."""
    return _serialize(items)


def open_block(
    path: str | Path,
    index: int = 0,
    settings: Settings | None = None,
) -> BlockWatcher:
    """Open the n-th todo block of a markdown file.

    Returns a watcher holding the current board session.
    """
    settings = settings if settings is not None else Settings()
    host = MarkdownBlockHost(Path(path), index, settings.block_language)
    return BlockWatcher(host, settings)


__all__ = [
    'Item', 'ParseResult', 'Sequence', 'Stage',
    'DocumentHost', 'BufferBlockHost', 'MarkdownBlockHost',
    'BoardSession', 'BlockWatcher',
    'Settings', 'load_settings',
    'parse', 'serialize', 'open_block',
]
