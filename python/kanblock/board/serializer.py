"""Item sequence -> checklist text."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .markers import DEFAULT_MARKERS, MarkerMap
from .types import IgnoredLine, Item

logger = logging.getLogger(__name__)


def marker_for_item(item: Item, markers: MarkerMap | None = None) -> str:
    """Keep the original marker while it still means the item's stage."""
    markers = markers if markers is not None else DEFAULT_MARKERS
    if markers.preserves(item.original_marker, item.stage):
        return item.original_marker
    return markers.marker_for(item.stage)


def item_to_text(item: Item, markers: MarkerMap | None = None) -> str:
    main_line = f"- [{marker_for_item(item, markers)}] {item.text}"
    if not item.continuation_lines:
        return main_line
    return "\n".join([main_line, *item.continuation_lines])


def serialize(
    items: Iterable[Item],
    ignored: list[IgnoredLine] | None = None,
    markers: MarkerMap | None = None,
) -> str:
    """Join items into block text, one task line each, no blank separators.

    Ignored lines are not written back.
    """
    if ignored:
        logger.warning(
            "%d non-task line(s) dropped from rewritten block", len(ignored)
        )
    return "\n".join(item_to_text(item, markers) for item in items)
