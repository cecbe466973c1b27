"""kanblock.board -- checklist block model, parsing and ordering.

Host-independent core: everything here works on plain strings and items.
"""

from .columns import Column, build_columns, grouped_ids
from .editing import EditSession
from .gesture import (
    CardBox,
    DropOutcome,
    DropRegion,
    Dragging,
    DraggingOutside,
    GestureController,
    Idle,
    resolve_drop_target,
)
from .markers import MarkerMap, marker_to_stage, stage_to_marker
from .ordering import Sequence
from .parser import classify_line, indent_width, parse
from .payload import derive_item_text, derive_item_texts
from .serializer import item_to_text, serialize
from .suggest import Resource, ResourceIndex, StaticResourceIndex, apply_suggestion, suggestions
from .types import STAGE_ORDER, IgnoredLine, Item, ParseResult, Stage

__all__ = [
    "Column",
    "build_columns",
    "grouped_ids",
    "EditSession",
    "CardBox",
    "DropOutcome",
    "DropRegion",
    "Dragging",
    "DraggingOutside",
    "GestureController",
    "Idle",
    "resolve_drop_target",
    "MarkerMap",
    "marker_to_stage",
    "stage_to_marker",
    "Sequence",
    "classify_line",
    "indent_width",
    "parse",
    "derive_item_text",
    "derive_item_texts",
    "item_to_text",
    "serialize",
    "Resource",
    "ResourceIndex",
    "StaticResourceIndex",
    "apply_suggestion",
    "suggestions",
    "STAGE_ORDER",
    "IgnoredLine",
    "Item",
    "ParseResult",
    "Stage",
]
