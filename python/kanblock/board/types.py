"""Board types: stages, items, ignored lines and parse results."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


class Stage(Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


# Fixed display and precedence order of the three columns.
STAGE_ORDER: tuple[Stage, ...] = (Stage.TODO, Stage.IN_PROGRESS, Stage.DONE)


def new_item_id() -> str:
    """Allocate a fresh, never reused item id."""
    return str(uuid.uuid4())


@dataclass
class Item:
    """A single checklist task.

    ``original_marker`` is the character found between the brackets when the
    item was parsed. ``stage`` starts out derived from it but moves on its own
    when the item is dragged to another column; the serializer compares the
    two to decide which marker to write.
    """

    text: str
    stage: Stage = Stage.TODO
    original_marker: str = " "
    continuation_lines: list[str] = field(default_factory=list)
    id: str = field(default_factory=new_item_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "stage": self.stage.value,
            "original_marker": self.original_marker,
            "continuation_lines": list(self.continuation_lines),
        }


@dataclass
class IgnoredLine:
    """A source line that is neither a task nor attached to one."""

    text: str
    line_number: int = 0


@dataclass
class ParseResult:
    items: list[Item] = field(default_factory=list)
    ignored: list[IgnoredLine] = field(default_factory=list)
