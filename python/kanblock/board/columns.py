"""Grouped three-column view of a sequence."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .ordering import Sequence
from .types import STAGE_ORDER, Item, Stage

DEFAULT_TITLES: dict[Stage, str] = {
    Stage.TODO: "To do",
    Stage.IN_PROGRESS: "In progress",
    Stage.DONE: "Done",
}


@dataclass
class Column:
    stage: Stage
    title: str
    items: list[Item] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @staticmethod
    def badge(item: Item) -> str | None:
        """``+N`` marker for a card carrying N continuation lines."""
        if not item.continuation_lines:
            return None
        return f"+{len(item.continuation_lines)}"


def build_columns(
    sequence: Sequence,
    titles: Mapping[Stage, str] | None = None,
) -> list[Column]:
    """Partition the sequence by stage, keeping sequence order per column."""
    titles = titles if titles is not None else DEFAULT_TITLES
    return [
        Column(
            stage=stage,
            title=titles.get(stage) or DEFAULT_TITLES[stage],
            items=sequence.by_stage(stage),
        )
        for stage in STAGE_ORDER
    ]


def grouped_ids(sequence: Sequence) -> list[str]:
    """Ids in display order: todo column, then in-progress, then done."""
    return [item.id for column in build_columns(sequence) for item in column.items]
