"""Ordering engine -- the single global order of items.

One list is both the edit order written back to text and, partitioned by
stage, the three board columns. Mutations keep same-stage items in the order
they were placed; only an explicit ``before_id`` can put an item between two
others.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .markers import DEFAULT_MARKERS, MarkerMap
from .types import STAGE_ORDER, Item, Stage

logger = logging.getLogger(__name__)


class Sequence:
    """Ordered, single-owner container of items."""

    def __init__(
        self,
        items: Iterable[Item] | None = None,
        markers: MarkerMap | None = None,
    ) -> None:
        self.items: list[Item] = list(items) if items is not None else []
        self.markers = markers if markers is not None else DEFAULT_MARKERS

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: str) -> bool:
        return self.index_of(item_id) >= 0

    def ids(self) -> list[str]:
        return [i.id for i in self.items]

    def index_of(self, item_id: str) -> int:
        """Position of an item, or -1 when absent."""
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                return idx
        return -1

    def get(self, item_id: str) -> Item | None:
        idx = self.index_of(item_id)
        return self.items[idx] if idx >= 0 else None

    def by_stage(self, stage: Stage) -> list[Item]:
        return [i for i in self.items if i.stage == stage]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, item: Item, stage: Stage, before_id: str | None = None) -> int:
        """Place ``item`` in ``stage``, removing it first if already present.

        With ``before_id`` naming a present item, the item lands right before
        it whatever that item's stage. Otherwise it goes after the last item
        already in ``stage``, or, for an empty stage, after the last item whose
        stage comes no later than ``stage`` in column order.

        Returns the index the item now occupies.
        """
        item.stage = stage
        current = self.index_of(item.id)
        if current >= 0:
            del self.items[current]

        if before_id is not None:
            before_idx = self.index_of(before_id)
            if before_idx >= 0:
                self.items.insert(before_idx, item)
                return before_idx
            logger.debug("drop target %s is gone; appending to %s", before_id, stage.value)

        idx = self._stage_end(stage)
        self.items.insert(idx, item)
        return idx

    def move(self, item: Item, stage: Stage, before_id: str | None = None) -> int:
        """Move an item that is already in the sequence."""
        if self.index_of(item.id) < 0:
            raise KeyError(f"item not in sequence: {item.id}")
        return self.insert(item, stage, before_id)

    def remove(self, item_id: str) -> bool:
        """Delete by id. Returns False when nothing was removed."""
        idx = self.index_of(item_id)
        if idx < 0:
            return False
        del self.items[idx]
        return True

    def create_and_insert(self, stage: Stage, text: str = "") -> Item:
        """Allocate a fresh item with the stage's canonical marker and place it."""
        item = Item(text=text, stage=stage, original_marker=self.markers.marker_for(stage))
        self.insert(item, stage)
        return item

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _stage_end(self, stage: Stage) -> int:
        """Default insertion index for an append into ``stage``."""
        last_same = -1
        for idx, item in enumerate(self.items):
            if item.stage == stage:
                last_same = idx
        if last_same >= 0:
            return last_same + 1

        target_rank = STAGE_ORDER.index(stage)
        insert_idx = 0
        for idx, item in enumerate(self.items):
            if STAGE_ORDER.index(item.stage) <= target_rank:
                insert_idx = idx + 1
        return insert_idx
