"""Drag-and-drop gesture state machine.

States:

    Idle --pick_up--> Dragging --leave--> DraggingOutside
                         ^                     |
                         +-------enter---------+

``release`` from either drag state returns to Idle. Over a drop region the
item moves to the card position under the pointer. Outside every region the
item is deleted once it has been outside for at least ``delete_delay``
seconds; a shorter excursion cancels the drag and leaves the item where it
was.

Externally dropped payloads (text, resource links) skip the drag states and
are inserted as new items in one batch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from .ordering import Sequence
from .payload import DEFAULT_LINK_SCHEMES, derive_item_texts
from .types import Item, Stage

logger = logging.getLogger(__name__)

DEFAULT_DELETE_DELAY = 1.0


@dataclass
class CardBox:
    """Vertical extent of one rendered card inside a drop region."""

    item_id: str
    top: float
    height: float

    @property
    def midpoint(self) -> float:
        return self.top + self.height / 2


@dataclass
class DropRegion:
    """A column's item container: its stage and its cards, top to bottom."""

    stage: Stage
    cards: list[CardBox] = field(default_factory=list)


@dataclass
class Idle:
    pass


@dataclass
class Dragging:
    item: Item
    picked_at: float


@dataclass
class DraggingOutside:
    item: Item
    picked_at: float
    left_at: float


GestureState = Idle | Dragging | DraggingOutside


class DropOutcome(Enum):
    MOVED = "moved"
    DELETED = "deleted"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


def resolve_drop_target(
    region: DropRegion,
    y: float | None,
    exclude: str | None = None,
) -> str | None:
    """Id of the card the dropped item should land before.

    Picks the nearest card whose midpoint is below ``y``; the first one wins
    a tie. None means append to the end of the region.
    """
    if y is None:
        return None
    closest_id: str | None = None
    closest_offset = float("-inf")
    for card in region.cards:
        if card.item_id == exclude:
            continue
        offset = y - card.midpoint
        if offset < 0 and offset > closest_offset:
            closest_offset = offset
            closest_id = card.item_id
    return closest_id


class GestureController:
    """Turns pointer and drop input into ordering-engine calls.

    ``on_change`` is the commit hook: it is called exactly once per gesture
    that changed the sequence. ``can_change`` lets the owner refuse
    gestures, e.g. while a write is still in flight; it is checked both
    when a drag starts and when it ends.
    """

    def __init__(
        self,
        sequence: Sequence,
        on_change: Callable[[], None],
        delete_delay: float = DEFAULT_DELETE_DELAY,
        clock: Callable[[], float] = time.monotonic,
        can_change: Callable[[], bool] | None = None,
        link_schemes: Iterable[str] = DEFAULT_LINK_SCHEMES,
    ) -> None:
        self.sequence = sequence
        self.on_change = on_change
        self.delete_delay = delete_delay
        self.clock = clock
        self.can_change = can_change if can_change is not None else (lambda: True)
        self.link_schemes = tuple(link_schemes)
        self.state: GestureState = Idle()

    @property
    def dragged_item(self) -> Item | None:
        if isinstance(self.state, (Dragging, DraggingOutside)):
            return self.state.item
        return None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def pick_up(self, item_id: str) -> bool:
        """Idle -> Dragging."""
        if not isinstance(self.state, Idle) or not self.can_change():
            return False
        item = self.sequence.get(item_id)
        if item is None:
            return False
        self.state = Dragging(item=item, picked_at=self.clock())
        return True

    def leave(self) -> bool:
        """Dragging -> DraggingOutside: the pointer left every drop region."""
        if not isinstance(self.state, Dragging):
            return False
        self.state = DraggingOutside(
            item=self.state.item,
            picked_at=self.state.picked_at,
            left_at=self.clock(),
        )
        return True

    def enter(self) -> bool:
        """DraggingOutside -> Dragging: the pointer is back over a region."""
        if not isinstance(self.state, DraggingOutside):
            return False
        self.state = Dragging(item=self.state.item, picked_at=self.state.picked_at)
        return True

    def release(self, region: DropRegion | None = None, y: float | None = None) -> DropOutcome:
        """End the drag over ``region`` (or outside when None)."""
        state = self.state
        if isinstance(state, Idle):
            return DropOutcome.IGNORED
        self.state = Idle()
        item = state.item
        if not self.can_change():
            logger.debug("drop of %s refused; changes are blocked", item.id)
            return DropOutcome.CANCELLED

        if region is not None:
            before_id = resolve_drop_target(region, y, exclude=item.id)
            try:
                self.sequence.move(item, region.stage, before_id)
            except KeyError:
                # Item vanished while dragging (reparse or edit elsewhere).
                logger.debug("dragged item %s no longer present", item.id)
                return DropOutcome.CANCELLED
            self.on_change()
            return DropOutcome.MOVED

        if isinstance(state, DraggingOutside):
            elapsed = self.clock() - state.left_at
            if elapsed >= self.delete_delay:
                if self.sequence.remove(item.id):
                    self.on_change()
                    return DropOutcome.DELETED
        return DropOutcome.CANCELLED

    def cancel(self) -> None:
        """Abort any drag without touching the sequence."""
        self.state = Idle()

    # ------------------------------------------------------------------
    # External drops
    # ------------------------------------------------------------------

    def drop_payload(
        self,
        payload: str,
        region: DropRegion,
        y: float | None = None,
    ) -> list[Item]:
        """Insert one new item per non-blank payload line, committing once."""
        if not self.can_change():
            return []
        texts = derive_item_texts(payload, self.link_schemes)
        if not texts:
            return []
        before_id = resolve_drop_target(region, y)
        created: list[Item] = []
        for text in texts:
            item = Item(
                text=text,
                stage=region.stage,
                original_marker=self.sequence.markers.marker_for(region.stage),
            )
            self.sequence.insert(item, region.stage, before_id)
            created.append(item)
        self.on_change()
        return created
