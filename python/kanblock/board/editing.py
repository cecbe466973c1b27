"""Inline editing of a single card's text."""

from __future__ import annotations

from collections.abc import Callable

from .ordering import Sequence
from .types import Item


class EditSession:
    """One edit of one item, finished by ``save`` or ``cancel``.

    Saving empty text deletes the item. Cancelling a freshly created item
    removes it again without a commit, since it was never written out.
    While ``can_change`` returns False, ``save`` is refused and the session
    stays open.
    """

    def __init__(
        self,
        sequence: Sequence,
        item: Item,
        on_commit: Callable[[], None],
        is_new: bool = False,
        can_change: Callable[[], bool] | None = None,
    ) -> None:
        self.sequence = sequence
        self.item = item
        self.on_commit = on_commit
        self.is_new = is_new
        self.can_change = can_change if can_change is not None else (lambda: True)
        self.initial_text = item.text
        self.finished = False

    def save(self, text: str) -> bool:
        if self.finished or not self.can_change():
            return False
        self.finished = True
        # Item text is a single line; spacing inside a line is kept.
        new_text = " ".join(line.strip() for line in text.split("\n") if line.strip())
        if not new_text:
            self.sequence.remove(self.item.id)
        else:
            self.item.text = new_text
        self.on_commit()
        return True

    def cancel(self) -> bool:
        if self.finished:
            return False
        self.finished = True
        if self.is_new:
            self.sequence.remove(self.item.id)
        return True
