"""BoardSession -- the board of one loaded todo block.

A session is built from one parse of the host text and owns the resulting
sequence until the next external change replaces it. Every mutation that
changes the sequence ends in exactly one commit: serialize, hand the text to
the host, notify listeners.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Callable

from .board.columns import Column, build_columns
from .board.editing import EditSession
from .board.gesture import DropRegion, GestureController
from .board.ordering import Sequence
from .board.parser import parse
from .board.serializer import serialize
from .board.types import IgnoredLine, Item, ParseResult, Stage
from .document import DocumentHost
from .settings import Settings

logger = logging.getLogger(__name__)

IGNORED_LINES_WARNING = (
    "{count} line(s) in this block are not tasks and may be lost when the board is edited"
)


class BoardSession:
    """Current-document context: owns the sequence and the commit cycle."""

    def __init__(
        self,
        host: DocumentHost,
        result: ParseResult,
        source_text: str = "",
        settings: Settings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.host = host
        self.settings = settings if settings is not None else Settings()
        self.sequence = Sequence(result.items)
        self.ignored: list[IgnoredLine] = list(result.ignored)
        self.source_text = source_text
        self.last_text = source_text
        self.last_error: BaseException | None = None
        self.warnings: list[str] = []
        if self.ignored:
            self.warnings.append(IGNORED_LINES_WARNING.format(count=len(self.ignored)))
        self._pending: asyncio.Future | None = None
        self._listeners: list[Callable[[str], None]] = []
        self.gestures = GestureController(
            self.sequence,
            on_change=self.commit,
            delete_delay=self.settings.delete_delay,
            clock=clock if clock is not None else time.monotonic,
            can_change=lambda: self.accepting_changes,
            link_schemes=self.settings.link_schemes,
        )

    @classmethod
    def load(
        cls,
        host: DocumentHost,
        settings: Settings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> BoardSession:
        """Parse the host's current text into a fresh session."""
        text = host.get_text()
        return cls(host, parse(text), source_text=text, settings=settings, clock=clock)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def write_in_flight(self) -> bool:
        return self._pending is not None and not self._pending.done()

    @property
    def accepting_changes(self) -> bool:
        return not self.write_in_flight

    @property
    def items(self) -> list[Item]:
        return list(self.sequence)

    def text(self) -> str:
        return serialize(self.sequence)

    def columns(self) -> list[Column]:
        return build_columns(self.sequence, self.settings.column_names)

    def on_commit(self, callback: Callable[[str], None]) -> None:
        """Register a listener called with the new text after each commit."""
        self._listeners.append(callback)

    # ------------------------------------------------------------------
    # Commit cycle
    # ------------------------------------------------------------------

    def commit(self) -> str:
        """Serialize the sequence and hand it to the host."""
        new_text = serialize(self.sequence, self.ignored)
        self.last_text = new_text
        try:
            result = self.host.replace_text(new_text)
        except Exception as exc:
            logger.exception("writing board text failed")
            self.last_error = exc
        else:
            if inspect.isawaitable(result):
                self._track_write(result)
            else:
                self.last_error = None

        for callback in list(self._listeners):
            callback(new_text)
        return new_text

    def _track_write(self, awaitable) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("asynchronous write needs a running event loop; write dropped")
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            self.last_error = RuntimeError("no running event loop")
            return
        self._pending = asyncio.ensure_future(awaitable, loop=loop)
        self._pending.add_done_callback(self._write_done)

    def _write_done(self, future: asyncio.Future) -> None:
        if future.cancelled():
            logger.debug("board write cancelled")
            return
        exc = future.exception()
        if exc is not None:
            logger.error("writing board text failed", exc_info=exc)
            self.last_error = exc
        else:
            self.last_error = None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _refuse(self, action: str) -> bool:
        if self.accepting_changes:
            return False
        logger.debug("%s refused: write in flight", action)
        return True

    def move_item(self, item_id: str, stage: Stage | str, before_id: str | None = None) -> bool:
        if self._refuse("move"):
            return False
        item = self.sequence.get(item_id)
        if item is None:
            raise KeyError(f"unknown item: {item_id}")
        self.sequence.move(item, Stage(stage), before_id)
        self.commit()
        return True

    def remove_item(self, item_id: str) -> bool:
        if self._refuse("remove"):
            return False
        if not self.sequence.remove(item_id):
            return False
        self.commit()
        return True

    def add_item(self, stage: Stage | str) -> EditSession | None:
        """Insert an empty item at the end of ``stage`` and start editing it.

        Nothing is written until the edit session saves non-empty text.
        """
        if self._refuse("add"):
            return None
        item = self.sequence.create_and_insert(Stage(stage))
        return EditSession(
            self.sequence, item, self.commit, is_new=True,
            can_change=lambda: self.accepting_changes,
        )

    def edit_item(self, item_id: str) -> EditSession | None:
        if self._refuse("edit"):
            return None
        item = self.sequence.get(item_id)
        if item is None:
            raise KeyError(f"unknown item: {item_id}")
        return EditSession(
            self.sequence, item, self.commit,
            can_change=lambda: self.accepting_changes,
        )

    def drop_payload(
        self,
        payload: str,
        stage: Stage | str,
        region: DropRegion | None = None,
        y: float | None = None,
    ) -> list[Item]:
        """Create items from externally dropped text."""
        if region is None:
            region = DropRegion(stage=Stage(stage))
        return self.gestures.drop_payload(payload, region, y)

    def close(self) -> None:
        """Detach from the host; the sequence is no longer authoritative."""
        self.gestures.cancel()
        self._listeners.clear()
