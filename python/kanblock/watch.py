"""Reparse a board when its block text changes outside the board."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .board.parser import parse
from .document import DocumentHost
from .session import BoardSession
from .settings import Settings

logger = logging.getLogger(__name__)


class BlockWatcher:
    """Owns the current BoardSession for one host block.

    Polling is driven by the caller (an editor change event, a file-watch
    tick). When the host text differs from both the text the watcher last
    saw and the text the session itself wrote, the session is discarded and
    rebuilt from a fresh parse, and registered callbacks fire with it.
    """

    def __init__(
        self,
        host: DocumentHost,
        settings: Settings | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.host = host
        self.settings = settings
        self.clock = clock
        self._callbacks: list[Callable[[BoardSession], None] | None] = []
        self.session = BoardSession.load(host, settings, clock)
        self._seen_text = self.session.source_text

    def watch(self, callback: Callable[[BoardSession], None]) -> int:
        """Register a callback fired with each new session. Returns its index."""
        self._callbacks.append(callback)
        return len(self._callbacks) - 1

    def unwatch(self, index: int) -> None:
        if 0 <= index < len(self._callbacks):
            self._callbacks[index] = None

    def poll_once(self) -> bool:
        """Check the host once. Returns True when the board was reparsed."""
        try:
            text = self.host.get_text()
        except LookupError as exc:
            logger.warning("board block unavailable: %s", exc)
            return False

        if text == self._seen_text or text == self.session.last_text:
            self._seen_text = text
            return False

        logger.debug("block text changed externally; reparsing")
        self._seen_text = text
        self.reload(text)
        return True

    def reload(self, text: str | None = None) -> BoardSession:
        """Replace the current session with one parsed from ``text``."""
        if text is None:
            text = self.host.get_text()
            self._seen_text = text
        self.session.close()
        self.session = BoardSession(
            self.host, parse(text), source_text=text,
            settings=self.settings, clock=self.clock,
        )
        for callback in list(self._callbacks):
            if callback is None:
                continue
            try:
                callback(self.session)
            except Exception:
                logger.exception("board watch callback failed")
        return self.session
