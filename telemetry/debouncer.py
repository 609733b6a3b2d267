"""Coalesce bursts of code-change events into single snapshot deliveries."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Tuple

from config.settings import settings
from session_store.models import CodeSnapshot

from .scheduler import Scheduler, ThreadScheduler, TimerHandle

logger = logging.getLogger(__name__)


class TelemetryDebouncer:
    """Deliver the last draft of each session once edits go quiet.

    Every :meth:`notify` cancels the session's pending timer and starts a new
    one ``window_ms`` from now. When a timer fires, ``deliver`` is called once
    with the most recent draft. Pending drafts are dropped on :meth:`close`;
    there is no durability beyond the process.
    """

    def __init__(
        self,
        deliver: Callable[[CodeSnapshot], object],
        *,
        scheduler: Optional[Scheduler] = None,
        window_ms: Optional[int] = None,
    ) -> None:
        self._deliver = deliver
        self._scheduler = scheduler or ThreadScheduler()
        self._window_ms = settings.DEBOUNCE_MS if window_ms is None else window_ms
        self._pending: Dict[str, Tuple[object, TimerHandle, CodeSnapshot]] = {}
        self._guard = threading.RLock()

    @property
    def window_ms(self) -> int:
        return self._window_ms

    def notify(self, draft: CodeSnapshot) -> None:
        session_id = draft.sessionId
        with self._guard:
            previous = self._pending.pop(session_id, None)
            if previous is not None:
                previous[1].cancel()
                logger.debug("Debounce reset session=%s", session_id)
            token = object()
            handle = self._scheduler.call_later(
                self._window_ms / 1000.0, lambda: self._fire(session_id, token)
            )
            self._pending[session_id] = (token, handle, draft)

    def pending(self, session_id: str) -> bool:
        with self._guard:
            return session_id in self._pending

    def close(self) -> None:  # Drop every pending delivery
        with self._guard:
            entries = list(self._pending.values())
            self._pending.clear()
        for _, handle, _ in entries:
            handle.cancel()
        if entries:
            logger.info("Discarded %d pending deliveries", len(entries))

    def _fire(self, session_id: str, token: object) -> None:
        with self._guard:
            entry = self._pending.get(session_id)
            # A timer cancelled too late to stop may still fire; only the current one delivers.
            if entry is None or entry[0] is not token:
                return
            del self._pending[session_id]
        draft = entry[2]
        logger.info("Debounce complete session=%s chars=%d", session_id, len(draft.code))
        self._deliver(draft)


__all__ = ["TelemetryDebouncer"]
