"""Ephemeral per-session snapshot storage.

Entries live only as long as the process. Writes for the same session are
serialized but ordered by arrival: the last ``put`` wins even when it carries
an older client ``timestamp``. A delayed request can therefore overwrite a
newer edit. The store is not shared across processes, so deployments with
more than one instance fragment sessions across backends and must swap in an
externally shared store that orders writes by client timestamp.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol

from .models import CodeSnapshot, StoredSnapshot

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore(Protocol):  # Store contract consumed by the endpoints and synthesizer
    def put(self, session_id: str, snapshot: CodeSnapshot) -> StoredSnapshot: ...

    def get(self, session_id: str) -> Optional[StoredSnapshot]: ...

    def list(self) -> List[str]: ...


class InMemorySessionStore:
    """Process-local dict keyed by session id."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._entries: Dict[str, StoredSnapshot] = {}
        self._guard = threading.Lock()

    def put(self, session_id: str, snapshot: CodeSnapshot) -> StoredSnapshot:
        stamped = StoredSnapshot(
            **snapshot.model_dump(exclude={"sessionId"}),
            sessionId=session_id,
            lastUpdated=self._clock().isoformat(),
        )
        with self._guard:
            self._entries[session_id] = stamped
            total = len(self._entries)
        logger.info(
            "Stored snapshot session=%s language=%s chars=%d sessions=%d",
            session_id,
            snapshot.language,
            len(snapshot.code),
            total,
        )
        return stamped

    def get(self, session_id: str) -> Optional[StoredSnapshot]:
        with self._guard:
            return self._entries.get(session_id)

    def list(self) -> List[str]:
        with self._guard:
            return list(self._entries)

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


__all__ = ["InMemorySessionStore", "SessionStore"]
