from __future__ import annotations  # Tab-scoped session identifier management

import logging
import secrets
import string
import time
from typing import Callable, MutableMapping, Optional

logger = logging.getLogger(__name__)

SESSION_KEY = "interview_session_id"
_ALPHABET = string.digits + string.ascii_lowercase


def generate_session_id(*, now_ms: Optional[int] = None, suffix_len: int = 13) -> str:  # Timestamp plus random base36 suffix
    stamp = int(time.time() * 1000) if now_ms is None else now_ms
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(suffix_len))
    return f"session_{stamp}_{suffix}"


class SessionIdentity:
    """Session token persisted in a tab-scoped key/value storage.

    ``storage`` stands in for the browser's session storage: any mutable
    mapping whose lifetime matches the tab. The identifier is created on
    first access and reused until :meth:`clear` removes it.
    """

    def __init__(
        self,
        storage: Optional[MutableMapping[str, str]] = None,
        *,
        generator: Callable[[], str] = generate_session_id,
    ) -> None:
        self._storage: MutableMapping[str, str] = {} if storage is None else storage
        self._generator = generator

    def get_or_create(self) -> str:
        session_id = self._storage.get(SESSION_KEY)
        if not session_id:
            session_id = self._generator()
            self._storage[SESSION_KEY] = session_id
            logger.info("Created new session id %s", session_id)
        return session_id

    def get(self) -> Optional[str]:
        return self._storage.get(SESSION_KEY)

    def set(self, session_id: str) -> None:
        if not session_id:
            raise ValueError("session id must be non-empty")
        self._storage[SESSION_KEY] = session_id
        logger.info("Set session id %s", session_id)

    def clear(self) -> None:
        if self._storage.pop(SESSION_KEY, None) is not None:
            logger.info("Cleared session id")


__all__ = ["SESSION_KEY", "SessionIdentity", "generate_session_id"]
