from __future__ import annotations  # Editor-facing autosave wiring

from datetime import datetime, timezone
from typing import Callable, Optional

from session_identity import SessionIdentity
from session_store.models import CodeSnapshot

from .debouncer import TelemetryDebouncer
from .delivery import DeliveryClient
from .scheduler import Scheduler


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EditorAutosave:  # Turns editor change events into debounced deliveries
    def __init__(
        self,
        identity: SessionIdentity,
        client: DeliveryClient,
        *,
        scheduler: Optional[Scheduler] = None,
        window_ms: Optional[int] = None,
        user_id: Optional[str] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.identity = identity
        self.client = client
        self.debouncer = TelemetryDebouncer(client.send, scheduler=scheduler, window_ms=window_ms)
        self._user_id = user_id
        self._clock = clock

    def on_change(self, code: str, language: str) -> CodeSnapshot:
        draft = CodeSnapshot(
            code=code,
            language=language,
            timestamp=self._clock().isoformat().replace("+00:00", "Z"),
            sessionId=self.identity.get_or_create(),
            userId=self._user_id,
        )
        self.debouncer.notify(draft)
        return draft

    def close(self) -> None:
        self.debouncer.close()


__all__ = ["EditorAutosave"]
