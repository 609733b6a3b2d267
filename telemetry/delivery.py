from __future__ import annotations  # Snapshot delivery client with UI status tracking

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

import httpx
from pydantic import BaseModel, Field

from config.settings import settings
from session_store.models import CodeSnapshot

from .scheduler import Scheduler, ThreadScheduler, TimerHandle

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 150


class HttpClient(Protocol):  # Subset of httpx.Client used for delivery
    def post(self, url: str, *, json: Any, headers: Dict[str, str]) -> httpx.Response: ...

    def get(self, url: str, *, params: Optional[Dict[str, str]] = None, headers: Dict[str, str]) -> httpx.Response: ...


class DeliveryStatus(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    SENT = "sent"
    ERROR = "error"


class WebhookConfig(BaseModel):  # Destination and headers for snapshot delivery
    url: str
    enabled: bool = True
    headers: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_settings(cls) -> "WebhookConfig":
        headers: Dict[str, str] = {}
        if settings.WEBHOOK_API_KEY:
            headers["X-API-Key"] = settings.WEBHOOK_API_KEY
        return cls(url=settings.WEBHOOK_URL, enabled=settings.WEBHOOK_ENABLED, headers=headers)


class DeliveryClient:
    """Send snapshots to the webhook and expose a transient status.

    A failed send is logged and dropped. The next edit-triggered delivery is
    the only retry. Status moves ``idle -> sending -> sent|error`` and returns
    to ``idle`` after ``reset_ms``.
    """

    def __init__(
        self,
        config: Optional[WebhookConfig] = None,
        *,
        client: Optional[HttpClient] = None,
        scheduler: Optional[Scheduler] = None,
        reset_ms: Optional[int] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self._config = config or WebhookConfig.from_settings()
        self._client = client
        self._timeout_s = settings.UPSTREAM_TIMEOUT_S if timeout_s is None else timeout_s
        self._scheduler = scheduler or ThreadScheduler()
        self._reset_ms = settings.STATUS_RESET_MS if reset_ms is None else reset_ms
        self._status = DeliveryStatus.IDLE
        self._listeners: List[Callable[[DeliveryStatus], None]] = []
        self._reset_handle: Optional[TimerHandle] = None
        self._guard = threading.Lock()

    @property
    def status(self) -> DeliveryStatus:
        return self._status

    @property
    def config(self) -> WebhookConfig:
        return self._config

    def subscribe(self, listener: Callable[[DeliveryStatus], None]) -> Callable[[], None]:
        """Register ``listener`` for status changes and return an unsubscribe callback."""

        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def send(self, snapshot: CodeSnapshot) -> bool:
        if not self._config.enabled or not self._config.url:
            logger.info("Webhook disabled or no URL configured")
            return False

        self._set_status(DeliveryStatus.SENDING)
        logger.info(
            "Sending snapshot url=%s session=%s language=%s chars=%d preview=%r",
            self._config.url,
            snapshot.sessionId,
            snapshot.language,
            len(snapshot.code),
            _preview(snapshot.code),
        )
        headers = {"Content-Type": "application/json", **self._config.headers}
        try:
            response = self._http().post(
                self._config.url,
                json=snapshot.model_dump(exclude_none=True),
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.error("Snapshot delivery failed session=%s: %s", snapshot.sessionId, exc)
            self._finish(DeliveryStatus.ERROR)
            return False

        if not response.is_success:
            logger.error(
                "Snapshot delivery rejected session=%s status=%s body=%s",
                snapshot.sessionId,
                response.status_code,
                response.text[:200],
            )
            self._finish(DeliveryStatus.ERROR)
            return False

        logger.info("Snapshot delivered session=%s", snapshot.sessionId)
        self._finish(DeliveryStatus.SENT)
        return True

    def fetch(self, session_id: str) -> Optional[CodeSnapshot]:
        """Retrieve the stored snapshot for ``session_id``; ``None`` on any failure."""

        data = self._get({"sessionId": session_id})
        if not data or not data.get("success"):
            return None
        try:
            return CodeSnapshot.model_validate(data)
        except ValueError as exc:
            logger.error("Stored snapshot payload invalid session=%s: %s", session_id, exc)
            return None

    def available_sessions(self) -> List[str]:
        data = self._get(None)
        if not data:
            return []
        return [str(item) for item in data.get("sessions") or []]

    def _get(self, params: Optional[Dict[str, str]]) -> Optional[Dict[str, Any]]:
        if not self._config.enabled or not self._config.url:
            logger.info("Webhook disabled or no URL configured")
            return None
        try:
            response = self._http().get(self._config.url, params=params, headers=dict(self._config.headers))
        except httpx.HTTPError as exc:
            logger.error("Webhook lookup failed: %s", exc)
            return None
        if not response.is_success:
            logger.error("Webhook lookup rejected status=%s", response.status_code)
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Webhook lookup returned invalid JSON: %s", exc)
            return None

    def _http(self) -> HttpClient:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout_s)
        return self._client

    def _finish(self, status: DeliveryStatus) -> None:
        self._set_status(status)
        with self._guard:
            if self._reset_handle is not None:
                self._reset_handle.cancel()
            self._reset_handle = self._scheduler.call_later(
                self._reset_ms / 1000.0, lambda: self._set_status(DeliveryStatus.IDLE)
            )

    def _set_status(self, status: DeliveryStatus) -> None:
        with self._guard:
            if status is DeliveryStatus.SENDING and self._reset_handle is not None:
                self._reset_handle.cancel()
                self._reset_handle = None
            if self._status is status:
                return
            self._status = status
        for listener in list(self._listeners):
            listener(status)


def _preview(code: str) -> str:
    return code[:PREVIEW_CHARS] + ("..." if len(code) > PREVIEW_CHARS else "")


__all__ = ["DeliveryClient", "DeliveryStatus", "HttpClient", "WebhookConfig"]
