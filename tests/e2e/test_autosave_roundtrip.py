from datetime import datetime, timezone

from fastapi.testclient import TestClient

from api_server import create_app
from session_identity import SessionIdentity
from telemetry import DeliveryClient, DeliveryStatus, EditorAutosave, WebhookConfig


app = create_app()
ENDPOINT = "http://testserver/webhook/code-update"


def _autosave(scheduler, session_id="session_1_roundtrip"):
    identity = SessionIdentity(generator=lambda: session_id)
    delivery = DeliveryClient(WebhookConfig(url=ENDPOINT), client=TestClient(app), scheduler=scheduler)
    autosave = EditorAutosave(
        identity,
        delivery,
        scheduler=scheduler,
        window_ms=2000,
        clock=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )
    return autosave, delivery


def test_typing_burst_lands_as_one_snapshot(store, scheduler):
    autosave, delivery = _autosave(scheduler)
    puts = []
    original_put = store.put

    def counting_put(session_id, snapshot):
        puts.append(snapshot.code)
        return original_put(session_id, snapshot)

    store.put = counting_put

    autosave.on_change("f", "javascript")
    scheduler.advance(500)
    draft = autosave.on_change("function f() {}", "javascript")
    assert draft.timestamp == "2024-01-01T12:00:00Z"
    scheduler.advance(1999)
    assert puts == []

    scheduler.advance(1)
    assert puts == ["function f() {}"]
    assert delivery.status is DeliveryStatus.SENT

    stored = delivery.fetch("session_1_roundtrip")
    assert stored is not None
    assert stored.code == "function f() {}"
    assert delivery.available_sessions() == ["session_1_roundtrip"]

    scheduler.advance(1000)
    assert delivery.status is DeliveryStatus.IDLE


def test_rejected_delivery_surfaces_error_status(store, scheduler, monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "WEBHOOK_API_KEY", "shared")
    autosave, delivery = _autosave(scheduler)

    autosave.on_change("x", "python")
    scheduler.advance(2000)

    assert delivery.status is DeliveryStatus.ERROR
    assert store.list() == []


def test_close_discards_unsent_edit(store, scheduler):
    autosave, _ = _autosave(scheduler)
    autosave.on_change("draft", "python")
    autosave.close()
    scheduler.advance(5000)
    assert store.list() == []
