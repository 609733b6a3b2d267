from datetime import datetime

from fastapi.testclient import TestClient

from api_server import create_app
from config.settings import settings


app = create_app()
client = TestClient(app)

ENDPOINT = "/webhook/code-update"


def _body(session_id="s1", code="x=1", **extra):
    body = {"code": code, "language": "python", "timestamp": "2024-01-01T00:00:00Z", "sessionId": session_id}
    body.update(extra)
    return body


def test_post_then_get_returns_stored_snapshot(store):
    before = datetime.now().astimezone()
    post = client.post(ENDPOINT, json=_body(userId="u1"))
    assert post.status_code == 200
    ack = post.json()
    assert ack["success"] is True
    assert ack["received"] is True
    assert ack["sessionId"] == "s1"

    got = client.get(ENDPOINT, params={"sessionId": "s1"})
    assert got.status_code == 200
    body = got.json()
    assert body["success"] is True
    assert body["code"] == "x=1"
    assert body["language"] == "python"
    assert body["timestamp"] == "2024-01-01T00:00:00Z"
    assert body["userId"] == "u1"
    assert datetime.fromisoformat(body["lastUpdated"]) >= before


def test_unknown_session_lists_available(store):
    client.post(ENDPOINT, json=_body("s1"))
    client.post(ENDPOINT, json=_body("s2"))

    resp = client.get(ENDPOINT, params={"sessionId": "nope"})
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Not Found"
    assert body["message"] == "No code found for session: nope"
    assert body["availableSessions"] == ["s1", "s2"]


def test_later_arrival_overwrites_even_with_older_timestamp(store):
    client.post(ENDPOINT, json=_body(code="new", timestamp="2024-01-01T00:00:09Z"))
    client.post(ENDPOINT, json=_body(code="stale", timestamp="2024-01-01T00:00:01Z"))
    assert client.get(ENDPOINT, params={"sessionId": "s1"}).json()["code"] == "stale"


def test_missing_fields_are_rejected(store):
    resp = client.post(ENDPOINT, json={"code": "x", "language": "python"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Bad Request"
    assert body["message"] == "Missing required fields: code, language, timestamp, sessionId"
    assert store.list() == []


def test_empty_code_counts_as_missing(store):
    resp = client.post(ENDPOINT, json=_body(code=""))
    assert resp.status_code == 400


def test_malformed_json_is_rejected(store):
    resp = client.post(ENDPOINT, content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_api_key_required_when_configured(store, monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_API_KEY", "shared")

    denied = client.post(ENDPOINT, json=_body(), headers={"X-API-Key": "wrong"})
    assert denied.status_code == 401
    assert denied.json() == {"success": False, "error": "Unauthorized", "message": "Invalid API key"}
    assert store.list() == []

    assert client.post(ENDPOINT, json=_body()).status_code == 401
    assert client.post(ENDPOINT, json=_body(), headers={"X-API-Key": "shared"}).status_code == 200

    assert client.get(ENDPOINT, params={"sessionId": "s1"}).status_code == 401
    assert client.get(ENDPOINT, params={"sessionId": "s1"}, headers={"X-API-Key": "shared"}).status_code == 200


def test_auth_is_checked_before_body_validation(store, monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_API_KEY", "shared")
    resp = client.post(ENDPOINT, json={"code": "x"})
    assert resp.status_code == 401


def test_index_lists_sessions_without_key(store, monkeypatch):
    client.post(ENDPOINT, json=_body("s1"))
    monkeypatch.setattr(settings, "WEBHOOK_API_KEY", "shared")

    resp = client.get(ENDPOINT)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["totalSessions"] == 1
    assert body["sessions"] == ["s1"]
    assert body["endpoint"] == ENDPOINT


def test_store_failure_maps_to_server_error(store, monkeypatch):
    def broken_put(session_id, snapshot):
        raise RuntimeError("disk full")

    monkeypatch.setattr(store, "put", broken_put)
    resp = client.post(ENDPOINT, json=_body())
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal Server Error", "message": "disk full"}


def test_preflight_and_health():
    preflight = client.options(ENDPOINT)
    assert preflight.status_code == 200
    assert "POST" in preflight.headers["Access-Control-Allow-Methods"]
    assert client.get("/health").json()["status"] == "ok"
