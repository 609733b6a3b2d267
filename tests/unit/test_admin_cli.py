import httpx

from observability import admin_cli
from telemetry import DeliveryClient, WebhookConfig


def _client(handler):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return DeliveryClient(WebhookConfig(url="http://collector.test/webhook/code-update"), client=http)


def _handler(request):
    session_id = request.url.params.get("sessionId")
    if session_id is None:
        return httpx.Response(200, json={"status": "ok", "sessions": ["s1"], "totalSessions": 1})
    if session_id == "s1":
        return httpx.Response(
            200,
            json={
                "success": True,
                "code": "print('hi')",
                "language": "python",
                "timestamp": "2024-01-01T00:00:00Z",
                "sessionId": "s1",
                "lastUpdated": "2024-01-01T00:00:01+00:00",
            },
        )
    return httpx.Response(404, json={"success": False, "availableSessions": ["s1"]})


def test_list_sessions_prints_ids(capsys):
    assert admin_cli.list_sessions(_client(_handler)) == 0
    out = capsys.readouterr().out
    assert "s1" in out
    assert "total=1" in out


def test_show_snapshot_prints_code(capsys):
    assert admin_cli.show_snapshot(_client(_handler), "s1") == 0
    out = capsys.readouterr().out
    assert "language=python" in out
    assert "print('hi')" in out


def test_show_snapshot_missing_session(capsys):
    assert admin_cli.show_snapshot(_client(_handler), "ghost") == 1
    assert "No code found for session: ghost" in capsys.readouterr().out


def test_main_applies_url_and_key(monkeypatch):
    captured = {}

    def fake_show(client, session_id):
        captured["config"] = client.config
        captured["session_id"] = session_id
        return 0

    monkeypatch.setattr(admin_cli, "show_snapshot", fake_show)
    status = admin_cli.main(["--url", "http://other.test/hook", "--api-key", "k", "--snapshot", "s9"])

    assert status == 0
    assert captured["session_id"] == "s9"
    assert captured["config"].url == "http://other.test/hook"
    assert captured["config"].headers["X-API-Key"] == "k"
