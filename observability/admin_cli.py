"""Lightweight CLI helpers for inspecting stored code snapshots."""
from __future__ import annotations

import argparse
from typing import Optional, Sequence

from telemetry import DeliveryClient, WebhookConfig


def list_sessions(client: DeliveryClient) -> int:
    sessions = client.available_sessions()
    for session_id in sessions:
        print(session_id)
    print(f"total={len(sessions)}")
    return 0


def show_snapshot(client: DeliveryClient, session_id: str) -> int:
    snapshot = client.fetch(session_id)
    if snapshot is None:
        print(f"No code found for session: {session_id}")
        return 1
    print(f"[{snapshot.timestamp}] {snapshot.sessionId} language={snapshot.language} chars={len(snapshot.code)}")
    print(snapshot.code)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--url", help="Webhook URL (defaults to WEBHOOK_URL)")
    parser.add_argument("--api-key", help="Value for the X-API-Key header")
    parser.add_argument("--sessions", action="store_true", help="List known session ids")
    parser.add_argument("--snapshot", metavar="SESSION_ID", help="Print the latest snapshot for a session")
    args = parser.parse_args(argv)

    config = WebhookConfig.from_settings()
    if args.url:
        config.url = args.url
    if args.api_key:
        config.headers["X-API-Key"] = args.api_key
    client = DeliveryClient(config)

    status = 0
    if args.sessions:
        status = list_sessions(client)
    if args.snapshot:
        status = show_snapshot(client, args.snapshot) or status
    return status


if __name__ == "__main__":
    raise SystemExit(main())
