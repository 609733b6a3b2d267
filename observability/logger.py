"""Structured logging for snapshot delivery and report synthesis."""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from typing import Any

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "0") in ("1", "true", "True")
LOG_FILE = os.getenv("LOG_FILE", "logs/assistant.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "5242880"))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGES = ("api", "llm_gateway", "report_synthesis", "session_identity", "session_store", "telemetry", "transcripts")

_events = logging.getLogger("assistant.events")
_events.setLevel(LOG_LEVEL)
_events.propagate = False


def _rotating(path: str, *, json_lines: bool) -> logging.Handler:
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)
    handler.setLevel(LOG_LEVEL)
    if json_lines:
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.addFilter(lambda record: getattr(record, "is_json", False) is True)
    else:
        handler.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=DATE_FORMAT))
        handler.addFilter(lambda record: getattr(record, "is_json", False) is not True)
    return handler


def _human_file_name() -> str:
    base = LOG_FILE if LOG_FILE.endswith(".log") else f"{LOG_FILE}.log"
    return base.replace(".log", "-human.log")


def _ensure_handlers() -> None:
    if _events.handlers:
        return

    # Console: human-readable lines only (stdout)
    console = logging.StreamHandler(stream=sys.stdout)
    console.setLevel(LOG_LEVEL)
    console.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=DATE_FORMAT))
    console.addFilter(lambda record: getattr(record, "is_json", False) is not True)
    _events.addHandler(console)

    if ENABLE_FILE_LOGS:
        _events.addHandler(_rotating(LOG_FILE, json_lines=True))
        _events.addHandler(_rotating(_human_file_name(), json_lines=False))


def configure_logging() -> None:
    """Attach a stdout handler to the service package loggers once."""

    _ensure_handlers()
    for name in PACKAGES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(LOG_LEVEL)
        if not package_logger.handlers:
            handler = logging.StreamHandler(stream=sys.stdout)
            handler.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=DATE_FORMAT))
            package_logger.addHandler(handler)


def _format_human(evt: dict[str, Any]) -> str:
    base = f"session={evt.get('session_id')} kind={evt.get('kind')}"
    extras = [f"{key}={evt[key]}" for key in ("stage", "outcome", "ms", "status", "language", "chars", "error") if key in evt]
    return base + (" " + " ".join(extras) if extras else "")


def _emit(message: str, *, is_json: bool) -> None:
    record = _events.makeRecord(
        name=_events.name,
        level=logging.INFO,
        fn="",
        lno=0,
        msg=message,
        args=(),
        exc_info=None,
    )
    record.is_json = is_json  # type: ignore[attr-defined]
    _events.handle(record)


def log_event(kind: str, session_id: str, **fields: Any) -> None:
    """Emit a human line to the console and, with file logs on, a JSON line."""

    _ensure_handlers()

    payload: dict[str, Any] = {
        "ts": time.time(),
        "trace": str(uuid.uuid4()),
        "kind": kind,
        "session_id": session_id,
    }
    payload.update(fields)

    _emit(_format_human(payload), is_json=False)
    if ENABLE_FILE_LOGS:
        _emit(json.dumps(payload, ensure_ascii=False, default=str), is_json=True)


__all__ = ["configure_logging", "log_event"]
