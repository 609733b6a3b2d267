"""Stage timing helper for the report pipeline."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from .logger import log_event


@contextmanager
def span(record: Any, name: str) -> Iterator[None]:
    """Time a block, append it to ``record.events`` and emit a ``stage`` event."""

    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        record.events.append({"span": name, "ms": elapsed_ms, "outcome": outcome})
        log_event("stage", getattr(record, "session_id", None) or "-", stage=name, ms=elapsed_ms, outcome=outcome)


__all__ = ["span"]
