from __future__ import annotations  # Re-export session_store public API

from .models import REQUIRED_FIELDS, CodeSnapshot, StoredSnapshot, missing_fields
from .store import InMemorySessionStore, SessionStore

__all__ = [
    "REQUIRED_FIELDS",
    "CodeSnapshot",
    "InMemorySessionStore",
    "SessionStore",
    "StoredSnapshot",
    "missing_fields",
]
