from __future__ import annotations  # Re-export session_identity public API

from .identity import SESSION_KEY, SessionIdentity, generate_session_id

__all__ = ["SESSION_KEY", "SessionIdentity", "generate_session_id"]
