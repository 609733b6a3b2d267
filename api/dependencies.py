"""Collaborator resolution for the HTTP layer."""
from __future__ import annotations

import secrets
from pathlib import Path
from typing import Optional

from config.registry import GENERATOR_KEY, STORE_KEY, TRANSCRIPT_KEY, bind_model, get_model
from config.settings import settings
from report_synthesis import GatewayReportGenerator, ReportGenerator
from services.errors import AuthError
from session_store import InMemorySessionStore, SessionStore
from transcripts import ElevenLabsTranscriptProvider, TranscriptProvider

_default_store = InMemorySessionStore()


def bind_defaults() -> None:
    """Bind the in-process store and the HTTP-backed providers."""

    bind_model(STORE_KEY, lambda: _default_store)
    bind_model(TRANSCRIPT_KEY, ElevenLabsTranscriptProvider)
    bind_model(GENERATOR_KEY, lambda: GatewayReportGenerator.from_config(Path(settings.LLM_CONFIG_PATH)))


def get_store() -> SessionStore:
    return get_model(STORE_KEY)()


def get_transcripts() -> TranscriptProvider:
    return get_model(TRANSCRIPT_KEY)()


def get_generator() -> ReportGenerator:
    return get_model(GENERATOR_KEY)()


def check_api_key(supplied: Optional[str]) -> None:
    expected = settings.WEBHOOK_API_KEY
    if expected and not (supplied and secrets.compare_digest(supplied, expected)):
        raise AuthError("Invalid API key")
