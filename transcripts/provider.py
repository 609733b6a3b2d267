"""Transcript providers backed by the voice agent's conversation API."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import ValidationError as SchemaError

from config.settings import settings
from services.errors import UpstreamError

from .models import Speaker, Transcript, TranscriptTurn

logger = logging.getLogger(__name__)

PROVIDER = "elevenlabs"


class TranscriptProvider(Protocol):  # Source of interview conversations
    def fetch(self, agent_id: str) -> Transcript: ...


class ElevenLabsTranscriptProvider:
    """Fetch the most recent conversation for a conversational agent."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.ELEVEN_LABS_API_KEY
        self._base_url = (base_url or settings.ELEVEN_LABS_BASE_URL).rstrip("/")
        self._timeout_s = timeout_s or settings.UPSTREAM_TIMEOUT_S
        self._client = client

    def fetch(self, agent_id: str) -> Transcript:
        if not self._api_key:
            raise UpstreamError("ElevenLabs API key not configured", provider=PROVIDER)
        listing = self._get_json(
            "/v1/convai/conversations",
            params={"agent_id": agent_id},
            failure="Failed to fetch conversations",
        )
        listed = listing.get("conversations")
        conversations = [item for item in listed if isinstance(item, dict)] if isinstance(listed, list) else []
        if not conversations:
            raise UpstreamError("No conversations found", provider=PROVIDER, upstream_status=404)

        latest = max(conversations, key=_start_time)
        conversation_id = latest.get("conversation_id")
        logger.info("Fetching transcript agent=%s conversation=%s", agent_id, conversation_id)
        detail = self._get_json(
            f"/v1/convai/conversations/{conversation_id}",
            params=None,
            failure="Failed to fetch transcript",
        )
        analysis = _mapping(detail.get("analysis"))
        metadata = _mapping(detail.get("metadata"))
        try:
            return Transcript(
                turns=_turns_from_payload(detail),
                summary=analysis.get("transcript_summary"),
                durationSeconds=metadata.get("call_duration_secs"),
                conversationId=conversation_id,
                startTime=latest.get("start_time_unix_secs"),
            )
        except SchemaError as exc:
            logger.error("Failed to read transcript conversation=%s: %s", conversation_id, exc)
            raise UpstreamError("Failed to fetch transcript", provider=PROVIDER, detail="unexpected payload shape") from exc

    def _get_json(self, path: str, *, params: Optional[Dict[str, str]], failure: str) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._http().get(url, params=params, headers={"xi-api-key": self._api_key or ""})
        except httpx.HTTPError as exc:
            logger.error("%s: %s", failure, exc)
            raise UpstreamError(failure, provider=PROVIDER, detail=str(exc)) from exc
        if not response.is_success:
            logger.error("%s status=%s body=%s", failure, response.status_code, response.text[:500])
            raise UpstreamError(
                failure,
                provider=PROVIDER,
                upstream_status=response.status_code,
                detail=response.text,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(failure, provider=PROVIDER, detail="response was not JSON") from exc
        if not isinstance(data, dict):
            logger.error("%s: expected an object, got %s", failure, type(data).__name__)
            raise UpstreamError(failure, provider=PROVIDER, detail="unexpected payload shape")
        return data

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout_s)
        return self._client


def _speaker(role: Any) -> Speaker:
    return Speaker.CANDIDATE if role == "user" else Speaker.INTERVIEWER


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _start_time(conversation: Dict[str, Any]) -> float:  # Missing or non-numeric start times sort first
    value = conversation.get("start_time_unix_secs")
    return value if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


def _turns_from_items(items: List[Any]) -> List[TranscriptTurn]:  # Entries that are not objects are skipped
    return [
        TranscriptTurn(speaker=_speaker(item.get("role")), message=str(item.get("message") or ""))
        for item in items
        if isinstance(item, dict)
    ]


def _turns_from_payload(detail: Dict[str, Any]) -> List[TranscriptTurn]:
    raw = detail.get("transcript")
    if isinstance(raw, list):
        return _turns_from_items(raw)
    messages = detail.get("messages")
    if isinstance(messages, list):
        return _turns_from_items(messages)
    if isinstance(raw, str):
        return _turns_from_text(raw)
    return []


def _turns_from_text(text: str) -> List[TranscriptTurn]:  # Split a pre-rendered transcript into turns
    turns: List[TranscriptTurn] = []
    for block in text.split("\n\n"):
        block = block.strip()
        if not block:
            continue
        speaker = Speaker.INTERVIEWER
        for candidate in Speaker:
            prefix = f"{candidate.value}:"
            if block.startswith(prefix):
                speaker = candidate
                block = block[len(prefix):].strip()
                break
        turns.append(TranscriptTurn(speaker=speaker, message=block))
    return turns


__all__ = ["ElevenLabsTranscriptProvider", "TranscriptProvider"]
