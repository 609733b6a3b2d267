"""Webhook endpoints receiving and serving code snapshots."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaError

from api.dependencies import check_api_key, get_store
from api.schemas import WebhookAck, WebhookIndex
from observability import log_event
from services.errors import AssistantError, NotFoundError, ValidationError
from session_store import REQUIRED_FIELDS, CodeSnapshot, SessionStore, missing_fields

logger = logging.getLogger(__name__)

ENDPOINT = "/webhook/code-update"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-API-Key",
}

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _read_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Request body must be valid JSON") from exc
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


@router.post(ENDPOINT, response_model=WebhookAck)
async def receive_code_update(
    request: Request,
    x_api_key: Optional[str] = Header(default=None),
    store: SessionStore = Depends(get_store),
) -> WebhookAck:
    try:
        check_api_key(x_api_key)
    except AssistantError:
        logger.warning("Unauthorized webhook attempt")
        raise

    body = await _read_body(request)
    if missing_fields(body):
        raise ValidationError(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")
    try:
        snapshot = CodeSnapshot.model_validate(body)
    except SchemaError as exc:
        raise ValidationError(f"Invalid snapshot payload: {exc.error_count()} field error(s)") from exc

    try:
        store.put(snapshot.sessionId, snapshot)
    except Exception as exc:
        logger.exception("Error processing webhook")
        raise AssistantError(str(exc) or "Unknown error") from exc

    log_event(
        "code_update",
        snapshot.sessionId,
        language=snapshot.language,
        chars=len(snapshot.code),
    )
    return WebhookAck(sessionId=snapshot.sessionId, timestamp=_now())


@router.get(ENDPOINT)
def read_code_update(
    sessionId: Optional[str] = None,
    x_api_key: Optional[str] = Header(default=None),
    store: SessionStore = Depends(get_store),
) -> Dict[str, Any]:
    if not sessionId:
        sessions = store.list()
        return WebhookIndex(
            endpoint=ENDPOINT,
            methods=["POST", "GET"],
            totalSessions=len(sessions),
            sessions=sessions,
            usage={
                "POST": "Send code updates with { code, language, timestamp, sessionId, userId }",
                "GET": "Retrieve code with ?sessionId=<session-id>",
            },
            timestamp=_now(),
        ).model_dump()

    try:
        check_api_key(x_api_key)
    except AssistantError:
        logger.warning("Unauthorized GET attempt")
        raise

    stored = store.get(sessionId)
    if stored is None:
        raise NotFoundError(f"No code found for session: {sessionId}", available=store.list())
    logger.info("Code retrieved for session %s", sessionId)
    return {"success": True, **stored.model_dump(exclude_none=True)}


@router.options(ENDPOINT)
def preflight_code_update() -> JSONResponse:
    return JSONResponse({}, status_code=200, headers=CORS_HEADERS)
