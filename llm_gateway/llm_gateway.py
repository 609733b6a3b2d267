from __future__ import annotations  # LLM request gateway module

import logging
import os
import threading
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import httpx

from config import LlmRoute
from services.errors import UpstreamError


logger = logging.getLogger(__name__)  # Module logger setup


_MODEL_LOCKS: Dict[str, threading.Lock] = {}
_MODEL_LOCKS_GUARD = threading.Lock()

ANTHROPIC_VERSION = "2023-06-01"


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(UpstreamError):  # Base gateway error
    def __init__(self, message: str, *, status: int | None = None, detail: str | None = None) -> None:
        super().__init__(message, provider="llm", upstream_status=status, detail=detail)


def _lock_for(cfg: LlmRoute) -> threading.Lock:
    key = cfg.name or f"{cfg.base_url}{cfg.endpoint}"
    with _MODEL_LOCKS_GUARD:
        lock = _MODEL_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _MODEL_LOCKS[key] = lock
    return lock


def complete(
    prompt: str,
    *,
    cfg: LlmRoute,
    client: Optional[HttpClient] = None,
    options: Optional[Dict[str, Any]] = None,
) -> str:  # Send a single user prompt and return the raw completion text
    def _execute() -> str:
        preview = _preview(prompt)
        payload = _payload(cfg, prompt, options)
        headers = _headers(cfg)
        logger.info("LLM request send route=%s model=%s preview=%s", cfg.name, cfg.model, preview)
        try:
            response, close_cb = _post(f"{cfg.base_url}{cfg.endpoint}", payload, headers, cfg.timeout_s, client)
        except httpx.HTTPError as exc:
            logger.error("LLM transport failure: %s", exc)
            raise LlmGatewayError("LLM transport failed", detail=str(exc)) from exc
        try:
            if response.status_code >= 400:
                logger.error("LLM error status: %s", response.status_code)
                raise LlmGatewayError(
                    f"LLM returned status {response.status_code}",
                    status=response.status_code,
                    detail=response.text[:1000],
                )
            try:
                data = response.json()
            except ValueError as exc:
                logger.error("Invalid JSON payload from LLM: %s", exc)
                raise LlmGatewayError("LLM payload was not JSON") from exc
            content = _extract_content(data)
        finally:
            _close_safely(close_cb)
        logger.info("LLM request done route=%s model=%s chars=%d", cfg.name, cfg.model, len(content))
        return content

    if cfg.sequential:
        with _lock_for(cfg):
            return _execute()
    return _execute()


def _payload(cfg: LlmRoute, prompt: str, options: Optional[Dict[str, Any]]) -> Dict[str, Any]:  # Build request body for the route style
    payload: Dict[str, Any] = {
        "model": cfg.model,
        "max_tokens": cfg.max_tokens,
        "messages": [{"role": "user", "content": prompt}],
    }
    if options:
        payload.update(options)
    return payload


def _headers(cfg: LlmRoute) -> Dict[str, str]:  # Resolve auth headers from the environment
    headers = {"Content-Type": "application/json"}
    if cfg.api_style == "anthropic":
        headers["anthropic-version"] = ANTHROPIC_VERSION
    if cfg.api_key_env:
        api_key = os.getenv(cfg.api_key_env)
        if not api_key:
            raise LlmGatewayError(f"LLM API key not configured ({cfg.api_key_env})")
        if cfg.api_key_header.lower() == "authorization":
            headers["Authorization"] = f"Bearer {api_key}"
        else:
            headers[cfg.api_key_header] = api_key
    headers.update(cfg.extra_headers)
    return headers


def _post(url: str, payload: Dict[str, Any], headers: Dict[str, str], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch HTTP request
    if client is not None:
        response = client.post(url, json=payload, headers=headers, timeout=timeout)
        return response, None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _preview(text: str) -> str:  # Build preview string for logging
    stripped = text.strip()
    first = stripped.splitlines()[0] if stripped else ""
    if len(first) > 120:
        first = first[:117] + "..."
    return first


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
        blocks = data.get("content")
        if isinstance(blocks, str):
            return blocks
        if isinstance(blocks, list):
            texts = [block.get("text", "") for block in blocks if isinstance(block, dict) and block.get("type") == "text"]
            if texts:
                return "".join(texts)
    raise LlmGatewayError("LLM response missing content")
