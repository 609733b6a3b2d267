"""Reduce free-form generator output to a validated evaluation report.

Extraction runs in two stages. A response wrapped entirely in one fenced
block is unwrapped first. The candidate object is then the span from the
first ``{`` to the last ``}``. Anything that fails to parse or validate
raises :class:`ParseError` with a bounded preview of the raw text; no default
report is ever substituted.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaError

from config.settings import settings
from services.errors import ParseError

from .models import EvaluationReport

_FENCE = re.compile(r"\A```[\w+-]*[ \t]*\r?\n(?P<body>.*?)\r?\n?```\Z", re.DOTALL)


def strip_fence(text: str) -> str:
    """Return the body of ``text`` when the whole of it is one fenced block."""

    stripped = text.strip()
    match = _FENCE.match(stripped)
    if match is None:
        return stripped
    return match.group("body").strip()


def locate_object(text: str) -> Optional[str]:
    """Return the span from the first ``{`` to the last ``}``, if any."""

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def preview(raw: str, limit: Optional[int] = None) -> str:
    bound = settings.RAW_PREVIEW_CHARS if limit is None else limit
    return raw[:bound]


def parse_object(raw: str, *, preview_chars: Optional[int] = None) -> Dict[str, Any]:
    candidate = locate_object(strip_fence(raw))
    if candidate is None:
        raise ParseError("No JSON object found in response", raw_preview=preview(raw, preview_chars))
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Response was not valid JSON: {exc.msg} at position {exc.pos}",
            raw_preview=preview(raw, preview_chars),
        ) from exc
    if not isinstance(data, dict):
        raise ParseError("Response JSON is not an object", raw_preview=preview(raw, preview_chars))
    return data


def extract_report(raw: str, *, preview_chars: Optional[int] = None) -> EvaluationReport:
    data = parse_object(raw, preview_chars=preview_chars)
    try:
        return EvaluationReport.model_validate(data)
    except SchemaError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors()
        )
        raise ParseError(f"Report failed validation: {problems}", raw_preview=preview(raw, preview_chars)) from exc


__all__ = ["extract_report", "locate_object", "parse_object", "preview", "strip_fence"]
