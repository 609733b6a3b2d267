"""Pydantic schemas for the webhook and report API."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from report_synthesis import EvaluationReport


class WebhookAck(BaseModel):
    success: bool = True
    received: bool = True
    sessionId: str
    timestamp: str
    message: str = "Code update received successfully"


class WebhookIndex(BaseModel):
    status: str = "ok"
    endpoint: str
    methods: List[str]
    message: str = "Webhook endpoint is running"
    totalSessions: int
    sessions: List[str]
    usage: Dict[str, str]
    timestamp: str


class TranscriptResp(BaseModel):
    transcript: str
    turns: List[Dict[str, str]] = Field(default_factory=list)
    conversationId: Optional[str] = None
    startTime: Optional[int] = None
    summary: Optional[str] = None
    callDuration: Optional[float] = None


class GenerateReportReq(BaseModel):
    sessionId: Optional[str] = None
    agentId: Optional[str] = None


class GenerateReportResp(BaseModel):
    report: EvaluationReport
    sessionId: Optional[str] = None
    hasCode: bool = False
    stages: List[Dict] = Field(default_factory=list)
