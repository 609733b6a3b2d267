"""Transcript and report synthesis endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_generator, get_store, get_transcripts
from api.schemas import GenerateReportReq, GenerateReportResp, TranscriptResp
from config.settings import settings
from report_synthesis import EvaluationReport, ReportGenerator, ReportSynthesizer, generate_report_pdf
from services.errors import AssistantError, ValidationError
from session_store import SessionStore
from transcripts import TranscriptProvider


router = APIRouter(prefix="/api")


def _agent_id(value: Optional[str]) -> str:
    agent_id = value or settings.DEFAULT_AGENT_ID
    if not agent_id:
        raise ValidationError("agentId is required")
    return agent_id


@router.get("/transcript", response_model=TranscriptResp)
def fetch_transcript(
    agentId: Optional[str] = None,
    transcripts: TranscriptProvider = Depends(get_transcripts),
) -> TranscriptResp:
    transcript = transcripts.fetch(_agent_id(agentId))
    return TranscriptResp(
        transcript=transcript.render(),
        turns=[{"speaker": turn.speaker.value, "message": turn.message} for turn in transcript.turns],
        conversationId=transcript.conversationId,
        startTime=transcript.startTime,
        summary=transcript.summary,
        callDuration=transcript.durationSeconds,
    )


@router.post("/generate-report", response_model=GenerateReportResp)
def generate_report(
    req: GenerateReportReq,
    store: SessionStore = Depends(get_store),
    transcripts: TranscriptProvider = Depends(get_transcripts),
    generator: ReportGenerator = Depends(get_generator),
) -> GenerateReportResp:
    synthesizer = ReportSynthesizer(store, transcripts, generator)
    outcome = synthesizer.run(req.sessionId, _agent_id(req.agentId))
    if outcome.error is not None:
        raise outcome.error
    if outcome.report is None:
        raise AssistantError("Report synthesis finished without a report")
    return GenerateReportResp(
        report=outcome.report,
        sessionId=req.sessionId,
        hasCode=outcome.snapshot is not None,
        stages=outcome.events,
    )


@router.post("/report.pdf")
def render_report_pdf(report: EvaluationReport) -> Response:
    payload = generate_report_pdf(report)
    return Response(
        content=payload,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="evaluation-report.pdf"'},
    )
