"""Orchestrate snapshot lookup, transcript retrieval and report generation.

The pipeline moves through ``fetching_snapshot``, ``fetching_transcript``
and ``synthesizing`` and ends in ``done`` or ``failed``. A missing snapshot
is tolerated. A missing transcript, a provider failure or an unparseable
generator response ends the run at the stage where it happened. Nothing is
retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from textwrap import dedent
from typing import Any, Dict, List, Optional

from observability import log_event, span
from services.errors import AssistantError, ParseError, UpstreamError
from session_store import SessionStore, StoredSnapshot
from transcripts import Transcript, TranscriptProvider

from .extraction import extract_report
from .generator import ReportGenerator
from .models import EvaluationReport

logger = logging.getLogger(__name__)

CODE_HEADER = "--- Code Written During Interview ---"


class SynthesisStage(str, Enum):
    FETCHING_SNAPSHOT = "fetching_snapshot"
    FETCHING_TRANSCRIPT = "fetching_transcript"
    SYNTHESIZING = "synthesizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SynthesisOutcome:
    """Terminal result of one synthesis run."""

    session_id: Optional[str]
    stage: SynthesisStage = SynthesisStage.FETCHING_SNAPSHOT
    failed_at: Optional[SynthesisStage] = None
    report: Optional[EvaluationReport] = None
    error: Optional[AssistantError] = None
    snapshot: Optional[StoredSnapshot] = None
    transcript: Optional[Transcript] = None
    events: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.stage is SynthesisStage.DONE

    def error_payload(self) -> Optional[Dict[str, Any]]:
        return self.error.payload() if self.error else None


def build_context(transcript: Transcript, snapshot: Optional[StoredSnapshot]) -> str:
    """Transcript text, followed by a delimited code section when a snapshot exists."""

    context = transcript.render()
    if snapshot is not None and snapshot.code:
        context += f"\n\n{CODE_HEADER}\nLanguage: {snapshot.language}\n\n{snapshot.code}"
    return context


def build_prompt(context: str) -> str:
    return dedent(
        """
        You are an expert technical interviewer evaluating a coding interview. Based on the following interview transcript, provide a comprehensive evaluation report.

        Interview Transcript:
        {context}

        Provide:
        1. An overall summary of the candidate's performance (2-3 paragraphs).
        2. Grades on a scale of 1-10 (integers only) for each criterion:
           - Coding Skills: ability to write clean, functional code.
           - Communication: ability to explain their thought process and ask clarifying questions.
           - Algorithmic Thinking: problem-solving approach and ability to optimize solutions.
        3. Strengths: 3-5 key strengths demonstrated during the interview.
        4. Areas for Improvement: 3-5 areas where the candidate could improve.
        5. Overall Recommendation: one of "Strong Hire", "Hire", "Maybe", "No Hire".

        Respond with ONLY a valid JSON object. Do not include any text before or after the JSON. Do not use markdown code blocks.
        Use exactly this structure:
        {{
          "summary": "Overall summary text",
          "grades": {{
            "codingSkills": {{ "score": 8, "feedback": "detailed feedback" }},
            "communication": {{ "score": 9, "feedback": "detailed feedback" }},
            "algorithmicThinking": {{ "score": 7, "feedback": "detailed feedback" }}
          }},
          "strengths": ["strength1", "strength2", "strength3"],
          "areasForImprovement": ["area1", "area2", "area3"],
          "recommendation": "Hire",
          "recommendationReasoning": "explanation for the recommendation"
        }}
        """
    ).strip().format(context=context)


class ReportSynthesizer:
    """Run the report pipeline against injected collaborators."""

    def __init__(
        self,
        store: SessionStore,
        transcripts: TranscriptProvider,
        generator: ReportGenerator,
        *,
        preview_chars: Optional[int] = None,
    ) -> None:
        self._store = store
        self._transcripts = transcripts
        self._generator = generator
        self._preview_chars = preview_chars

    def run(self, session_id: Optional[str], agent_id: str) -> SynthesisOutcome:
        outcome = SynthesisOutcome(session_id=session_id)
        try:
            self._fetch_snapshot(outcome)
            transcript = self._fetch_transcript(outcome, agent_id)
            self._synthesize(outcome, transcript)
        except (UpstreamError, ParseError) as exc:
            exc.stage = outcome.stage.value
            outcome.failed_at = outcome.stage
            outcome.error = exc
            outcome.stage = SynthesisStage.FAILED
            logger.error("Report synthesis failed session=%s stage=%s: %s", session_id, exc.stage, exc.message)
            log_event("synthesis", session_id or "-", stage=exc.stage, outcome="failed", error=exc.message)
            return outcome
        outcome.stage = SynthesisStage.DONE
        log_event("synthesis", session_id or "-", stage=outcome.stage.value, outcome="done")
        return outcome

    def _fetch_snapshot(self, outcome: SynthesisOutcome) -> None:
        outcome.stage = SynthesisStage.FETCHING_SNAPSHOT
        if not outcome.session_id:
            logger.info("No session id supplied; synthesizing without code context")
            return
        with span(outcome, outcome.stage.value):
            outcome.snapshot = self._store.get(outcome.session_id)
        if outcome.snapshot is None:
            logger.warning("No code found for session %s", outcome.session_id)

    def _fetch_transcript(self, outcome: SynthesisOutcome, agent_id: str) -> Transcript:
        outcome.stage = SynthesisStage.FETCHING_TRANSCRIPT
        with span(outcome, outcome.stage.value):
            transcript = self._transcripts.fetch(agent_id)
        if not transcript.turns:
            raise UpstreamError("No transcript available", provider="transcript")
        outcome.transcript = transcript
        return transcript

    def _synthesize(self, outcome: SynthesisOutcome, transcript: Transcript) -> None:
        outcome.stage = SynthesisStage.SYNTHESIZING
        prompt = build_prompt(build_context(transcript, outcome.snapshot))
        with span(outcome, outcome.stage.value):
            raw = self._generator.complete(prompt)
            logger.info("Generator response chars=%d preview=%r", len(raw), raw[:500])
            outcome.report = extract_report(raw, preview_chars=self._preview_chars)


__all__ = ["CODE_HEADER", "ReportSynthesizer", "SynthesisOutcome", "SynthesisStage", "build_context", "build_prompt"]
