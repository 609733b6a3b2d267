from __future__ import annotations  # Conversation transcript models

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Speaker(str, Enum):
    INTERVIEWER = "Interviewer"
    CANDIDATE = "Candidate"


class TranscriptTurn(BaseModel):  # Single spoken turn
    speaker: Speaker
    message: str


class Transcript(BaseModel):  # Ordered conversation returned by a provider
    turns: List[TranscriptTurn] = Field(default_factory=list)
    summary: Optional[str] = None
    durationSeconds: Optional[float] = None
    conversationId: Optional[str] = None
    startTime: Optional[int] = None

    def render(self) -> str:
        return "\n\n".join(f"{turn.speaker.value}: {turn.message}" for turn in self.turns)


__all__ = ["Speaker", "Transcript", "TranscriptTurn"]
