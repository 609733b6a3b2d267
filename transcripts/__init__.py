from __future__ import annotations  # Re-export transcripts public API

from .models import Speaker, Transcript, TranscriptTurn
from .provider import ElevenLabsTranscriptProvider, TranscriptProvider

__all__ = ["ElevenLabsTranscriptProvider", "Speaker", "Transcript", "TranscriptProvider", "TranscriptTurn"]
