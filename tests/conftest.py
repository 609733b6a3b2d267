import copy
import sys
from pathlib import Path
from typing import Callable, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.dependencies import bind_defaults
from config.registry import STORE_KEY, bind_model
from config.settings import settings
from session_store import InMemorySessionStore


class FakeHandle:
    def __init__(self, due_ms: int, seq: int, fn: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.fn = fn
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual clock: callbacks run only when the test advances time."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._seq = 0
        self._handles: List[FakeHandle] = []

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> FakeHandle:
        self._seq += 1
        handle = FakeHandle(self.now_ms + round(delay_s * 1000), self._seq, fn)
        self._handles.append(handle)
        return handle

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [h for h in self._handles if not h.cancelled and h.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due_ms, h.seq))
            self._handles.remove(handle)
            self.now_ms = handle.due_ms
            handle.fn()
        self.now_ms = target

    def pending(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    monkeypatch.setattr(settings, "WEBHOOK_API_KEY", None, raising=False)
    monkeypatch.setattr(settings, "DEFAULT_AGENT_ID", None, raising=False)
    yield


@pytest.fixture
def collaborators():
    """Bind stub collaborators by key; the app defaults are rebound afterwards."""

    def bind(key, instance):
        bind_model(key, lambda: instance)
        return instance

    yield bind
    bind_defaults()


@pytest.fixture
def store(collaborators) -> InMemorySessionStore:
    return collaborators(STORE_KEY, InMemorySessionStore())


REPORT_PAYLOAD = {
    "summary": "Solid problem solving with clear explanations.",
    "grades": {
        "codingSkills": {"score": 8, "feedback": "Clean code"},
        "communication": {"score": 9, "feedback": "Talked through trade-offs"},
        "algorithmicThinking": {"score": 7, "feedback": "Found the O(n) approach"},
    },
    "strengths": ["Structured", "Tested edge cases", "Asked questions"],
    "areasForImprovement": ["Naming", "Time management", "Complexity analysis"],
    "recommendation": "Hire",
    "recommendationReasoning": "Meets the bar for the role.",
}


@pytest.fixture
def report_payload() -> dict:
    return copy.deepcopy(REPORT_PAYLOAD)
