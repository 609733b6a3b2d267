from __future__ import annotations  # Code snapshot domain models

from typing import Any, Dict, Optional

from pydantic import BaseModel

REQUIRED_FIELDS = ("code", "language", "timestamp", "sessionId")


class CodeSnapshot(BaseModel):  # Latest editor state delivered by a client
    code: str
    language: str
    timestamp: str
    sessionId: str
    userId: Optional[str] = None


class StoredSnapshot(CodeSnapshot):  # Snapshot stamped with server arrival time
    lastUpdated: str

    def snapshot(self) -> CodeSnapshot:
        return CodeSnapshot.model_validate(self.model_dump(exclude={"lastUpdated"}))


def missing_fields(body: Dict[str, Any]) -> list[str]:  # Required fields that are absent or empty
    return [name for name in REQUIRED_FIELDS if not body.get(name)]


__all__ = ["CodeSnapshot", "REQUIRED_FIELDS", "StoredSnapshot", "missing_fields"]
