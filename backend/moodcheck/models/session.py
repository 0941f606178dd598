"""
Session Models - Structures for a single check-in session and what it persists.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from .mood import MoodOption


class TurnRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """One utterance in the conversation. Immutable once appended."""
    model_config = ConfigDict(frozen=True)

    role: TurnRole
    content: str

    @staticmethod
    def user(content: str) -> "Turn":
        return Turn(role=TurnRole.USER, content=content)

    @staticmethod
    def assistant(content: str) -> "Turn":
        return Turn(role=TurnRole.ASSISTANT, content=content)


class SessionStatus(str, Enum):
    """Lifecycle states, in the only order a session may move through them."""
    AWAITING_MOOD = "awaiting_mood"
    ACTIVE = "active"
    SUMMARIZING = "summarizing"
    PERSISTING = "persisting"
    TERMINATED = "terminated"


class Session(BaseModel):
    """The one check-in in progress."""
    session_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    selected_mood: Optional[MoodOption] = None
    transcript: List[Turn] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.AWAITING_MOOD
    started_at: Optional[datetime] = None


class MoodRecord(BaseModel):
    """Payload written to the workspace once per session."""
    model_config = ConfigDict(frozen=True)

    mood: str
    emoji: str
    date: date
    reflection_note: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {
            "mood": self.mood,
            "emoji": self.emoji,
            "date": self.date.isoformat(),
        }
        if self.reflection_note:
            payload["reflection_note"] = self.reflection_note
        return payload


class Credentials(BaseModel):
    """Notion integration secret and the target database."""
    api_key: str = Field(..., min_length=1)
    database_id: str = Field(..., min_length=1)


class PersistenceOutcome(str, Enum):
    SAVED = "saved"
    UNCONFIGURED = "unconfigured"
    FAILED = "failed"


class TerminationResult(BaseModel):
    """What the caller sees when a session ends."""
    session_id: str
    outcome: PersistenceOutcome
    record: MoodRecord
    page_id: Optional[str] = None
    summary: Optional[str] = None
    error: Optional[str] = None
    transcript: List[Turn]
    terminated_at: datetime

    @property
    def saved(self) -> bool:
        return self.outcome == PersistenceOutcome.SAVED
