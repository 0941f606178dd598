"""
API Models - Request and response bodies for the HTTP endpoints.
"""

from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from .mood import MoodOption
from .session import Turn, TurnRole, SessionStatus, TerminationResult


class MoodCatalog(BaseModel):
    moods: List[MoodOption]
    today: date


class MoodSelection(BaseModel):
    mood_id: str


class MessageRequest(BaseModel):
    content: str = ""


class SessionView(BaseModel):
    """Observable state of the current session."""
    session_id: str
    status: SessionStatus
    mood: Optional[MoodOption] = None
    transcript: List[Turn]
    started_at: Optional[datetime] = None
    is_loading: bool = False
    is_saving: bool = False
    last_result: Optional[TerminationResult] = None


class ChatHistoryItem(BaseModel):
    role: TurnRole
    content: str


class ChatRequest(BaseModel):
    """Stateless chat proxy request; the client owns the history."""
    message: str = ""
    is_first_message: bool = False
    history: List[ChatHistoryItem] = Field(default_factory=list)


class ChatReply(BaseModel):
    message: str


class NotionConfigRequest(BaseModel):
    api_key: str = ""
    database_id: str = ""


class NotionConfigStatus(BaseModel):
    is_configured: bool


class RecordRequest(BaseModel):
    mood: str
    emoji: str
    date: date
    reflection_note: Optional[str] = None


class RecordCreated(BaseModel):
    page_id: str
