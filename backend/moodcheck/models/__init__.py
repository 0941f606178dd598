"""Models module."""

from .mood import MoodOption, MOOD_CATALOG, get_mood
from .session import (
    Turn, TurnRole, Session, SessionStatus, MoodRecord, Credentials,
    PersistenceOutcome, TerminationResult,
)
from .api import (
    MoodCatalog, MoodSelection, MessageRequest, SessionView, ChatHistoryItem,
    ChatRequest, ChatReply, NotionConfigRequest, NotionConfigStatus,
    RecordRequest, RecordCreated,
)

__all__ = [
    'MoodOption', 'MOOD_CATALOG', 'get_mood',
    'Turn', 'TurnRole', 'Session', 'SessionStatus', 'MoodRecord', 'Credentials',
    'PersistenceOutcome', 'TerminationResult',
    'MoodCatalog', 'MoodSelection', 'MessageRequest', 'SessionView', 'ChatHistoryItem',
    'ChatRequest', 'ChatReply', 'NotionConfigRequest', 'NotionConfigStatus',
    'RecordRequest', 'RecordCreated',
]
