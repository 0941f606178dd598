"""API module."""

from .moods import router as moods_router
from .session import router as session_router
from .chat import router as chat_router
from .notion import router as notion_router

__all__ = ['moods_router', 'session_router', 'chat_router', 'notion_router']
