"""Core module - session lifecycle, errors and logging setup.

SessionController lives in .session_controller and is imported from there;
importing it here would create a cycle with the services package.
"""

from .errors import MoodCheckError, AssistantUnavailable, PersistenceUnconfigured, PersistenceFailed

__all__ = ['MoodCheckError', 'AssistantUnavailable', 'PersistenceUnconfigured', 'PersistenceFailed']
