"""
Domain errors raised by the gateways and caught by the session controller.
"""

from typing import Optional


class MoodCheckError(Exception):
    """Base class for all mood check-in errors."""


class AssistantUnavailable(MoodCheckError):
    """The completion call failed or returned no content."""


class PersistenceUnconfigured(MoodCheckError):
    """Workspace credentials are missing."""


class PersistenceFailed(MoodCheckError):
    """The workspace API rejected the record or could not be reached."""

    UPSTREAM_REJECTED = "upstream_rejected"
    NETWORK_FAILURE = "network_failure"

    def __init__(self, message: str, kind: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
