"""
Shared test fixtures and configuration.
"""

import pytest
import os

# Set test environment variables before importing app modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/moodcheck_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("RESET_DELAY_SECONDS", "0")
os.environ.setdefault("LLM_API_KEY", "")
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("NOTION_API_KEY", "")
os.environ.setdefault("NOTION_DATABASE_ID", "")

from datetime import datetime, timezone, timedelta

from moodcheck.core.errors import AssistantUnavailable, PersistenceFailed, PersistenceUnconfigured
from moodcheck.core.session_controller import SessionController
from moodcheck.models import Credentials
from moodcheck.storage import LocalStorage, CredentialStore


class FakeAssistant:
    """Assistant gateway double that records every call."""

    def __init__(self, replies=None, fail=False):
        self.replies = list(replies or [])
        self.fail = fail
        self.calls = []
        self.configured = True
        self.gate = None  # asyncio.Event to hold calls open

    async def complete(self, transcript, latest_user_message, is_opening=False):
        self.calls.append({
            "transcript": list(transcript),
            "message": latest_user_message,
            "is_opening": is_opening,
        })
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise AssistantUnavailable("upstream down")
        if self.replies:
            return self.replies.pop(0)
        return f"reply {len(self.calls)}"


class FakePersistence:
    """Persistence gateway double that records every record it is given."""

    def __init__(self, error=None):
        self.error = error
        self.records = []
        self.gate = None

    async def create_record(self, record, credentials):
        if credentials is None:
            raise PersistenceUnconfigured("Notion credentials are not configured")
        self.records.append((record, credentials))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return f"page-{len(self.records)}"


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def credential_store(storage):
    return CredentialStore(storage)


@pytest.fixture
def credentials():
    return Credentials(api_key="secret_test", database_id="db-123")


@pytest.fixture
def assistant():
    return FakeAssistant()


@pytest.fixture
def persistence():
    return FakePersistence()


class FakeClock:
    """Clock that advances only when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 21, 30, tzinfo=timezone(timedelta(hours=1))))


@pytest.fixture
def controller(assistant, persistence, credential_store, clock):
    return SessionController(
        assistant=assistant,
        persistence=persistence,
        credentials=credential_store,
        reset_delay=0,
        clock=clock,
    )


@pytest.fixture
def failing_persistence():
    return FakePersistence(
        error=PersistenceFailed("Invalid database", PersistenceFailed.UPSTREAM_REJECTED, 400)
    )
