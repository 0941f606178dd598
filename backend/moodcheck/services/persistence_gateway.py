"""
Workspace Persistence Gateway - Writes one mood record as a Notion page.

Not idempotent: every call creates a new page. Callers are responsible for
calling it at most once per check-in.
"""

import logging
import time
from typing import Optional

import httpx

from ..channels.notion import NotionClient
from ..core.errors import PersistenceFailed, PersistenceUnconfigured
from ..models import Credentials, MoodRecord

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """Maps a MoodRecord onto a page in the configured Notion database."""

    def __init__(self, api_url: str = NotionClient.DEFAULT_API_URL,
                 notion_version: str = NotionClient.DEFAULT_VERSION,
                 timeout: float = 30.0):
        self.api_url = api_url
        self.notion_version = notion_version
        self.timeout = timeout

    def _client(self, credentials: Credentials) -> NotionClient:
        return NotionClient(
            api_key=credentials.api_key,
            api_url=self.api_url,
            notion_version=self.notion_version,
            timeout=self.timeout,
        )

    @staticmethod
    def page_properties(record: MoodRecord) -> dict:
        """Database columns: Name (title), Emoji (text), Date (date)."""
        return {
            "Name": NotionClient.title(record.mood),
            "Emoji": NotionClient.rich_text(record.emoji),
            "Date": NotionClient.date(record.date.isoformat()),
        }

    async def create_record(self, record: MoodRecord,
                            credentials: Optional[Credentials]) -> str:
        """
        Create the page for a finished check-in.

        The reflection note goes into the page body in the same request, so a
        record is either fully written or not written at all.

        Args:
            record: Mood, emoji, date and optional reflection note
            credentials: Notion secret and database id

        Returns:
            The id of the created page

        Raises:
            PersistenceUnconfigured: credentials missing
            PersistenceFailed: the page was not created
        """
        if credentials is None:
            raise PersistenceUnconfigured("Notion is not configured")

        children = NotionClient.paragraphs(record.reflection_note) if record.reflection_note else None
        start_time = time.time()

        try:
            page = await self._client(credentials).create_page(
                credentials.database_id, self.page_properties(record), children
            )
        except httpx.HTTPStatusError as e:
            message = NotionClient.error_message(e.response)
            logger.error(
                f"Notion rejected mood record: {message}",
                extra={"extra_fields": {
                    "status_code": e.response.status_code,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                }}
            )
            raise PersistenceFailed(
                message, PersistenceFailed.UPSTREAM_REJECTED, e.response.status_code
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Notion unreachable: {e!r}")
            raise PersistenceFailed(
                f"Could not reach Notion: {e}", PersistenceFailed.NETWORK_FAILURE
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Unreadable response from Notion: {e!r}")
            raise PersistenceFailed(
                f"Unexpected response from Notion: {e}", PersistenceFailed.UPSTREAM_REJECTED
            ) from e

        if not isinstance(page, dict):
            raise PersistenceFailed(
                "Unexpected response from Notion: not a page object",
                PersistenceFailed.UPSTREAM_REJECTED,
            )

        page_id = page.get("id", "")
        logger.info(
            "Mood record saved to Notion",
            extra={"extra_fields": {
                "page_id": page_id,
                "mood": record.mood,
                "date": record.date.isoformat(),
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }}
        )
        return page_id
