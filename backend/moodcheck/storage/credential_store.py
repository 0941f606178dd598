"""
Credential Store - Durable home of the Notion credentials.

The JSON document on disk is the only copy; nothing caches it in memory,
so every read reflects the latest configure/reset.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..models import Credentials
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes workspace credentials through a StorageInterface."""

    def __init__(self, storage: StorageInterface,
                 path: str = "settings/notion_credentials.json"):
        self.storage = storage
        self.path = path

    async def get(self) -> Optional[Credentials]:
        """Return the stored credentials, or None when absent or unreadable."""
        content = await self.storage.load(self.path)
        if content is None:
            return None

        try:
            return Credentials(**json.loads(content.decode('utf-8')))
        except (ValueError, TypeError, ValidationError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.warning(f"Ignoring unreadable credential document {self.path}: {e}")
            return None

    async def configured(self) -> bool:
        return await self.get() is not None

    async def set(self, credentials: Credentials) -> bool:
        """Persist credentials, replacing any previous ones."""
        saved = await self.storage.save(self.path, credentials.model_dump_json(indent=2))
        if saved:
            logger.info("Notion credentials configured")
        return saved

    async def clear(self) -> bool:
        removed = await self.storage.delete(self.path)
        if removed:
            logger.info("Notion credentials cleared")
        return removed
