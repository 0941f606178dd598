"""
Notion API client.
Only the calls the check-in needs: creating a page in a database.
"""

import logging
from typing import Dict, Any, Optional, List

import httpx

logger = logging.getLogger(__name__)

# Notion rejects rich_text content longer than this
RICH_TEXT_LIMIT = 2000


class NotionClient:
    """
    Minimal async Notion client authenticated with an integration secret.
    """

    DEFAULT_API_URL = "https://api.notion.com/v1"
    DEFAULT_VERSION = "2022-06-28"

    def __init__(self, api_key: str,
                 api_url: str = DEFAULT_API_URL,
                 notion_version: str = DEFAULT_VERSION,
                 timeout: float = 30.0):
        """
        Initialize the client.

        Args:
            api_key: Notion integration secret
            api_url: API root, overridable for tests and proxies
            notion_version: Value of the Notion-Version header
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }

    async def create_page(self, database_id: str, properties: Dict[str, Any],
                          children: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Create a page in a database.

        Args:
            database_id: Parent database
            properties: Page properties keyed by database column name
            children: Optional blocks to add to the page body

        Returns:
            The created page object

        Raises:
            httpx.HTTPStatusError: Notion rejected the request
            httpx.RequestError: Notion could not be reached
        """
        payload: Dict[str, Any] = {
            "parent": {"database_id": database_id},
            "properties": properties,
        }
        if children:
            payload["children"] = children

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.api_url}/pages", json=payload,
                                     headers=self._get_headers())
            resp.raise_for_status()
            return resp.json()

    @staticmethod
    def title(content: str) -> Dict[str, Any]:
        return {"title": [{"text": {"content": content[:RICH_TEXT_LIMIT]}}]}

    @staticmethod
    def rich_text(content: str) -> Dict[str, Any]:
        return {"rich_text": [{"text": {"content": content[:RICH_TEXT_LIMIT]}}]}

    @staticmethod
    def date(start: str) -> Dict[str, Any]:
        return {"date": {"start": start}}

    @staticmethod
    def paragraphs(text: str) -> List[Dict[str, Any]]:
        """Split text into paragraph blocks that respect the rich_text limit."""
        blocks = []
        for start in range(0, len(text), RICH_TEXT_LIMIT):
            blocks.append({
                "object": "block",
                "type": "paragraph",
                "paragraph": {
                    "rich_text": [{
                        "type": "text",
                        "text": {"content": text[start:start + RICH_TEXT_LIMIT]},
                    }]
                },
            })
        return blocks

    @staticmethod
    def error_message(response: httpx.Response) -> str:
        """Pull Notion's error message out of a failed response."""
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"HTTP {response.status_code}"
