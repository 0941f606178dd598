"""
Storage Interface - Abstract base class for all storage implementations.
Lets the credential store run against the local disk or anything else.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageInterface(ABC):
    """Contract every storage backend implements."""

    @abstractmethod
    async def save(self, path: str, content: bytes | str) -> bool:
        """
        Save content to the specified path.

        Args:
            path: Relative path (e.g., "settings/notion_credentials.json")
            content: Bytes or text to write

        Returns:
            bool: True if save was successful, False otherwise
        """
        pass

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """
        Load content from the specified path.

        Returns:
            Optional[bytes]: File content, or None if the file doesn't exist
        """
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if a file exists at the specified path."""
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Delete the file at the specified path.

        Returns:
            bool: True if a file was removed
        """
        pass
