"""Storage module - provides interface and implementations for data persistence."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .credential_store import CredentialStore

__all__ = ['StorageInterface', 'LocalStorage', 'CredentialStore']
