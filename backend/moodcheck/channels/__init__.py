"""Channels module - clients for third-party APIs."""

from .notion import NotionClient

__all__ = ['NotionClient']
