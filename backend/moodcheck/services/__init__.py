"""Services module - gateways to the language model and the Notion workspace."""

from .assistant_gateway import AssistantGateway
from .persistence_gateway import PersistenceGateway

__all__ = ['AssistantGateway', 'PersistenceGateway']
