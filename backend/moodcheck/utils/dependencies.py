"""
FastAPI dependencies - hand the per-process singletons built at startup to routes.
"""

from fastapi import Request

from ..core.session_controller import SessionController
from ..services import AssistantGateway, PersistenceGateway
from ..storage import CredentialStore


def get_controller(request: Request) -> SessionController:
    return request.app.state.controller


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.controller.credentials


def get_assistant(request: Request) -> AssistantGateway:
    return request.app.state.controller.assistant


def get_persistence(request: Request) -> PersistenceGateway:
    return request.app.state.controller.persistence
