"""
Daily Mood Check-in - Main FastAPI Application
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings, Settings
from .api import moods_router, session_router, chat_router, notion_router
from .core.logging_config import setup_logging
from .core.session_controller import SessionController
from .llm.factory import create_llm_provider_from_settings
from .middleware import RequestLoggingMiddleware
from .models import Credentials
from .services import AssistantGateway, PersistenceGateway
from .storage import LocalStorage, CredentialStore

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


def create_controller(config: Settings) -> SessionController:
    """Wire storage, gateways and the controller from settings."""
    storage = LocalStorage(config.local_storage_path)
    assistant = AssistantGateway(
        create_llm_provider_from_settings(config),
        temperature=config.llm_temperature,
        max_tokens=config.llm_max_tokens,
    )
    persistence = PersistenceGateway(
        api_url=config.notion_api_url,
        notion_version=config.notion_version,
        timeout=config.notion_timeout,
    )
    return SessionController(
        assistant=assistant,
        persistence=persistence,
        credentials=CredentialStore(storage),
        reset_delay=config.reset_delay_seconds,
    )


async def seed_credentials(store: CredentialStore, config: Settings) -> None:
    """Copy NOTION_API_KEY / NOTION_DATABASE_ID into an empty credential store."""
    if not (config.notion_api_key and config.notion_database_id):
        return
    if await store.configured():
        return
    await store.set(Credentials(
        api_key=config.notion_api_key,
        database_id=config.notion_database_id,
    ))
    logger.info("Notion credentials seeded from environment")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    controller = create_controller(settings)
    await seed_credentials(controller.credentials, settings)
    app.state.controller = controller

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"Assistant configured: {controller.assistant.configured}")
    logger.info(f"Notion configured: {await controller.credentials.configured()}")
    yield
    # Shutdown
    controller.reset()
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Daily mood check-in with a reflective assistant and Notion journaling",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

app.include_router(moods_router)
app.include_router(session_router)
app.include_router(chat_router)
app.include_router(notion_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "message": "How are you feeling today?"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "moodcheck.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
