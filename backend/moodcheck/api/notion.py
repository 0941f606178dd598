"""
Notion API endpoints - Credential settings and direct record creation.
"""

from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import ValidationError

from ..core.errors import PersistenceFailed, PersistenceUnconfigured
from ..models import (
    Credentials, MoodRecord, NotionConfigRequest, NotionConfigStatus,
    RecordCreated, RecordRequest,
)
from ..services import PersistenceGateway
from ..storage import CredentialStore
from ..utils.dependencies import get_credential_store, get_persistence


router = APIRouter(prefix="/notion", tags=["notion"])


@router.get("/config", response_model=NotionConfigStatus)
async def get_config(store: CredentialStore = Depends(get_credential_store)):
    """Whether Notion credentials are stored. Never returns the secret."""
    return NotionConfigStatus(is_configured=await store.configured())


@router.put("/config", response_model=NotionConfigStatus)
async def configure(
    config: NotionConfigRequest,
    store: CredentialStore = Depends(get_credential_store)
):
    """Store the Notion integration secret and database id."""
    try:
        credentials = Credentials(
            api_key=config.api_key.strip(),
            database_id=config.database_id.strip()
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both API Key and Database ID are required"
        )

    if not await store.set(credentials):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store Notion configuration"
        )
    return NotionConfigStatus(is_configured=True)


@router.delete("/config", response_model=NotionConfigStatus)
async def reset_config(store: CredentialStore = Depends(get_credential_store)):
    """Forget the stored Notion credentials."""
    await store.clear()
    return NotionConfigStatus(is_configured=False)


@router.post("/records", response_model=RecordCreated, status_code=status.HTTP_201_CREATED)
async def create_record(
    request: RecordRequest,
    store: CredentialStore = Depends(get_credential_store),
    persistence: PersistenceGateway = Depends(get_persistence)
):
    """
    Save a mood record straight to Notion, outside any session.

    Returns:
        The created page id
    """
    record = MoodRecord(
        mood=request.mood,
        emoji=request.emoji,
        date=request.date,
        reflection_note=request.reflection_note,
    )

    try:
        page_id = await persistence.create_record(record, await store.get())
    except PersistenceUnconfigured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notion is not configured. Provide an API key and database ID."
        )
    except PersistenceFailed as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to save to Notion: {e}"
        )

    return RecordCreated(page_id=page_id)
