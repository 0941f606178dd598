"""
Mood API endpoints - Serve the mood catalog.
"""

from datetime import datetime
from fastapi import APIRouter

from ..models import MOOD_CATALOG, MoodCatalog

router = APIRouter(prefix="/moods", tags=["moods"])


@router.get("", response_model=MoodCatalog)
async def list_moods():
    """Moods to choose from, plus today's date for the check-in header."""
    return MoodCatalog(moods=list(MOOD_CATALOG), today=datetime.now().astimezone().date())
