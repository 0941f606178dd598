"""
Mood Catalog - The fixed set of moods a check-in can start from.
"""

from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict


class MoodOption(BaseModel):
    """A selectable mood."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    emoji: str


MOOD_CATALOG: Tuple[MoodOption, ...] = (
    MoodOption(id="angry", label="Angry", emoji="😡"),
    MoodOption(id="tired", label="Tired", emoji="😴"),
    MoodOption(id="stressed", label="Stressed", emoji="😰"),
    MoodOption(id="anxious", label="Anxious", emoji="😬"),
    MoodOption(id="calm", label="Calm", emoji="😌"),
    MoodOption(id="energetic", label="Energetic", emoji="⚡"),
    MoodOption(id="happy", label="Happy", emoji="😄"),
)


def get_mood(mood_id: str) -> Optional[MoodOption]:
    """Look up a catalog mood by its slug."""
    for mood in MOOD_CATALOG:
        if mood.id == mood_id:
            return mood
    return None
