"""
Mood record routes.
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from moodspace.schemas.mood import MoodCreate, MoodResponse
from moodspace.api.dependencies import get_mood_store
from moodspace.services.mood_store import MoodStore, MAX_BATCH

router = APIRouter(prefix="/moods", tags=["moods"])


@router.get("", response_model=List[MoodResponse])
async def list_moods(
    limit: int = Query(MAX_BATCH, ge=1, le=MAX_BATCH),
    store: MoodStore = Depends(get_mood_store)
):
    """Get the current user's mood records (latest first)."""
    return store.list_records(limit=limit)


@router.post("", response_model=MoodResponse, status_code=status.HTTP_201_CREATED)
async def create_mood(
    mood_data: MoodCreate,
    store: MoodStore = Depends(get_mood_store)
):
    """Record a mood without a generated response."""
    return store.create_record(
        user_id=store.user.id,
        mood_type=mood_data.mood,
        intensity=mood_data.intensity,
    )
