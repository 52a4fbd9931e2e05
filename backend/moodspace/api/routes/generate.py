"""
Enrichment route: record a mood together with a supportive response.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session
from moodspace.core.errors import ConflictError
from moodspace.core.single_flight import mood_saves
from moodspace.db.session import get_db
from moodspace.schemas.mood import GenerateRequest, GenerateResponse
from moodspace.schemas.user import SessionUser
from moodspace.api.dependencies import get_enrichment_user
from moodspace.services.enrichment import record_mood_with_response
from moodspace.services.mood_store import MoodStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    body: GenerateRequest,
    idempotency_key: Optional[str] = Header(None, max_length=100),
    current_user: SessionUser = Depends(get_enrichment_user),
    db: Session = Depends(get_db)
):
    """Pick a response for the mood, store the record, return the response."""
    token = mood_saves.acquire(current_user.id)
    if token is None:
        logger.info(f"Rejected overlapping mood save for user {current_user.id}")
        raise ConflictError("A mood is already being saved")

    try:
        store = MoodStore(db, current_user)
        ai_text = record_mood_with_response(
            store,
            mood=body.mood,
            intensity=body.intensity,
            idempotency_key=idempotency_key,
        )
    finally:
        mood_saves.release(current_user.id, token)

    return {"ai": ai_text}
