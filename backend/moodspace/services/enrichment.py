"""
Enrichment: pick a supportive response for a mood and store it with the record.

Generation and persistence are two steps of one operation. If the response
was generated but the insert failed, RecordNotSavedError carries the text so
the caller can tell the user it was not recorded.
"""
import logging
import random
from typing import Optional
from moodspace.core.errors import PersistenceError, RecordNotSavedError
from moodspace.services.mood_store import MoodStore
from moodspace.services.response_selector import select_response

logger = logging.getLogger(__name__)


def record_mood_with_response(
    store: MoodStore,
    mood: str,
    intensity: Optional[int],
    idempotency_key: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate the response, insert the record, and return the response text."""
    if idempotency_key:
        existing = store.find_by_idempotency_key(idempotency_key)
        if existing is not None:
            logger.info(f"Replayed mood request with key {idempotency_key} for user {store.user.id}")
            return existing.ai_response or select_response(existing.mood_type, rng)

    ai_text = select_response(mood, rng)

    try:
        store.create_record(
            user_id=store.user.id,
            mood_type=mood,
            intensity=intensity,
            ai_response=ai_text,
            idempotency_key=idempotency_key,
        )
    except PersistenceError as e:
        raise RecordNotSavedError(
            f"Response generated but the mood was not recorded: {e.message}",
            ai_response=ai_text,
        ) from e

    return ai_text
