"""
Mood record store scoped to one authenticated user.
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from moodspace.core.errors import AuthError, PersistenceError
from moodspace.models.mood import MoodRecord
from moodspace.schemas.user import SessionUser

logger = logging.getLogger(__name__)

MAX_BATCH = 50


class MoodStore:
    """Create/read access to the moods table for a single user."""

    def __init__(self, db: Session, user: Optional[SessionUser]):
        if user is None or not user.id:
            raise AuthError("Missing token")
        self.db = db
        self.user = user

    def create_record(
        self,
        user_id: str,
        mood_type: str,
        intensity: Optional[int],
        ai_response: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> MoodRecord:
        """Append one record. Raises PersistenceError if the write is rejected."""
        if user_id != self.user.id:
            raise AuthError("Invalid token")

        record = MoodRecord(
            user_id=user_id,
            mood_type=mood_type,
            intensity=intensity,
            ai_response=ai_response,
            idempotency_key=idempotency_key,
        )
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert mood record for user {user_id}: {e}")
            raise PersistenceError(f"Insert error: {e}") from e

        logger.info(f"Recorded mood '{mood_type}' ({intensity}) for user {user_id}")
        return record

    def list_records(self, limit: int = MAX_BATCH) -> List[MoodRecord]:
        """The user's records, newest first, at most ``limit`` (capped at 50)."""
        limit = max(1, min(limit, MAX_BATCH))
        try:
            return self.db.query(MoodRecord).filter(
                MoodRecord.user_id == self.user.id
            ).order_by(MoodRecord.created_at.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch mood records for user {self.user.id}: {e}")
            raise PersistenceError(f"Fetch moods error: {e}") from e

    def find_by_idempotency_key(self, key: str) -> Optional[MoodRecord]:
        try:
            return self.db.query(MoodRecord).filter(
                MoodRecord.user_id == self.user.id,
                MoodRecord.idempotency_key == key
            ).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Fetch moods error: {e}") from e
