"""
Mood record model.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, DateTime, UniqueConstraint
from moodspace.db.base import Base
from moodspace.core.utils import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class MoodRecord(Base):
    """One mood entry; immutable once created."""
    __tablename__ = "moods"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, index=True)  # Identity provider user id
    mood_type = Column(String(50), nullable=False)
    intensity = Column(Integer, nullable=True)  # 0-5
    ai_response = Column(Text, nullable=True)
    idempotency_key = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    # One record per client retry key per user
    __table_args__ = (
        UniqueConstraint('user_id', 'idempotency_key', name='uq_moods_user_idempotency_key'),
    )
