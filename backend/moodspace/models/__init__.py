"""Models package - Import all models for SQLAlchemy registration."""
from moodspace.models.mood import MoodRecord

__all__ = [
    "MoodRecord",
]
