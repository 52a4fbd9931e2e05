"""
Pydantic schemas for MoodRecord entity.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

MIN_INTENSITY = 0
MAX_INTENSITY = 5


class MoodBase(BaseModel):
    """Base mood schema."""
    mood: str = Field(..., min_length=1, max_length=50)
    intensity: Optional[int] = Field(None, ge=MIN_INTENSITY, le=MAX_INTENSITY)

    @field_validator("mood")
    @classmethod
    def mood_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("mood must not be blank")
        return v


class MoodCreate(MoodBase):
    """Schema for plain record creation (no generated response)."""
    pass


class GenerateRequest(MoodBase):
    """Schema for the enrichment endpoint body."""
    pass


class GenerateResponse(BaseModel):
    """Schema for the enrichment endpoint response."""
    ai: str


class MoodResponse(BaseModel):
    """Schema for mood record response."""
    id: str
    mood_type: str
    intensity: Optional[int]
    ai_response: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
