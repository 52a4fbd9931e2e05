"""
Pydantic schemas for identity provider users and sessions.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class SessionUser(BaseModel):
    """Authenticated user as reported by the identity provider."""
    id: str
    email: Optional[str] = None


class UserCredentials(BaseModel):
    """Schema for login and signup."""
    email: EmailStr
    password: str = Field(..., min_length=6)


class SignupResponse(BaseModel):
    """Schema for signup response."""
    id: Optional[str] = None
    email: Optional[str] = None
    confirmation_required: bool = True


class Token(BaseModel):
    """Schema for access token response."""
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
