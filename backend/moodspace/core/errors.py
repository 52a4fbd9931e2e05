"""
Application error taxonomy.

Every error carries the HTTP status it maps to; the handlers in
``moodspace.main`` render them as ``{"error": message}`` bodies.
"""
from typing import Any, Optional
from fastapi import status


class MoodSpaceError(Exception):
    """Base class for errors surfaced to API clients."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(MoodSpaceError):
    """Missing or invalid session token."""
    status_code = status.HTTP_401_UNAUTHORIZED


class PersistenceError(MoodSpaceError):
    """The store rejected a read or a write."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RecordNotSavedError(PersistenceError):
    """A response was generated but the record carrying it was not stored."""

    def __init__(self, message: str, ai_response: str):
        super().__init__(message)
        self.ai_response = ai_response


class ValidationError(MoodSpaceError):
    """Client input failed the validation boundary."""
    status_code = 422


class ConflictError(MoodSpaceError):
    """A request for the same user is already in flight."""
    status_code = status.HTTP_409_CONFLICT


class IdentityProviderError(MoodSpaceError):
    """The identity provider refused a request or could not be reached."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
