"""
Shared route dependencies: identity provider, session resolution, stores.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from moodspace.core.config import settings
from moodspace.core.errors import AuthError
from moodspace.db.session import get_db
from moodspace.schemas.user import SessionUser
from moodspace.services.identity import (
    IdentityProvider, admin_identity_provider, client_identity_provider
)
from moodspace.services.mood_store import MoodStore

_security = HTTPBearer(auto_error=False)


def get_identity_provider() -> IdentityProvider:
    """Anon-key provider for sign-in, sign-up and session lookup."""
    return client_identity_provider()


def get_admin_identity_provider() -> IdentityProvider:
    """Service-role provider, used only by the enrichment endpoint."""
    return admin_identity_provider()


def get_bearer_token(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_security),
) -> str:
    """Token from ``Authorization: Bearer <token>``; AuthError when absent."""
    if creds is None or creds.scheme.lower() != "bearer" or not creds.credentials:
        raise AuthError("Missing token")
    return creds.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> SessionUser:
    return await identity.require_user(token)


async def get_enrichment_user(
    token: str = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_admin_identity_provider),
) -> SessionUser:
    return await identity.require_user(token)


def get_session_token(request: Request) -> Optional[str]:
    """Access token stored in the session cookie by the login page."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


async def get_optional_session_user(
    token: Optional[str] = Depends(get_session_token),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> Optional[SessionUser]:
    """Cookie session user, or None; pages redirect instead of returning 401."""
    return await identity.get_user(token)


def get_mood_store(
    current_user: SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MoodStore:
    return MoodStore(db, current_user)
