"""
Authentication routes for signup, login, and logout.

Credentials are checked by the identity provider; these routes only proxy.
"""
from fastapi import APIRouter, Depends, status
from moodspace.schemas.user import UserCredentials, SignupResponse, Token
from moodspace.api.dependencies import get_bearer_token, get_identity_provider
from moodspace.services.identity import IdentityProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    credentials: UserCredentials,
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Register a new user (email confirmation may be required)."""
    return await identity.sign_up(credentials.email.strip(), credentials.password)


@router.post("/login", response_model=Token)
async def login(
    credentials: UserCredentials,
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Login and get an access token."""
    return await identity.sign_in_with_password(credentials.email.strip(), credentials.password)


@router.post("/logout")
async def logout(
    token: str = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Logout and end the session at the identity provider."""
    await identity.sign_out(token)
    return {"message": "Logged out successfully"}
