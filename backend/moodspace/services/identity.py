"""
Identity provider client (Supabase Auth / GoTrue REST API).

Credential checks, session issuance and token resolution all happen at the
provider; this module only forwards requests and maps failures to
IdentityProviderError / AuthError.
"""
import logging
from typing import Any, Dict, Optional
import httpx
from jose import JWTError, jwt
from moodspace.core.config import settings
from moodspace.core.errors import AuthError, IdentityProviderError
from moodspace.schemas.user import SessionUser, SignupResponse, Token

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    for key in ("error_description", "msg", "message", "error"):
        if isinstance(data, dict) and data.get(key):
            return str(data[key])
    return f"HTTP {response.status_code}"


class IdentityProvider:
    """Async client for the identity provider."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        jwt_secret: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.jwt_secret = jwt_secret
        self.timeout = timeout
        self._transport = transport

    def _headers(self, token: Optional[str] = None) -> Dict[str, str]:
        headers = {"apikey": self.api_key, "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        if not self.base_url:
            logger.error("SUPABASE_URL is not configured.")
            raise IdentityProviderError("Identity provider is not configured", status_code=503)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                return await client.request(
                    method,
                    f"{self.base_url}/auth/v1{path}",
                    headers=self._headers(token),
                    json=json,
                    params=params,
                )
        except httpx.TimeoutException as e:
            logger.error(f"Identity provider request timed out: {method} {path}")
            raise IdentityProviderError("Identity provider timed out", status_code=504) from e
        except httpx.HTTPError as e:
            logger.error(f"Identity provider request failed: {method} {path}: {e}")
            raise IdentityProviderError("Identity provider unavailable", status_code=502) from e

    async def get_user(self, token: Optional[str]) -> Optional[SessionUser]:
        """
        Resolve an access token to a user, or None when the token is not valid.

        Verified locally when a JWT secret is configured, otherwise asked of
        the provider.
        """
        if not token:
            return None

        if self.jwt_secret:
            return self._decode_token(token)

        response = await self._request("GET", "/user", token=token)
        if response.status_code in (401, 403):
            return None
        if response.status_code >= 400:
            message = _error_message(response)
            logger.error(f"Identity provider rejected user lookup: {message}")
            raise IdentityProviderError(message, status_code=502)

        data = response.json()
        if not data.get("id"):
            return None
        return SessionUser(id=data["id"], email=data.get("email"))

    def _decode_token(self, token: str) -> Optional[SessionUser]:
        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[settings.JWT_ALGORITHM],
                audience=settings.JWT_AUDIENCE,
            )
        except JWTError as e:
            logger.debug(f"Rejected access token: {e}")
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        return SessionUser(id=user_id, email=payload.get("email"))

    async def require_user(self, token: Optional[str]) -> SessionUser:
        """Like get_user but raises AuthError instead of returning None."""
        if not token:
            raise AuthError("Missing token")
        user = await self.get_user(token)
        if user is None:
            raise AuthError("Invalid token")
        return user

    async def sign_in_with_password(self, email: str, password: str) -> Token:
        response = await self._request(
            "POST",
            "/token",
            json={"email": email, "password": password},
            params={"grant_type": "password"},
        )
        if response.status_code >= 400:
            raise IdentityProviderError(_error_message(response))

        data = response.json()
        return Token(
            access_token=data["access_token"],
            token_type=data.get("token_type", "bearer"),
            expires_in=data.get("expires_in"),
            refresh_token=data.get("refresh_token"),
        )

    async def sign_up(self, email: str, password: str) -> SignupResponse:
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password},
        )
        if response.status_code >= 400:
            raise IdentityProviderError(_error_message(response))

        data = response.json()
        # With email confirmation on, GoTrue returns the user without a session
        user = data.get("user") or data
        return SignupResponse(
            id=user.get("id"),
            email=user.get("email"),
            confirmation_required="access_token" not in data,
        )

    async def sign_out(self, token: str) -> None:
        response = await self._request("POST", "/logout", token=token)
        # An already-expired session counts as signed out
        if response.status_code >= 400 and response.status_code not in (401, 403):
            raise IdentityProviderError(_error_message(response))


def client_identity_provider() -> IdentityProvider:
    """Provider scoped to the anon key (sign-in, sign-up, session lookup)."""
    return IdentityProvider(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        jwt_secret=settings.SUPABASE_JWT_SECRET,
        timeout=settings.HTTP_TIMEOUT,
    )


def admin_identity_provider() -> IdentityProvider:
    """Provider scoped to the service role key (enrichment endpoint only)."""
    return IdentityProvider(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        jwt_secret=settings.SUPABASE_JWT_SECRET,
        timeout=settings.HTTP_TIMEOUT,
    )
