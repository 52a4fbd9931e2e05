"""
Tests for the identity provider client.
"""
import asyncio
import json
from datetime import datetime, timedelta, timezone
import httpx
import pytest
from jose import jwt
from moodspace.core.errors import AuthError, IdentityProviderError
from moodspace.services.identity import IdentityProvider

SECRET = "super-secret-jwt-token-with-at-least-32-characters"


def provider(handler, **kwargs):
    return IdentityProvider(
        "https://identity.test/",
        "anon-key",
        transport=httpx.MockTransport(handler),
        **kwargs
    )


def run(coro):
    return asyncio.run(coro)


def test_get_user_remote():
    """Test token resolution through the provider."""
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers["apikey"]
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(200, json={"id": "user-1", "email": "u@example.com"})

    user = run(provider(handler).get_user("tok"))
    assert user.id == "user-1"
    assert user.email == "u@example.com"
    assert seen == {
        "url": "https://identity.test/auth/v1/user",
        "apikey": "anon-key",
        "auth": "Bearer tok",
    }


def test_get_user_rejected_token():
    """Test an unauthorized lookup resolves to no user."""
    p = provider(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))
    assert run(p.get_user("tok")) is None
    with pytest.raises(AuthError) as exc_info:
        run(p.require_user("tok"))
    assert exc_info.value.message == "Invalid token"


def test_require_user_missing_token():
    """Test no token never reaches the provider."""
    def handler(request):
        raise AssertionError("unexpected request")

    with pytest.raises(AuthError) as exc_info:
        run(provider(handler).require_user(None))
    assert exc_info.value.message == "Missing token"


def test_transport_failure():
    """Test network errors map to a 502 IdentityProviderError."""
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(IdentityProviderError) as exc_info:
        run(provider(handler).get_user("tok"))
    assert exc_info.value.status_code == 502


def test_not_configured():
    """Test a missing base URL is reported, not attempted."""
    with pytest.raises(IdentityProviderError) as exc_info:
        run(IdentityProvider("", "anon-key").get_user("tok"))
    assert exc_info.value.status_code == 503


def test_sign_in():
    """Test password sign-in returns the session token."""
    def handler(request):
        assert request.url.params["grant_type"] == "password"
        assert json.loads(request.content) == {"email": "u@example.com", "password": "secret123"}
        return httpx.Response(200, json={
            "access_token": "at", "token_type": "bearer", "expires_in": 3600, "refresh_token": "rt"
        })

    token = run(provider(handler).sign_in_with_password("u@example.com", "secret123"))
    assert token.access_token == "at"
    assert token.expires_in == 3600


def test_sign_in_error_message():
    """Test the provider's error text is surfaced."""
    p = provider(lambda request: httpx.Response(
        400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
    ))
    with pytest.raises(IdentityProviderError) as exc_info:
        run(p.sign_in_with_password("u@example.com", "nope123"))
    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.status_code == 400


def test_sign_up_requires_confirmation():
    """Test signup without a session means confirmation is pending."""
    p = provider(lambda request: httpx.Response(200, json={"id": "user-2", "email": "n@example.com"}))
    result = run(p.sign_up("n@example.com", "secret123"))
    assert result.id == "user-2"
    assert result.confirmation_required is True


def test_sign_out_expired_session_ok():
    """Test signing out an expired session is not an error."""
    run(provider(lambda request: httpx.Response(401)).sign_out("tok"))
    with pytest.raises(IdentityProviderError):
        run(provider(lambda request: httpx.Response(500, text="boom")).sign_out("tok"))


def _token(**claims):
    payload = {
        "sub": "user-9",
        "email": "nine@example.com",
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    payload.update(claims)
    return jwt.encode(payload, SECRET, algorithm="HS256")


def test_local_verification():
    """Test tokens are verified locally when a JWT secret is configured."""
    def handler(request):
        raise AssertionError("unexpected request")

    p = provider(handler, jwt_secret=SECRET)
    user = run(p.get_user(_token()))
    assert user.id == "user-9"
    assert user.email == "nine@example.com"


def test_local_verification_rejects_bad_tokens():
    """Test expired, foreign and malformed tokens resolve to no user."""
    p = provider(lambda request: httpx.Response(500), jwt_secret=SECRET)
    expired = _token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))
    foreign = jwt.encode({"sub": "x", "aud": "authenticated"}, "other-secret", algorithm="HS256")
    wrong_audience = _token(aud="anon")

    for token in [expired, foreign, wrong_audience, "not-a-jwt"]:
        assert run(p.get_user(token)) is None
