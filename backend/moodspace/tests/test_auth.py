"""
Tests for authentication endpoints.
"""


def test_signup(client, identity):
    """Test user signup."""
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "test@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 201
    assert response.json()["email"] == "test@example.com"
    assert response.json()["confirmation_required"] is True
    assert identity.signups == ["test@example.com"]


def test_signup_existing_email(client):
    """Test signup with an email the provider already knows."""
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "alice@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 400
    assert response.json() == {"error": "User already registered"}


def test_signup_short_password(client, identity):
    """Test signup validation."""
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "test@example.com",
            "password": "123"
        }
    )
    assert response.status_code == 422
    assert identity.signups == []


def test_login(client):
    """Test user login."""
    response = client.post(
        "/api/auth/login",
        json={
            "email": "alice@example.com",
            "password": "correct-horse"
        }
    )
    assert response.status_code == 200
    assert response.json()["access_token"] == "token-alice"
    assert response.json()["token_type"] == "bearer"


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={
            "email": "nonexistent@example.com",
            "password": "wrongpassword"
        }
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid login credentials"}


def test_logout(client, identity, auth_headers):
    """Test logout forwards the token to the provider."""
    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert identity.signed_out == ["token-alice"]


def test_logout_without_token(client):
    """Test logout requires a token."""
    response = client.post("/api/auth/logout")
    assert response.status_code == 401
