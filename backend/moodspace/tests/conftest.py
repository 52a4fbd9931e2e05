"""
Shared fixtures: in-memory database and a fake identity provider.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "https://identity.test")

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moodspace.main import app
from moodspace.api.dependencies import get_admin_identity_provider, get_identity_provider
from moodspace.core.errors import IdentityProviderError
from moodspace.db.base import Base
from moodspace.db.session import get_db
from moodspace.models.mood import MoodRecord
from moodspace.schemas.user import SessionUser, SignupResponse, Token
from moodspace.services.identity import IdentityProvider

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ALICE = SessionUser(id="user-alice", email="alice@example.com")
BOB = SessionUser(id="user-bob", email="bob@example.com")
PASSWORD = "correct-horse"


class FakeIdentityProvider(IdentityProvider):
    """Resolves a fixed set of tokens without any network access."""

    def __init__(self):
        super().__init__("https://identity.test", "test-key")
        self.sessions = {"token-alice": ALICE, "token-bob": BOB}
        self.accounts = {ALICE.email: ("token-alice", PASSWORD)}
        self.signed_out = []
        self.signups = []

    async def get_user(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        return self.sessions.get(token)

    async def sign_in_with_password(self, email: str, password: str) -> Token:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise IdentityProviderError("Invalid login credentials")
        return Token(access_token=account[0], expires_in=3600)

    async def sign_up(self, email: str, password: str) -> SignupResponse:
        if email in self.accounts:
            raise IdentityProviderError("User already registered")
        self.signups.append(email)
        return SignupResponse(id="user-new", email=email, confirmation_required=True)

    async def sign_out(self, token: str) -> None:
        self.signed_out.append(token)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def client(db, identity):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_admin_identity_provider] = lambda: identity
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-alice"}


@pytest.fixture
def add_record(db):
    """Insert a record with an explicit timestamp."""
    def _add(mood_type, intensity, created_at=None, user=ALICE, ai_response=None):
        record = MoodRecord(
            user_id=user.id,
            mood_type=mood_type,
            intensity=intensity,
            ai_response=ai_response,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record
    return _add


def days_ago(n: int, hour: int = 12) -> datetime:
    now = datetime.now(timezone.utc)
    return (now - timedelta(days=n)).replace(hour=hour, minute=0, second=0, microsecond=0)
