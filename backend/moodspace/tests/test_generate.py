"""
Tests for the enrichment endpoint.
"""
import pytest
from moodspace.core.errors import ValidationError
from moodspace.core.single_flight import mood_saves
from moodspace.models.mood import MoodRecord
from moodspace.services.response_selector import FALLBACK_RESPONSE, RESPONSES
from moodspace.services import mood_store as mood_store_module


def test_missing_token(client, db):
    """Test no Authorization header gives 401 Missing token."""
    response = client.post("/api/generate", json={"mood": "happy", "intensity": 3})
    assert response.status_code == 401
    assert response.json() == {"error": "Missing token"}
    assert db.query(MoodRecord).count() == 0


def test_invalid_token(client, db):
    """Test an unknown token gives 401 Invalid token."""
    response = client.post(
        "/api/generate",
        json={"mood": "happy", "intensity": 3},
        headers={"Authorization": "Bearer nope"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_missing_token_checked_before_body(client):
    """Test auth is checked before body validation."""
    response = client.post("/api/generate", json={"intensity": 99})
    assert response.status_code == 401


def test_known_mood(client, db, auth_headers):
    """Test a known mood returns a candidate and stores one record."""
    response = client.post("/api/generate", json={"mood": "anxious", "intensity": 4}, headers=auth_headers)
    assert response.status_code == 200
    ai = response.json()["ai"]
    assert ai in RESPONSES["anxious"]

    records = db.query(MoodRecord).all()
    assert len(records) == 1
    assert records[0].user_id == "user-alice"
    assert records[0].mood_type == "anxious"
    assert records[0].intensity == 4
    assert records[0].ai_response == ai


def test_unknown_mood_fallback(client, db, auth_headers):
    """Test an unknown mood without intensity gets the fallback."""
    response = client.post("/api/generate", json={"mood": "zzz"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"ai": FALLBACK_RESPONSE}

    record = db.query(MoodRecord).one()
    assert record.mood_type == "zzz"
    assert record.intensity is None


@pytest.mark.parametrize("body", [
    {"mood": "happy", "intensity": 6},
    {"mood": "happy", "intensity": -1},
    {"mood": "happy", "intensity": 2.5},
    {"mood": "", "intensity": 2},
    {"mood": "   ", "intensity": 2},
    {"intensity": 2},
])
def test_validation(client, db, auth_headers, body):
    """Test invalid input is rejected before the store is touched."""
    response = client.post("/api/generate", json=body, headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["error"] == "Invalid request"
    assert db.query(MoodRecord).count() == 0


def test_validation_error_details(client, auth_headers):
    """Test a rejected field is named in the 422 body."""
    response = client.post("/api/generate", json={"mood": "happy", "intensity": 9}, headers=auth_headers)
    assert response.status_code == ValidationError.status_code == 422
    details = response.json()["details"]
    assert any(d["loc"][-1] == "intensity" for d in details)


def test_idempotency_key_replay(client, db, auth_headers):
    """Test a retried request with the same key does not insert twice."""
    headers = {**auth_headers, "Idempotency-Key": "press-1"}
    first = client.post("/api/generate", json={"mood": "happy", "intensity": 3}, headers=headers)
    second = client.post("/api/generate", json={"mood": "happy", "intensity": 3}, headers=headers)

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert db.query(MoodRecord).count() == 1


def test_saved_but_not_recorded(client, db, auth_headers, monkeypatch):
    """Test an insert failure after generation is reported distinctly."""
    def failing_create(self, *args, **kwargs):
        raise mood_store_module.PersistenceError("Insert error: permission denied for table moods")

    monkeypatch.setattr(mood_store_module.MoodStore, "create_record", failing_create)
    response = client.post("/api/generate", json={"mood": "calm", "intensity": 2}, headers=auth_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["error"].startswith("Response generated but the mood was not recorded")
    assert "permission denied" in body["error"]
    assert body["ai"] in RESPONSES["calm"]
    assert db.query(MoodRecord).count() == 0
    assert not mood_saves.is_busy("user-alice")


def test_overlapping_request_rejected(client, db, auth_headers):
    """Test a second save while one is in flight is refused."""
    token = mood_saves.acquire("user-alice")
    try:
        response = client.post("/api/generate", json={"mood": "happy", "intensity": 3}, headers=auth_headers)
    finally:
        mood_saves.release("user-alice", token)

    assert response.status_code == 409
    assert response.json() == {"error": "A mood is already being saved"}
    assert db.query(MoodRecord).count() == 0


def test_other_user_not_blocked(client, db):
    """Test the in-flight guard is per user."""
    token = mood_saves.acquire("user-alice")
    try:
        response = client.post(
            "/api/generate",
            json={"mood": "happy", "intensity": 3},
            headers={"Authorization": "Bearer token-bob"}
        )
    finally:
        mood_saves.release("user-alice", token)
    assert response.status_code == 200
