"""
Dashboard summary route.
"""
from fastapi import APIRouter, Depends
from moodspace.core.config import settings
from moodspace.core.single_flight import mood_saves
from moodspace.dashboard.view import build_dashboard_view
from moodspace.schemas.dashboard import DashboardView
from moodspace.api.dependencies import get_mood_store
from moodspace.services.mood_store import MoodStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
async def get_dashboard(store: MoodStore = Depends(get_mood_store)):
    """Get stats, 7-day trend, background and history for the current user."""
    records = store.list_records(limit=settings.HISTORY_LIMIT)
    return build_dashboard_view(
        records,
        user_email=store.user.email,
        saving=mood_saves.is_busy(store.user.id),
    )
