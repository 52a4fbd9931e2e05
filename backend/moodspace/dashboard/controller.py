"""
Dashboard controller: drives the state machine for one user session.
"""
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional
from moodspace.core.errors import AuthError, MoodSpaceError
from moodspace.core.single_flight import SingleFlight, mood_saves
from moodspace.dashboard.state import (
    DashboardState, Loading, Ready, RedirectedToLogin,
    begin_save, end_save, on_fetch_failed, on_records, on_session
)
from moodspace.schemas.user import SessionUser

logger = logging.getLogger(__name__)

SessionResolver = Callable[[], Awaitable[Optional[SessionUser]]]
RecordFetcher = Callable[[SessionUser], Any]  # list, or awaitable list
MoodSaver = Callable[[SessionUser, str, Optional[int]], Any]


async def _resolve(result):
    if inspect.isawaitable(result):
        return await result
    return result


class DashboardController:
    """
    Loads the dashboard and records moods, one save at a time per user.

    A press while a save is in flight (in this controller or anywhere else
    sharing the guard) is a no-op: nothing is sent and nothing is stored.
    """

    def __init__(
        self,
        resolve_session: SessionResolver,
        fetch_records: RecordFetcher,
        save_mood: MoodSaver,
        guard: SingleFlight = mood_saves,
    ):
        self.resolve_session = resolve_session
        self.fetch_records = fetch_records
        self.save_mood = save_mood
        self.guard = guard
        self.state: DashboardState = Loading()

    async def load(self) -> DashboardState:
        self.state = Loading()
        user = await self.resolve_session()
        self.state = on_session(self.state, user)
        if isinstance(self.state, RedirectedToLogin):
            return self.state

        self.state = await self._refresh(user)
        return self.state

    def resume(self, user: Optional[SessionUser]) -> DashboardState:
        """Enter Ready from a resolved session without reading records."""
        self.state = on_session(Loading(), user)
        if isinstance(self.state, Loading):
            self.state = on_records(self.state, ())
        return self.state

    async def _refresh(self, user: SessionUser) -> DashboardState:
        try:
            records = await _resolve(self.fetch_records(user))
        except AuthError:
            return RedirectedToLogin()
        except MoodSpaceError as e:
            logger.warning(f"Could not load moods for user {user.id}: {e.message}")
            return on_fetch_failed(self.state, e.message)
        return on_records(self.state, records)

    async def press_mood(self, mood: str, intensity: Optional[int], refetch: bool = True) -> bool:
        """Record a mood. Returns False when the press was ignored."""
        if not isinstance(self.state, Ready):
            return False

        saving_state, accepted = begin_save(self.state)
        if not accepted:
            return False

        user = saving_state.user
        token = self.guard.acquire(user.id)
        if token is None:
            logger.info(f"Ignored mood press for user {user.id}: a save is already in flight")
            return False

        self.state = saving_state
        error = None
        try:
            await _resolve(self.save_mood(user, mood, intensity))
        except AuthError:
            self.state = RedirectedToLogin()
            return True
        except MoodSpaceError as e:
            error = e.message
        finally:
            self.guard.release(user.id, token)

        self.state = end_save(self.state, error)
        if error is None and refetch:
            # Re-fetch only after the create has been acknowledged
            self.state = await self._refresh(user)
        return True

    @property
    def saving(self) -> bool:
        return isinstance(self.state, Ready) and self.state.saving
