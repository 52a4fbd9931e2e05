"""
Dashboard states and transitions.

Loading -> Ready, or Loading -> RedirectedToLogin when there is no session.
Transition functions are pure and return the next state.
"""
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple, Union
from moodspace.schemas.user import SessionUser


@dataclass(frozen=True)
class Loading:
    user: Optional[SessionUser] = None


@dataclass(frozen=True)
class Ready:
    user: SessionUser
    records: Tuple = ()
    saving: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class RedirectedToLogin:
    """Terminal: the session could not be resolved."""


DashboardState = Union[Loading, Ready, RedirectedToLogin]


def on_session(state: Loading, user: Optional[SessionUser]) -> Union[Loading, RedirectedToLogin]:
    if user is None:
        return RedirectedToLogin()
    return replace(state, user=user)


def on_records(state: Union[Loading, Ready], records: Sequence) -> Ready:
    if isinstance(state, Loading):
        if state.user is None:
            raise ValueError("records arrived before the session was resolved")
        return Ready(user=state.user, records=tuple(records))
    return replace(state, records=tuple(records))


def begin_save(state: Ready) -> Tuple[Ready, bool]:
    """Enter saving; the flag is False when a save is already in flight."""
    if state.saving:
        return state, False
    return replace(state, saving=True, error=None), True


def end_save(state: Ready, error: Optional[str] = None) -> Ready:
    return replace(state, saving=False, error=error)


def on_fetch_failed(state: Union[Loading, Ready], error: str) -> Ready:
    """The read failed: keep whatever was shown and surface the message."""
    if isinstance(state, Loading):
        if state.user is None:
            raise ValueError("fetch failed before the session was resolved")
        return Ready(user=state.user, error=error)
    return replace(state, saving=False, error=error)
