"""
Server-rendered pages: auth gate, login form and dashboard.
"""
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from moodspace.core.config import settings
from moodspace.core.errors import IdentityProviderError
from moodspace.core.single_flight import mood_saves
from moodspace.dashboard.controller import DashboardController
from moodspace.dashboard.state import Ready
from moodspace.dashboard.view import build_dashboard_view
from moodspace.db.session import get_db
from moodspace.schemas.mood import MAX_INTENSITY, MIN_INTENSITY
from moodspace.schemas.user import SessionUser
from moodspace.api.dependencies import (
    get_identity_provider, get_optional_session_user, get_session_token
)
from moodspace.services.enrichment import record_mood_with_response
from moodspace.services.identity import IdentityProvider
from moodspace.services.mood_store import MoodStore

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

router = APIRouter(include_in_schema=False)

SIGNUP_SUCCESS = "Signup success. Please check your email to confirm, then log in."
INTENSITY_ERROR = f"Intensity must be a whole number from {MIN_INTENSITY} to {MAX_INTENSITY}."


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _render_login(
    request: Request,
    mode: str = "login",
    email: str = "",
    message: Optional[dict] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "login.html",
        {"mode": mode, "email": email, "msg": message},
        status_code=status_code,
    )


def _dashboard_controller(user: Optional[SessionUser], db: Session) -> DashboardController:
    async def resolve_session():
        return user

    def fetch_records(session_user: SessionUser):
        return MoodStore(db, session_user).list_records(limit=settings.HISTORY_LIMIT)

    def save_mood(session_user: SessionUser, mood: str, intensity: Optional[int]):
        return record_mood_with_response(MoodStore(db, session_user), mood, intensity)

    return DashboardController(resolve_session, fetch_records, save_mood, guard=mood_saves)


@router.get("/")
async def auth_gate(user: Optional[SessionUser] = Depends(get_optional_session_user)):
    """Redirect to the dashboard when signed in, otherwise to the login page."""
    if user:
        return _redirect("/dashboard")
    return _redirect("/login")


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request, mode: str = "login"):
    """Credential form (login or signup mode)."""
    if mode not in ("login", "signup"):
        mode = "login"
    return _render_login(request, mode=mode)


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    mode: str = Form("login"),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Submit the credential form to the identity provider."""
    email = email.strip()
    if mode not in ("login", "signup"):
        mode = "login"

    if len(email) <= 3 or len(password) < 6:
        return _render_login(
            request,
            mode=mode,
            email=email,
            message={"type": "error", "text": "Enter your email and a password of at least 6 characters."},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        if mode == "login":
            token = await identity.sign_in_with_password(email, password)
        else:
            await identity.sign_up(email, password)
    except IdentityProviderError as e:
        logger.info(f"Identity provider rejected {mode} for {email}: {e.message}")
        return _render_login(
            request,
            mode=mode,
            email=email,
            message={"type": "error", "text": e.message},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if mode == "signup":
        return _render_login(request, mode="login", email=email, message={"type": "success", "text": SIGNUP_SUCCESS})

    response = _redirect("/dashboard")
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token.access_token,
        max_age=token.expires_in,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout_submit(
    token: Optional[str] = Depends(get_session_token),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """Sign out and clear the session cookie."""
    if token:
        try:
            await identity.sign_out(token)
        except IdentityProviderError as e:
            logger.warning(f"Sign-out failed at the identity provider: {e.message}")

    response = _redirect("/login")
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    error: Optional[str] = None,
    user: Optional[SessionUser] = Depends(get_optional_session_user),
    db: Session = Depends(get_db)
):
    """Main view: record controls, stats, 7-day trend and history."""
    controller = _dashboard_controller(user, db)
    state = await controller.load()
    if not isinstance(state, Ready):
        return _redirect("/login")

    view = build_dashboard_view(
        state.records,
        user_email=state.user.email,
        saving=mood_saves.is_busy(state.user.id),
        error=state.error or error,
    )
    return templates.TemplateResponse(request, "dashboard.html", {"view": view})


def _parse_intensity(raw: Optional[str]) -> Optional[int]:
    """Form intensity as an int in range, None when blank; ValueError otherwise."""
    if raw is None or not raw.strip():
        return None
    value = int(raw)
    if not MIN_INTENSITY <= value <= MAX_INTENSITY:
        raise ValueError(value)
    return value


@router.post("/dashboard/moods")
async def dashboard_press_mood(
    mood: str = Form(...),
    intensity: Optional[str] = Form(None),
    user: Optional[SessionUser] = Depends(get_optional_session_user),
    db: Session = Depends(get_db)
):
    """A mood button press; ignored while another save is in flight."""
    controller = _dashboard_controller(user, db)
    if not isinstance(controller.resume(user), Ready):
        return _redirect("/login")

    try:
        level = _parse_intensity(intensity)
    except ValueError:
        return _redirect("/dashboard?" + urlencode({"error": INTENSITY_ERROR}))

    # The redirect reloads the page, so the controller skips its own re-fetch
    await controller.press_mood(mood, level, refetch=False)
    if not isinstance(controller.state, Ready):
        return _redirect("/login")
    if controller.state.error:
        return _redirect("/dashboard?" + urlencode({"error": controller.state.error}))
    return _redirect("/dashboard")
