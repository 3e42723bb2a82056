"""
Home, registration, login, logout and dashboard pages.
"""

import logging

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse

from notesapp.api.deps import (
    AnonymousDep,
    AuthServiceDep,
    CurrentUserDep,
    NoteServiceDep,
    OptionalUserDep,
    SessionDep,
)
from notesapp.api.templating import render
from notesapp.config import settings
from notesapp.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    ValidationFailed,
)
from notesapp.db.models import UserModel
from notesapp.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


def start_session(auth: AuthService, user: UserModel, url: str = "/dashboard") -> RedirectResponse:
    """Redirect carrying a fresh session cookie for the user."""
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        auth.serialize(user),
        max_age=settings.session_max_age_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


def end_session(url: str = "/") -> RedirectResponse:
    """Redirect that drops the session cookie."""
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/")
async def index(request: Request, _: OptionalUserDep):
    """Home page."""
    return render(request, "index.html", {"title": "Welcome!"})


@router.get("/register")
async def register_form(request: Request, _: AnonymousDep):
    """Registration form."""
    return render(request, "register.html", {"title": "Sign up", "values": {}})


@router.post("/register")
async def register(
    request: Request,
    session: SessionDep,
    auth: AuthServiceDep,
    _: AnonymousDep,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
):
    """Create an account and sign the new user in."""
    try:
        user = await auth.register(session, name=name, email=email, password=password)
    except (ValidationFailed, DuplicateEmailError) as e:
        return render(
            request,
            "register.html",
            {
                "title": "Sign up",
                "error": e.user_message,
                "values": {"name": name, "email": email},
            },
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return start_session(auth, user)


@router.get("/login")
async def login_form(request: Request, _: AnonymousDep):
    """Login form."""
    return render(request, "login.html", {"title": "Log in", "values": {}})


@router.post("/login")
async def login(
    request: Request,
    session: SessionDep,
    auth: AuthServiceDep,
    _: AnonymousDep,
    email: str = Form(""),
    password: str = Form(""),
):
    """Check credentials and start a session."""
    try:
        user = await auth.authenticate(session, email=email, password=password)
    except (ValidationFailed, AuthenticationError) as e:
        return render(
            request,
            "login.html",
            {"title": "Log in", "error": e.user_message, "values": {"email": email}},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return start_session(auth, user)


@router.get("/logout")
async def logout(current_user: CurrentUserDep):
    """End the session."""
    logger.info(f"User {current_user.id} logged out")
    return end_session("/")


@router.get("/dashboard")
async def dashboard(request: Request, notes: NoteServiceDep):
    """Active notes of the signed-in user."""
    return render(
        request,
        "dashboard.html",
        {"title": "Dashboard", "notes": await notes.list_active()},
    )
