"""
API route dependencies: database session, session identity and access gates.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.config import settings
from notesapp.core.exceptions import AlreadyAuthenticatedError, NotAuthenticatedError
from notesapp.db.database import get_db_session
from notesapp.db.models import NoteModel, UserModel
from notesapp.services.auth_service import AuthService
from notesapp.services.note_service import NoteService
from notesapp.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


def get_auth_service(request: Request) -> AuthService:
    """The AuthService built by the application factory."""
    return request.app.state.auth_service


async def get_session_user(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[UserModel]:
    """
    Resolve the session cookie into a user.

    The result is also stored on ``request.state.user`` for the views.
    Any failure while resolving counts as not logged in.
    """
    token = request.cookies.get(settings.session_cookie_name)
    try:
        user = await auth_service.deserialize(session, token)
    except Exception:
        logger.exception("Failed to resolve session; treating request as anonymous")
        user = None

    request.state.user = user
    return user


async def require_authenticated(
    user: Optional[UserModel] = Depends(get_session_user),
) -> UserModel:
    """Gate for signed-in pages. Anonymous callers are sent to the login page."""
    if user is None:
        raise NotAuthenticatedError()
    return user


async def require_unauthenticated(
    user: Optional[UserModel] = Depends(get_session_user),
) -> None:
    """Gate for login and registration. Signed-in callers go to the dashboard."""
    if user is not None:
        raise AlreadyAuthenticatedError()


async def get_note_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    user: Annotated[UserModel, Depends(require_authenticated)],
) -> NoteService:
    """Note service scoped to the signed-in user."""
    return NoteService(session, user.id)


async def get_owned_note(
    note_id: str,
    notes: Annotated[NoteService, Depends(get_note_service)],
) -> NoteModel:
    """The requested note, if the signed-in user owns it. 404 otherwise."""
    return await notes.get(note_id)


async def get_profile_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    user: Annotated[UserModel, Depends(require_authenticated)],
) -> ProfileService:
    """Profile service for the signed-in user."""
    return ProfileService(session, user)


# Dependency annotations
SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
OptionalUserDep = Annotated[Optional[UserModel], Depends(get_session_user)]
CurrentUserDep = Annotated[UserModel, Depends(require_authenticated)]
AnonymousDep = Annotated[None, Depends(require_unauthenticated)]
NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]
OwnedNoteDep = Annotated[NoteModel, Depends(get_owned_note)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
