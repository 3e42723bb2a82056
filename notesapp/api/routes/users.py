"""
Profile and trash endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse

from notesapp.api.deps import CurrentUserDep, NoteServiceDep, ProfileServiceDep
from notesapp.api.routes.pages import end_session
from notesapp.api.templating import render
from notesapp.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

router = APIRouter()


def to_trash() -> RedirectResponse:
    return RedirectResponse("/users/trash", status_code=status.HTTP_303_SEE_OTHER)


# --- Profile ---

@router.get("/profile")
async def profile(request: Request, current_user: CurrentUserDep):
    """Profile page."""
    return render(
        request,
        "profile.html",
        {
            "title": "My profile",
            "values": {"name": current_user.name, "pronoun": current_user.pronoun or ""},
        },
    )


@router.post("/profile")
async def update_profile(
    request: Request,
    profiles: ProfileServiceDep,
    name: str = Form(""),
    pronoun: Optional[str] = Form(None),
):
    """Save name and pronoun."""
    try:
        await profiles.update_profile(name=name, pronoun=pronoun)
    except ValidationFailed as e:
        return render(
            request,
            "profile.html",
            {"title": "My profile", "error": e.user_message, "values": e.values},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/users/profile", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/profile/delete")
async def delete_profile(profiles: ProfileServiceDep):
    """Delete the account with all its notes, then end the session."""
    await profiles.delete_account()
    return end_session("/")


# --- Trash ---

@router.get("/trash")
async def trash(request: Request, notes: NoteServiceDep):
    """Trashed notes."""
    return render(
        request,
        "trash.html",
        {"title": "Trash", "notes": await notes.list_trash()},
    )


@router.post("/trash/clear")
async def clear_trash(notes: NoteServiceDep):
    """Permanently remove everything in the trash."""
    await notes.clear_trash()
    return to_trash()


@router.post("/trash/{note_id}/restore")
async def restore_note(note_id: str, notes: NoteServiceDep):
    """Move a note back out of the trash."""
    await notes.restore(note_id)
    return to_trash()


@router.post("/trash/{note_id}/delete")
async def delete_note_permanently(note_id: str, notes: NoteServiceDep):
    """Permanently remove a trashed note."""
    await notes.hard_delete(note_id)
    return to_trash()
