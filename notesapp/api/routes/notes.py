"""
Note endpoints: create, view, edit, move to trash, batch trash, download.
"""

from typing import Annotated

from fastapi import APIRouter, Form, Request, Response, status
from fastapi.responses import RedirectResponse

from notesapp.api.deps import CurrentUserDep, NoteServiceDep, OwnedNoteDep
from notesapp.api.templating import render
from notesapp.core.exceptions import ValidationFailed
from notesapp.db.models import NoteStatus

router = APIRouter()


def to_dashboard() -> RedirectResponse:
    return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)


def note_form(request: Request, title: str, action: str, values: dict, error=None, status_code=200):
    """Create/edit form, optionally refilled with the submitted values."""
    return render(
        request,
        "note_form.html",
        {"title": title, "action": action, "values": values, "error": error},
        status_code=status_code,
    )


@router.get("/create")
async def create_form(request: Request, _: CurrentUserDep):
    """Empty note form."""
    return note_form(request, "New note", "/notes/create", {})


@router.post("/create")
async def create_note(
    request: Request,
    notes: NoteServiceDep,
    title: str = Form(""),
    content: str = Form(""),
):
    """Create a note and go back to the dashboard."""
    try:
        await notes.create(title=title, content=content)
    except ValidationFailed as e:
        return note_form(
            request,
            "New note",
            "/notes/create",
            e.values,
            error=e.user_message,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return to_dashboard()


@router.post("/batch-delete")
async def batch_delete(
    notes: NoteServiceDep,
    note_ids: Annotated[list[str], Form(alias="noteIds")] = [],
):
    """Move the selected notes to the trash."""
    await notes.batch_soft_delete(note_ids)
    return to_dashboard()


@router.get("/{note_id}")
async def view_note(request: Request, note: OwnedNoteDep, notes: NoteServiceDep):
    """Note with its Markdown content rendered."""
    return render(
        request,
        "note_detail.html",
        {"title": note.title, "note": note, "rendered_content": notes.render(note)},
    )


@router.get("/{note_id}/edit")
async def edit_form(request: Request, note_id: str, notes: NoteServiceDep):
    """Edit form for an active note."""
    note = await notes.get(note_id, status=NoteStatus.ACTIVE)
    return note_form(
        request,
        "Edit note",
        f"/notes/{note.id}/edit",
        {"title": note.title, "content": note.content},
    )


@router.post("/{note_id}/edit")
async def edit_note(
    request: Request,
    note_id: str,
    notes: NoteServiceDep,
    title: str = Form(""),
    content: str = Form(""),
):
    """Save an edited note. Invalid input is shown again for correction."""
    try:
        await notes.update(note_id, title=title, content=content)
    except ValidationFailed as e:
        return note_form(
            request,
            "Edit note",
            f"/notes/{note_id}/edit",
            e.values,
            error=e.user_message,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return to_dashboard()


@router.post("/{note_id}/delete")
async def delete_note(note_id: str, notes: NoteServiceDep):
    """Move a note to the trash."""
    await notes.soft_delete(note_id)
    return to_dashboard()


@router.get("/{note_id}/download")
async def download_note(note_id: str, notes: NoteServiceDep):
    """Note as a plain-text attachment."""
    export = await notes.export(note_id)
    return Response(
        content=export.body,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
