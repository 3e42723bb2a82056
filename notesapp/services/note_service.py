"""
Note service for the note lifecycle: active, trash, permanent removal.

Every query is scoped by the owner's ID. A note owned by someone else is
reported exactly like a missing one.
"""

import logging
import re
from collections.abc import Iterable
from typing import Optional, Union

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.core.exceptions import NoteNotFoundError
from notesapp.core.rendering import render_markdown
from notesapp.db.models import NoteModel, NoteStatus
from notesapp.db.models.base import utcnow
from notesapp.models.schemas import NoteExport, NoteForm, validate_form

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9]")
_NOTE_ID = re.compile(r"\d+", re.ASCII)
_MAX_NOTE_ID = 2**63 - 1


def parse_note_ids(note_ids: Union[str, int, Iterable[Union[str, int]], None]) -> set[int]:
    """Normalize submitted note IDs into a set of integers.

    A single value becomes a one-element set; values that are not
    integers are dropped.
    """
    if note_ids is None:
        return set()
    if isinstance(note_ids, (str, int)):
        note_ids = [note_ids]

    ids = set()
    for raw in note_ids:
        text = str(raw).strip()
        if not _NOTE_ID.fullmatch(text):
            continue
        value = int(text)
        if 0 < value <= _MAX_NOTE_ID:
            ids.add(value)
    return ids


def export_filename(title: str) -> str:
    """Download filename: non-alphanumerics become underscores."""
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', title)}.txt"


class NoteService:
    """Service for note CRUD and trash operations of one owner."""

    def __init__(self, session: AsyncSession, owner_id: str):
        self.session = session
        self.owner_id = owner_id

    def _owned(self):
        return select(NoteModel).where(NoteModel.user_id == self.owner_id)

    async def _list(self, status: NoteStatus) -> list[NoteModel]:
        result = await self.session.execute(
            self._owned()
            .where(NoteModel.status == status.value)
            .order_by(NoteModel.updated_at.desc(), NoteModel.id.desc())
        )
        return list(result.scalars().all())

    async def list_active(self) -> list[NoteModel]:
        """Dashboard notes, most recently updated first."""
        return await self._list(NoteStatus.ACTIVE)

    async def list_trash(self) -> list[NoteModel]:
        """Trashed notes, most recently updated first."""
        return await self._list(NoteStatus.DELETED)

    async def get(
        self, note_id: Union[int, str], status: Optional[NoteStatus] = None
    ) -> NoteModel:
        """
        Get one of the owner's notes.

        Args:
            note_id: Note ID; a non-integer value never matches
            status: Only match a note in this status

        Raises:
            NoteNotFoundError: If no such note belongs to the owner
        """
        ids = parse_note_ids(note_id)
        if len(ids) != 1:
            raise NoteNotFoundError(note_id)

        query = self._owned().where(NoteModel.id == ids.pop())
        if status is not None:
            query = query.where(NoteModel.status == status.value)

        result = await self.session.execute(query)
        note = result.scalar_one_or_none()
        if not note:
            raise NoteNotFoundError(note_id)
        return note

    async def create(self, title: str, content: str) -> NoteModel:
        """
        Create an active note.

        Raises:
            ValidationFailed: If title or content is empty, or title is too long
        """
        form = validate_form(NoteForm, {"title": title, "content": content})

        now = utcnow()
        note = NoteModel(
            user_id=self.owner_id,
            title=form.title,
            content=form.content,
            status=NoteStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        self.session.add(note)
        await self.session.commit()
        logger.info(f"Created note {note.id} for user {self.owner_id}")
        return note

    async def update(self, note_id: Union[int, str], title: str, content: str) -> NoteModel:
        """
        Change title and content of an active note. Status is untouched.

        Raises:
            NoteNotFoundError: If the note is not an active note of the owner
            ValidationFailed: With the submitted values, for re-editing
        """
        note = await self.get(note_id, status=NoteStatus.ACTIVE)
        form = validate_form(NoteForm, {"title": title, "content": content})

        note.title = form.title
        note.content = form.content
        note.updated_at = utcnow()
        await self.session.commit()
        return note

    async def _set_status(
        self, note_id: Union[int, str], current: NoteStatus, target: NoteStatus
    ) -> NoteModel:
        note = await self.get(note_id, status=current)
        note.status = target.value
        note.updated_at = utcnow()
        await self.session.commit()
        logger.info(f"Note {note_id} of user {self.owner_id}: {current.value} -> {target.value}")
        return note

    async def soft_delete(self, note_id: Union[int, str]) -> NoteModel:
        """Move an active note to the trash."""
        return await self._set_status(note_id, NoteStatus.ACTIVE, NoteStatus.DELETED)

    async def restore(self, note_id: Union[int, str]) -> NoteModel:
        """Bring a trashed note back to the dashboard."""
        return await self._set_status(note_id, NoteStatus.DELETED, NoteStatus.ACTIVE)

    async def hard_delete(self, note_id: Union[int, str]) -> None:
        """
        Permanently remove a trashed note.

        Raises:
            NoteNotFoundError: If the note is not in the owner's trash
        """
        note = await self.get(note_id, status=NoteStatus.DELETED)
        await self.session.delete(note)
        await self.session.commit()
        logger.info(f"Permanently deleted note {note_id} of user {self.owner_id}")

    async def batch_soft_delete(
        self, note_ids: Union[str, Iterable[Union[str, int]], None]
    ) -> int:
        """
        Move several notes to the trash in a single UPDATE.

        IDs that are not integers, not owned, or not active are skipped.

        Returns:
            Number of notes moved
        """
        ids = parse_note_ids(note_ids)
        if not ids:
            return 0

        result = await self.session.execute(
            update(NoteModel)
            .where(
                NoteModel.id.in_(sorted(ids)),
                NoteModel.user_id == self.owner_id,
                NoteModel.status == NoteStatus.ACTIVE.value,
            )
            .values(status=NoteStatus.DELETED.value, updated_at=utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        moved = result.rowcount
        await self.session.commit()
        logger.info(f"Batch moved {moved} notes to trash for user {self.owner_id}")
        return moved

    async def clear_trash(self) -> int:
        """
        Permanently remove every trashed note of the owner in one DELETE.

        Returns:
            Number of notes removed
        """
        result = await self.session.execute(
            delete(NoteModel)
            .where(
                NoteModel.user_id == self.owner_id,
                NoteModel.status == NoteStatus.DELETED.value,
            )
            .execution_options(synchronize_session="evaluate")
        )
        removed = result.rowcount
        await self.session.commit()
        logger.info(f"Cleared {removed} notes from trash for user {self.owner_id}")
        return removed

    async def export(self, note_id: Union[int, str]) -> NoteExport:
        """Plain-text rendition of a note for download."""
        note = await self.get(note_id)
        return NoteExport(
            filename=export_filename(note.title),
            body=f"Title: {note.title}\n\n{note.content}",
        )

    @staticmethod
    def render(note: NoteModel):
        """Note content as HTML."""
        return render_markdown(note.content)
