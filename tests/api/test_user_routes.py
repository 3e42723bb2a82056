"""
API tests for profile and trash endpoints.
"""

import pytest
from fastapi import status
from sqlalchemy import func, select

from notesapp.db.models import NoteModel, NoteStatus, UserModel


class TestProfile:
    """Tests for /users/profile."""

    @pytest.mark.asyncio
    async def test_profile_page(self, auth_client, test_user):
        response = await auth_client.get("/users/profile")

        assert response.status_code == status.HTTP_200_OK
        assert test_user.email in response.text
        assert f'value="{test_user.name}"' in response.text

    @pytest.mark.asyncio
    async def test_update_profile(self, auth_client, test_user):
        response = await auth_client.post(
            "/users/profile", data={"name": "Renamed", "pronoun": "they/them"}
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/users/profile"
        assert test_user.name == "Renamed"
        assert test_user.pronoun == "they/them"

    @pytest.mark.asyncio
    async def test_update_profile_invalid(self, auth_client, test_user):
        response = await auth_client.post(
            "/users/profile", data={"name": "x" * 101, "pronoun": "she/her"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "at most 100 characters" in response.text
        assert 'value="she/her"' in response.text
        assert test_user.name == "Test User"

    @pytest.mark.asyncio
    async def test_delete_account(self, auth_client, db_session, test_user, make_note):
        user_id = test_user.id
        await make_note(test_user, title="one")
        await make_note(test_user, title="two", status=NoteStatus.DELETED)

        response = await auth_client.post("/users/profile/delete")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/"

        users = await db_session.scalar(
            select(func.count()).select_from(UserModel).where(UserModel.id == user_id)
        )
        notes = await db_session.scalar(
            select(func.count()).select_from(NoteModel).where(NoteModel.user_id == user_id)
        )
        assert users == 0
        assert notes == 0

        dashboard = await auth_client.get("/dashboard")
        assert dashboard.status_code == status.HTTP_302_FOUND


class TestTrash:
    """Tests for /users/trash."""

    @pytest.mark.asyncio
    async def test_trash_lists_only_own_deleted(
        self, auth_client, test_note, trashed_note, make_note, other_user
    ):
        foreign_trash = await make_note(other_user, title="Foreign bin", status=NoteStatus.DELETED)

        response = await auth_client.get("/users/trash")

        assert response.status_code == status.HTTP_200_OK
        assert trashed_note.title in response.text
        assert test_note.title not in response.text
        assert foreign_trash.title not in response.text

    @pytest.mark.asyncio
    async def test_restore(self, auth_client, trashed_note):
        response = await auth_client.post(f"/users/trash/{trashed_note.id}/restore")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/users/trash"
        assert trashed_note.status == NoteStatus.ACTIVE.value

        dashboard = await auth_client.get("/dashboard")
        assert trashed_note.title in dashboard.text

    @pytest.mark.asyncio
    async def test_restore_foreign(self, auth_client, make_note, other_user):
        note = await make_note(other_user, status=NoteStatus.DELETED)

        response = await auth_client.post(f"/users/trash/{note.id}/restore")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert note.status == NoteStatus.DELETED.value

    @pytest.mark.asyncio
    async def test_delete_permanently(self, auth_client, db_session, trashed_note):
        note_id = trashed_note.id

        response = await auth_client.post(f"/users/trash/{note_id}/delete")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert await db_session.get(NoteModel, note_id) is None

    @pytest.mark.asyncio
    async def test_delete_permanently_needs_trash(self, auth_client, test_note):
        response = await auth_client.post(f"/users/trash/{test_note.id}/delete")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert test_note.status == NoteStatus.ACTIVE.value

    @pytest.mark.asyncio
    async def test_delete_permanently_foreign(self, auth_client, make_note, other_user):
        note = await make_note(other_user, status=NoteStatus.DELETED)

        response = await auth_client.post(f"/users/trash/{note.id}/delete")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_clear_trash(self, auth_client, db_session, test_user, test_note, make_note):
        await make_note(test_user, title="bin 1", status=NoteStatus.DELETED)
        await make_note(test_user, title="bin 2", status=NoteStatus.DELETED)

        response = await auth_client.post("/users/trash/clear")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        remaining = await db_session.scalar(
            select(func.count()).select_from(NoteModel).where(NoteModel.user_id == test_user.id)
        )
        assert remaining == 1

        trash = await auth_client.get("/users/trash")
        assert "The trash is empty." in trash.text
