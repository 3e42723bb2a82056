"""
Profile service for updating and deleting the current user's account.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.db.models import UserModel
from notesapp.db.models.base import utcnow
from notesapp.models.schemas import ProfileForm, validate_form

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for the signed-in user's own account."""

    def __init__(self, session: AsyncSession, user: UserModel):
        self.session = session
        self.user = user

    async def update_profile(self, name: str, pronoun: Optional[str]) -> UserModel:
        """
        Change name and pronoun. A blank pronoun clears it.

        Raises:
            ValidationFailed: If the name is empty or a field is too long
        """
        form = validate_form(ProfileForm, {"name": name, "pronoun": pronoun})

        self.user.name = form.name
        self.user.pronoun = form.pronoun
        self.user.updated_at = utcnow()
        await self.session.commit()
        return self.user

    async def delete_account(self) -> None:
        """Delete the user. Their notes go with the foreign key cascade."""
        user_id = self.user.id
        await self.session.delete(self.user)
        await self.session.commit()
        logger.info(f"Deleted account {user_id}")
