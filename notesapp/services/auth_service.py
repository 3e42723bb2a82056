"""
Authentication service for registration, login and session identity.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.config import Settings
from notesapp.core.auth import (
    create_session_token,
    decode_session_token,
    hash_password,
    normalize_email,
    verify_password,
)
from notesapp.core.exceptions import AuthenticationError, AuthFailure, DuplicateEmailError
from notesapp.db.models import UserModel
from notesapp.models.schemas import LoginForm, RegisterForm, validate_form

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication and user management.

    Built once by the application factory; each call receives the
    request's database session.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def register(
        self,
        session: AsyncSession,
        name: str,
        email: str,
        password: str,
    ) -> UserModel:
        """
        Register a new user.

        Args:
            session: Database session
            name: Display name
            email: Email address, stored trimmed and lowercased
            password: Plain text password

        Returns:
            Created UserModel

        Raises:
            ValidationFailed: If a field is missing, malformed or too long
            DuplicateEmailError: If the email is already registered
        """
        form = validate_form(
            RegisterForm, {"name": name, "email": email, "password": password}
        )

        if await self.get_user_by_email(session, form.email):
            raise DuplicateEmailError(form.email)

        user = UserModel(
            email=form.email,
            password_hash=hash_password(form.password),
            name=form.name,
        )
        session.add(user)
        await session.commit()
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(
        self,
        session: AsyncSession,
        email: str,
        password: str,
    ) -> UserModel:
        """
        Check credentials and return the matching user.

        Raises:
            ValidationFailed: If email or password is empty
            AuthenticationError: With reason NOT_FOUND or WRONG_PASSWORD
        """
        form = validate_form(LoginForm, {"email": email, "password": password})
        logger.info(f"Login attempt for {form.email}")

        user = await self.get_user_by_email(session, form.email)
        if not user:
            logger.info(f"Login failed for {form.email}: unknown email")
            raise AuthenticationError(AuthFailure.NOT_FOUND)

        if not verify_password(form.password, user.password_hash):
            logger.info(f"Login failed for {form.email}: wrong password")
            raise AuthenticationError(AuthFailure.WRONG_PASSWORD)

        logger.info(f"Login succeeded for user {user.id}")
        return user

    def serialize(self, user: UserModel) -> str:
        """Session token for a user. Holds the user ID only."""
        return create_session_token(user.id, self.settings)

    async def deserialize(
        self,
        session: AsyncSession,
        token: Optional[str],
    ) -> Optional[UserModel]:
        """
        Resolve a session token back into a user.

        Returns None for a missing, invalid or expired token, or when the
        account no longer exists.
        """
        if not token:
            return None

        data = decode_session_token(token, self.settings)
        if not data:
            logger.debug("Rejected invalid or expired session token")
            return None

        user = await self.get_user_by_id(session, data.user_id)
        if not user:
            logger.info(f"Session refers to missing user {data.user_id}")
            return None

        return user

    async def get_user_by_id(
        self, session: AsyncSession, user_id: str
    ) -> Optional[UserModel]:
        """Get user by ID."""
        return await session.get(UserModel, user_id)

    async def get_user_by_email(
        self, session: AsyncSession, email: str
    ) -> Optional[UserModel]:
        """Get user by normalized email."""
        result = await session.execute(
            select(UserModel).where(UserModel.email == normalize_email(email))
        )
        return result.scalar_one_or_none()
