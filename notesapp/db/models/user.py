"""
User model for authentication and note ownership.
"""

from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notesapp.db.database import Base
from notesapp.db.models.base import TimestampMixin

if TYPE_CHECKING:
    from notesapp.db.models.note import NoteModel


class UserModel(TimestampMixin, Base):
    """User account. Email and password are fixed after registration."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    pronoun: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    # Notes are removed by the FK cascade, not by the ORM
    notes: Mapped[list["NoteModel"]] = relationship(
        "NoteModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload",
    )
