"""
Note model with soft-delete status.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notesapp.db.database import Base
from notesapp.db.models.base import TimestampMixin

if TYPE_CHECKING:
    from notesapp.db.models.user import UserModel


class NoteStatus(str, Enum):
    """Note lifecycle status. Deleted notes live in the trash."""

    ACTIVE = "active"
    DELETED = "deleted"


class NoteModel(TimestampMixin, Base):
    """A user's text note. Content is Markdown, rendered on view."""

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=NoteStatus.ACTIVE.value,
        nullable=False,
    )

    user: Mapped["UserModel"] = relationship(
        "UserModel",
        back_populates="notes",
        lazy="noload",
    )

    __table_args__ = (
        Index("ix_notes_user_status_updated", "user_id", "status", "updated_at"),
    )

    @property
    def is_deleted(self) -> bool:
        return self.status == NoteStatus.DELETED.value
