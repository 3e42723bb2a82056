"""
SQLAlchemy ORM models package.

Re-exports all models for convenient imports.
"""

from notesapp.db.models.user import UserModel
from notesapp.db.models.note import NoteModel, NoteStatus

__all__ = [
    # User
    "UserModel",
    # Note
    "NoteModel",
    "NoteStatus",
]
