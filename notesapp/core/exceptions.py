"""Custom exceptions for the Notes application.

Every error carries two messages: the internal one used for logging and a
user-facing one that is safe to put on a rendered page.
"""

from enum import Enum
from typing import Any, Optional


class NotesError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, user_message: str | None = None):
        """
        Initialize the error.

        Args:
            message: Internal error message for logging/debugging
            user_message: Safe message to show to users (defaults to generic message)
        """
        super().__init__(message)
        self.user_message = user_message or "An error occurred while processing your request."


class ValidationFailed(NotesError):
    """Submitted form data is missing or oversized.

    ``values`` holds what the user submitted so the form can be shown again
    without losing their input.
    """

    def __init__(
        self,
        errors: list[str],
        values: Optional[dict[str, Any]] = None,
        user_message: str | None = None,
    ):
        super().__init__(
            "Validation failed: " + "; ".join(errors),
            user_message or " ".join(errors) or "Please check the form and try again.",
        )
        self.errors = errors
        self.values = values or {}


class DuplicateEmailError(NotesError):
    """Registration with an email that already has an account."""

    def __init__(self, email: str, user_message: str | None = None):
        super().__init__(
            f"Email already registered: {email}",
            user_message or "This email is already registered.",
        )
        self.email = email


class AuthFailure(str, Enum):
    """Why a login attempt was rejected."""

    NOT_FOUND = "not_found"
    WRONG_PASSWORD = "wrong_password"


class AuthenticationError(NotesError):
    """Login rejected.

    The reason is kept for logging only; both reasons share one user message
    so the login page does not reveal which emails are registered.
    """

    def __init__(self, reason: AuthFailure, user_message: str | None = None):
        super().__init__(
            f"Authentication failed: {reason.value}",
            user_message or "Invalid email or password.",
        )
        self.reason = reason


class NoteNotFoundError(NotesError):
    """Note is missing or belongs to someone else."""

    def __init__(self, note_id: Any, user_message: str | None = None):
        super().__init__(
            f"Note not found: {note_id}",
            user_message or "Note not found.",
        )
        self.note_id = note_id


class NotAuthenticatedError(NotesError):
    """A protected page was requested without a valid session."""

    def __init__(self, message: str = "Authentication required", user_message: str | None = None):
        super().__init__(message, user_message or "Please log in to continue.")


class AlreadyAuthenticatedError(NotesError):
    """A login or registration page was requested with a valid session."""

    def __init__(self, message: str = "Already authenticated", user_message: str | None = None):
        super().__init__(message, user_message or "You are already logged in.")
