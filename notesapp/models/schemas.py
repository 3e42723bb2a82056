"""
Pydantic schemas for form validation and service results.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, ValidationError, field_validator

from notesapp.config import settings
from notesapp.core.auth import normalize_email
from notesapp.core.exceptions import ValidationFailed


def _required(value: Any, label: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValueError(f"{label} is required.")
    return text


def _capped(value: str, label: str, limit: int) -> str:
    if len(value) > limit:
        raise ValueError(f"{label} must be at most {limit} characters.")
    return value


def form_errors(exc: ValidationError) -> list[str]:
    """Turn a pydantic ValidationError into user-facing messages."""
    messages = []
    for error in exc.errors():
        field = error["loc"][0] if error["loc"] else None
        message = error["msg"].removeprefix("Value error, ")
        if field == "email" and message.startswith("value is not a valid email"):
            message = "Enter a valid email address."
        messages.append(message)
    return messages


def validate_form(schema: type[BaseModel], values: dict[str, Any]) -> BaseModel:
    """Validate submitted form values, raising ValidationFailed on error.

    The submitted values travel with the error so the form can be
    re-rendered with them.
    """
    try:
        return schema(**values)
    except ValidationError as e:
        raise ValidationFailed(form_errors(e), values=values) from e


# ============ Auth Forms ============

class RegisterForm(BaseModel):
    """Registration form."""

    name: str
    email: EmailStr
    password: str

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return _capped(_required(v, "Name"), "Name", settings.name_max_length)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(_required(v, "Email"))

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v):
        if not v:
            raise ValueError("Password is required.")
        if len(v) < settings.password_min_length:
            raise ValueError(
                f"Password must be at least {settings.password_min_length} characters."
            )
        if len(v.encode("utf-8")) > settings.password_max_length:
            raise ValueError(
                f"Password must be at most {settings.password_max_length} bytes."
            )
        return v


class LoginForm(BaseModel):
    """Login form. Only presence is checked; the hash decides the rest."""

    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(_required(v, "Email"))

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v):
        if not v:
            raise ValueError("Password is required.")
        return v


# ============ Note Forms ============

class NoteForm(BaseModel):
    """Note create/edit form."""

    title: str
    content: str

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, v):
        return _capped(_required(v, "Title"), "Title", settings.title_max_length)

    @field_validator("content", mode="before")
    @classmethod
    def check_content(cls, v):
        _required(v, "Content")
        return v


@dataclass
class NoteExport:
    """Plain-text download of a note."""

    filename: str
    body: str
    media_type: str = "text/plain; charset=utf-8"


# ============ Profile Forms ============

class ProfileForm(BaseModel):
    """Profile update form. Email and password are not editable."""

    name: str
    pronoun: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return _capped(_required(v, "Name"), "Name", settings.name_max_length)

    @field_validator("pronoun", mode="before")
    @classmethod
    def check_pronoun(cls, v):
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        return _capped(v, "Pronoun", settings.pronoun_max_length)
