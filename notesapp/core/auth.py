"""
Password hashing and session token utilities.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from notesapp.config import Settings, settings


# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

SESSION_TOKEN_TYPE = "session"


class SessionData(BaseModel):
    """Data extracted from a session token."""

    user_id: str
    exp: datetime
    token_type: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return email.strip().lower()


def create_session_token(user_id: str, config: Optional[Settings] = None) -> str:
    """
    Create a signed session token.

    The token carries only the user's ID; the user row is looked up again
    on every request.

    Args:
        user_id: User's unique ID
        config: Settings to sign with, defaults to the process settings

    Returns:
        Encoded JWT token
    """
    config = config or settings
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "exp": now + timedelta(hours=config.session_max_age_hours),
        "type": SESSION_TOKEN_TYPE,
        "iat": now,
    }
    return jwt.encode(
        payload, config.session_secret_key, algorithm=config.session_algorithm
    )


def decode_session_token(
    token: str, config: Optional[Settings] = None
) -> Optional[SessionData]:
    """
    Decode and validate a session token.

    Expired tokens, bad signatures and tokens of another type all
    yield None.

    Args:
        token: Encoded JWT token
        config: Settings to verify with, defaults to the process settings

    Returns:
        SessionData if valid, None otherwise
    """
    config = config or settings
    try:
        payload = jwt.decode(
            token,
            config.session_secret_key,
            algorithms=[config.session_algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != SESSION_TOKEN_TYPE or not payload.get("sub"):
        return None

    return SessionData(
        user_id=payload["sub"],
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        token_type=payload["type"],
    )
