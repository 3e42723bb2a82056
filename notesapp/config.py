"""
Configuration management for the Notes application.
Uses Pydantic Settings for environment variable management.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SESSION_SECRET = "change-me-in-production-use-secure-random-key"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Notes"
    app_version: str = "0.1.0"
    debug: bool = False
    """Show tracebacks on the error page and echo SQL."""
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./notes.db"

    # Session cookie
    session_secret_key: str = DEFAULT_SESSION_SECRET
    session_algorithm: str = "HS256"
    session_cookie_name: str = "notes_session"
    session_max_age_hours: int = 24
    session_cookie_secure: bool = False
    """Only send the cookie over HTTPS."""

    # Passwords
    password_min_length: int = 6
    password_max_length: int = 72
    """bcrypt ignores input past 72 bytes."""
    bcrypt_rounds: int = 12

    # Field limits
    title_max_length: int = 255
    name_max_length: int = 100
    pronoun_max_length: int = 50

    @model_validator(mode="after")
    def validate_session_secret(self) -> "Settings":
        """Validate the session secret is not the default value in production."""
        if (
            self.environment == "production"
            and self.session_secret_key == DEFAULT_SESSION_SECRET
        ):
            raise ValueError(
                "SESSION_SECRET_KEY must be set to a secure random value in production. "
                "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
            )
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
