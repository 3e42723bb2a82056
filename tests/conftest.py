"""
Shared test fixtures and configuration for pytest.
"""

import os
from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SESSION_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notesapp.main import app
from notesapp.core.auth import hash_password
from notesapp.db.database import Base, enable_sqlite_foreign_keys, get_db_session
from notesapp.db.models import NoteModel, NoteStatus, UserModel


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database override."""

    async def override_get_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============ User Fixtures ============

@pytest.fixture
def test_user_data():
    """Test user data."""
    return {
        "name": "Test User",
        "email": "test@example.com",
        "password": "testpassword123",
    }


async def create_user(session: AsyncSession, email: str, password: str, name: str) -> UserModel:
    user = UserModel(
        email=email,
        password_hash=hash_password(password),
        name=name,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    session.add(user)
    await session.flush()
    return user


@pytest.fixture
async def test_user(db_session, test_user_data) -> UserModel:
    """Create a test user in the database."""
    return await create_user(
        db_session,
        test_user_data["email"],
        test_user_data["password"],
        test_user_data["name"],
    )


@pytest.fixture
async def other_user(db_session) -> UserModel:
    """A second user whose notes the test user must never reach."""
    return await create_user(db_session, "other@example.com", "otherpassword", "Other User")


@pytest.fixture
async def auth_client(test_client, test_user, test_user_data) -> AsyncClient:
    """Test client signed in as the test user through the login form."""
    response = await test_client.post(
        "/login",
        data={"email": test_user.email, "password": test_user_data["password"]},
    )
    assert response.status_code == 303
    return test_client


# ============ Note Fixtures ============

@pytest.fixture
def make_note(db_session):
    """Factory inserting a note directly into the database."""

    async def _make_note(
        user: UserModel,
        title: str = "Test note",
        content: str = "Some *content*",
        status: NoteStatus = NoteStatus.ACTIVE,
    ) -> NoteModel:
        now = datetime.now(timezone.utc)
        note = NoteModel(
            user_id=user.id,
            title=title,
            content=content,
            status=status.value,
            created_at=now,
            updated_at=now,
        )
        db_session.add(note)
        await db_session.flush()
        return note

    return _make_note


@pytest.fixture
async def test_note(make_note, test_user) -> NoteModel:
    """An active note owned by the test user."""
    return await make_note(test_user, title="Shopping list", content="- milk\n- **eggs**")


@pytest.fixture
async def trashed_note(make_note, test_user) -> NoteModel:
    """A trashed note owned by the test user."""
    return await make_note(
        test_user, title="Old idea", content="Not needed", status=NoteStatus.DELETED
    )


@pytest.fixture
async def foreign_note(make_note, other_user) -> NoteModel:
    """An active note owned by the other user."""
    return await make_note(other_user, title="Private", content="secret contents")
