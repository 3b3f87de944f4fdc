"""
Pytest fixtures for test database, client, and authentication.

Every test gets a fresh in-memory SQLite database and one shared session,
so what a request writes is visible to the next request and to the test.
"""

import os

# Settings are read once at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_ENABLED", "False")

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from softouch.main import app
from softouch.api.routes import events as events_routes
from softouch.db.base import Base
from softouch.db.session import get_db
from softouch.core.security import create_access_token, hash_password
from softouch.models.user import User
from softouch.models.event import Event

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def make_user(db: AsyncSession, name: str, email: str, **profile) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(TEST_PASSWORD),
        **profile,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def headers_for(user_id: int) -> dict:
    """Authorization headers with a Bearer token for the given user."""
    return {"Authorization": f"Bearer {create_access_token(data={'sub': str(user_id)})}"}


async def make_event(db: AsyncSession, creator: User, **overrides) -> Event:
    values = {
        "title": "Python Meetup",
        "description": "Monthly gathering of local Python developers",
        "organizer": "PyLocal",
        "organizer_email": "hosts@pylocal.org",
        "date": datetime.now(timezone.utc) + timedelta(days=30),
        "location": "Lagos",
        "skills_required": ["Python", "SQL"],
        "categories": ["Tech"],
    }
    values.update(overrides)
    event = Event(created_by_id=creator.id, **values)
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


def track_commits_and_invalidation(db: AsyncSession, monkeypatch) -> list:
    """Record, in order, every session commit and listing cache invalidation."""
    calls = []
    commit = db.commit

    async def tracking_commit():
        calls.append("commit")
        await commit()

    async def tracking_invalidate():
        calls.append("invalidate")

    monkeypatch.setattr(db, "commit", tracking_commit)
    monkeypatch.setattr(events_routes, "invalidate_event_cache", tracking_invalidate)
    return calls


@pytest_asyncio.fixture
async def organizer(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Olivia Organizer", "olivia@example.com")


@pytest_asyncio.fixture
async def attendee(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Uche Attendee", "uche@example.com")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Bola Bystander", "bola@example.com")


@pytest_asyncio.fixture
async def organizer_headers(organizer: User) -> dict:
    return headers_for(organizer.id)


@pytest_asyncio.fixture
async def attendee_headers(attendee: User) -> dict:
    return headers_for(attendee.id)


@pytest_asyncio.fixture
async def other_headers(other_user: User) -> dict:
    return headers_for(other_user.id)


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, organizer: User) -> Event:
    """An upcoming event with no registrants, owned by the organizer."""
    return await make_event(db_session, organizer)
