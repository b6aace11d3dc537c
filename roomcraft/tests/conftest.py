"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator, Callable
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from roomcraft.app.db.base import Base, get_db
from roomcraft.app.main import app
from roomcraft.app.schemas.design import Design
from roomcraft.app.schemas.theme import Theme
from roomcraft.app.services.auth import AuthenticatedUser, AuthService
from roomcraft.app.storage.record_store import SqlRecordStore
from roomcraft.app.storage.storage_service import StorageService


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session.

    Each test gets a fresh database with all tables created.
    """
    engine = _memory_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def store(test_db: AsyncSession) -> SqlRecordStore:
    """Record store on the test database."""
    return SqlRecordStore(test_db)


@pytest.fixture
def storage(store: SqlRecordStore) -> StorageService:
    """Storage service on the test record store."""
    return StorageService(store)


@pytest.fixture
def auth_as() -> Callable[[str | None], AuthService]:
    """Build an AuthService logged in as the given user (None for anonymous)."""
    def _auth(user_id: str | None, username: str | None = None) -> AuthService:
        if user_id is None:
            return AuthService(None)
        return AuthService(AuthenticatedUser(id=user_id, username=username or user_id))

    return _auth


@pytest.fixture
def make_design() -> Callable[..., Design]:
    """Factory for stored-design fixtures."""
    counter = {"n": 0}

    def _make(
        user_id: str = "owner",
        theme_id: str = "theme_a",
        vote_count: int = 0,
        submitted: bool = False,
        created_at: int | None = None,
        design_id: str | None = None,
    ) -> Design:
        counter["n"] += 1
        n = counter["n"]
        timestamp = created_at if created_at is not None else 1_700_000_000_000 + n
        return Design(
            id=design_id or f"design_{n}",
            user_id=user_id,
            username=f"{user_id}_name",
            theme_id=theme_id,
            created_at=timestamp,
            updated_at=timestamp,
            submitted=submitted,
            vote_count=vote_count,
        )

    return _make


@pytest.fixture
def make_theme() -> Callable[..., Theme]:
    """Factory for theme fixtures."""
    def _make(
        theme_id: str,
        name: str = "School",
        start_time: int = 1_700_000_000_000,
        duration_ms: int = 24 * 60 * 60 * 1000,
        active: bool = False,
    ) -> Theme:
        return Theme(
            id=theme_id,
            name=name,
            description=f"{name} theme",
            start_time=start_time,
            end_time=start_time + duration_ms,
            active=active,
        )

    return _make


@pytest.fixture(scope="function")
async def test_client_with_db() -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client with in-memory database.

    This fixture creates a fresh test database for each test and
    overrides the app's database dependency.
    """
    test_engine = _memory_engine()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    await test_engine.dispose()


@pytest.fixture
def user_headers() -> Callable[..., dict[str, str]]:
    """Identity headers the host platform attaches to requests."""
    def _headers(user_id: str, username: str | None = None) -> dict[str, str]:
        return {"X-User-Id": user_id, "X-Username": username or user_id}

    return _headers
