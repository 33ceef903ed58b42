"""Shared test configuration and fixtures.

Uses a transactional rollback strategy per test for full isolation:
- Each test gets its own transaction that rolls back after the test.
- ``TEST_DATABASE_URL`` selects the database; it defaults to an in-memory
  SQLite database (aiosqlite), so no server is needed to run the suite.
"""

import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from shareit.database import Base, get_db
from shareit.main import app
from shareit.models.booking import Booking, BookingStatus
from shareit.models.item import Item
from shareit.models.user import User

# ---------------------------------------------------------------------------
# Test database engine
# ---------------------------------------------------------------------------

_test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _make_engine() -> AsyncEngine:
    if not _test_db_url.startswith("sqlite"):
        return create_async_engine(_test_db_url, echo=False, pool_pre_ping=True)

    # One shared connection so every session sees the same in-memory database.
    engine = create_async_engine(
        _test_db_url,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine with all tables; drop them when the test is done."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# Per-test: transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factories: users, items, bookings written straight to the DB
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    async def _make_user(name: str = "Test User") -> User:
        unique = uuid.uuid4().hex[:8]
        user = User(name=name, email=f"user-{unique}@test.com")
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest_asyncio.fixture
async def make_item(db_session: AsyncSession) -> Callable[..., Awaitable[Item]]:
    async def _make_item(
        owner: User,
        name: str = "Drill",
        available: bool = True,
        description: str | None = None,
    ) -> Item:
        item = Item(
            name=name,
            description=description or f"{name} for rent",
            available=available,
            owner_id=owner.id,
        )
        db_session.add(item)
        await db_session.flush()
        await db_session.refresh(item)
        return item

    return _make_item


@pytest_asyncio.fixture
async def make_booking(db_session: AsyncSession) -> Callable[..., Awaitable[Booking]]:
    async def _make_booking(
        item: Item,
        booker: User,
        start: datetime,
        end: datetime,
        status: BookingStatus = BookingStatus.WAITING,
    ) -> Booking:
        booking = Booking(item=item, booker=booker, start=start, end=end, status=status)
        db_session.add(booking)
        await db_session.flush()
        return booking

    return _make_booking


@pytest_asyncio.fixture
async def owner(make_user) -> User:
    return await make_user("Owner")


@pytest_asyncio.fixture
async def booker(make_user) -> User:
    return await make_user("Booker")


@pytest_asyncio.fixture
async def stranger(make_user) -> User:
    return await make_user("Stranger")


@pytest_asyncio.fixture
async def item(make_item, owner: User) -> Item:
    return await make_item(owner, "Drill")
