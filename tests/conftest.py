"""Pytest configuration and shared fixtures."""

import os

# Point the module level engine at SQLite before the app is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient

import box_office.infrastructure.models  # noqa: F401,E402
from box_office.infrastructure.database import Base, build_engine, build_session_maker, get_db
from box_office.main import app
from box_office.services.inventory import create_event

CONCERT_LAYOUT = [
    {
        "name": "A",
        "rows": [
            {"name": "1", "total_seats": 10},
            {"name": "2", "total_seats": 10},
        ],
    },
    {
        "name": "B",
        "rows": [
            {"name": "1", "total_seats": 5},
        ],
    },
]


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'box_office.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def concert(session_maker):
    """A committed "Concert" event: A/1 and A/2 with 10 seats, B/1 with 5."""
    async with session_maker() as session:
        event = await create_event(session, "Concert", CONCERT_LAYOUT)
        await session.commit()
    return event


@pytest.fixture
async def api_client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()
