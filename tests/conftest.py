import os

# Settings are read at import time, so the environment goes first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTH_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.engine import make_url  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool, StaticPool  # noqa: E402

from devcamper.db.session import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from devcamper.dependencies import get_geocoder  # noqa: E402
from devcamper.geocoder import GeoLocation  # noqa: E402
from devcamper.main import app  # noqa: E402

# Fixtures in tests/seeds.py are only visible to pytest when registered here
pytest_plugins = ["tests.seeds"]

# In-memory SQLite by default; point TEST_DATABASE_URL at Postgres to run against it
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# One shared connection keeps an in-memory SQLite database alive for a whole test
_POOL = StaticPool if make_url(TEST_DATABASE_URL).get_backend_name() == "sqlite" else NullPool

BOSTON_02118 = GeoLocation(
    latitude=42.3,
    longitude=-71.0,
    formatted_address="Boston, MA 02118, US",
    city="Boston",
    state="MA",
    zipcode="02118",
    country="US",
)


class FakeGeocoder:
    """Answers from a fixed table and records every query."""

    def __init__(self, answers: dict[str, list[GeoLocation]] | None = None) -> None:
        self.answers = answers or {}
        self.queries: list[str] = []

    async def geocode(self, query: str) -> list[GeoLocation]:
        self.queries.append(query)
        return self.answers.get(query, [])


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after the test.

    The engine lives and dies with the test so it never outlives its event loop.
    """
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=_POOL)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        {
            "02118": [BOSTON_02118],
            "233 Bay State Rd Boston MA 02215": [
                GeoLocation(
                    latitude=42.3505,
                    longitude=-71.1054,
                    formatted_address="233 Bay State Rd, Boston, MA 02215, US",
                    street="233 Bay State Rd",
                    city="Boston",
                    state="MA",
                    zipcode="02215",
                    country="US",
                )
            ],
        }
    )


@pytest_asyncio.fixture
async def client(db: AsyncSession, geocoder: FakeGeocoder) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the test session and the fake geocoder."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
