from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import MetaData, event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from devcamper.config import settings

# Predictable constraint names so Alembic autogenerate produces stable migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for every resource model.

    Base.metadata is what Alembic and the test fixtures use to build the schema.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _engine_options(database_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.db_echo}
    # SQLite (local runs, tests) has no queue pool to tune
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=settings.db_pool_pre_ping,
        )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on SQLite foreign key enforcement so ondelete rules apply.

    No-op for other backends, which always enforce them.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _foreign_keys_on(dbapi_connection: Any, _connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))
enable_sqlite_foreign_keys(engine)

# expire_on_commit=False keeps loaded rows readable after commit; an expired
# attribute would need a lazy load, which async sessions cannot do implicitly.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency providing one session per request.

    Commits on success, rolls back on exception. Repositories flush but never
    commit, so this is the only transaction boundary.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def shutdown() -> None:
    """Dispose pooled connections; called from the app lifespan on shutdown."""
    await engine.dispose()
