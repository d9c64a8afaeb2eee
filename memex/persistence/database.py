"""Async engine and session factory for the PostgreSQL document store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from memex.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine backing every repository and batch.

    Connections identify themselves as `memex-api` in `pg_stat_activity`.
    SQL echo is left to `setup_logging`, which raises `sqlalchemy.engine`
    to INFO in debug mode.

    Args:
        settings: Application settings

    Returns:
        Async engine using the asyncpg driver
    """
    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={
            "server_settings": {"application_name": f"memex-api-{settings.environment}"}
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions are request-scoped; batches run in nested transactions on them.

    Rows stay loaded after commit so a service can return the model it just
    wrote without another round trip.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
