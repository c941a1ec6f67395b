from datetime import datetime
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from care_api.config import Settings
from care_api.logging_config import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the async engine and session factory for one application instance."""

    def __init__(self, settings: Settings):
        url = settings.async_database_url
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_kwargs["pool_size"] = settings.db_pool_size
            engine_kwargs["pool_timeout"] = settings.db_pool_timeout
            if settings.database_ssl:
                engine_kwargs["connect_args"] = {"ssl": "require"}
        self.engine = create_async_engine(url, **engine_kwargs)
        self.sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    async def startup(self) -> None:
        """Check connectivity and create any missing tables."""
        # Import models to ensure they are registered with Base.metadata
        import care_api.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_ready", backend=self.engine.url.get_backend_name())

    async def shutdown(self) -> None:
        await self.engine.dispose()

    async def ping(self) -> datetime:
        """Return the database server's current time."""
        async with self.engine.connect() as conn:
            now = await conn.scalar(text("SELECT CURRENT_TIMESTAMP"))
        if isinstance(now, str):
            return datetime.fromisoformat(now)
        return now


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Request-scoped session: commits when the handler returns, rolls back on error."""
    database: Database = request.app.state.container.database
    async with database.sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
