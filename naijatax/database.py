"""
database.py - PostgreSQL access for saved calculations and assistant chat.

Owns the single async engine. Routes receive a session through get_db();
store.py functions take that session and only flush(), so one request is one
transaction: committed when the handler returns, rolled back if it raises.

Pool sizing and SQL echo come from settings (DB_POOL_SIZE, DB_MAX_OVERFLOW,
DB_ECHO). dispose_engine() is awaited on application shutdown.
"""
import logging
from collections.abc import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from naijatax.config import settings

logger = logging.getLogger(__name__)

# Matches the names written by alembic/versions/001_initial_schema.py
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for history_records and chat_history."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


async_engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: commit on success, roll back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.warning("Rolling back request transaction")
            await session.rollback()
            raise


async def dispose_engine() -> None:
    await async_engine.dispose()
    logger.info("Database connection pool disposed")
