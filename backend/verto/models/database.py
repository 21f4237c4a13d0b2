"""Database configuration and session management.

The local SQLite file holds the portfolio ledger and user settings only.
Market data is never persisted.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./verto.db"

engine = create_async_engine(DEFAULT_DATABASE_URL, echo=False)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


def configure_database(url: str) -> None:
    """Rebind the engine and session factory to another database URL."""
    global engine, async_session_maker

    if str(engine.url) == url:
        return
    engine = create_async_engine(url, echo=False)
    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    logger.info(f"Database bound to {url}")


async def get_session() -> AsyncSession:
    """Dependency for getting database sessions."""
    async with async_session_maker() as session:
        yield session


async def init_db():
    """Initialize the database, creating all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
