"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support. The engine only builds the handle;
the parcel store receives an already-open session from its caller.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def get_db():
    """
    Yield an async database session and ensure it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every table registered on Base."""
    # Import models to ensure they are registered with Base
    from tracker.app.models.parcel import Parcel  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind: AsyncEngine = engine) -> None:
    """Drop every table registered on Base."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
