"""
Centralized Test Configuration.
"""

import random
import time

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from tracker.app.db.session import create_tables, drop_tables
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate, rfc3339_now
from tracker.app.services.parcel_store import ParcelStore

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Private in-memory database per test, tables created up front."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(test_engine)
    
    yield test_engine
    
    await drop_tables(test_engine)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine):
    TestingSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def store(db_session):
    return ParcelStore(db_session)


@pytest.fixture
def rng():
    """Random source local to one test, seeded from the clock."""
    return random.Random(time.time_ns())


@pytest.fixture
def make_parcel():
    """Factory for a registered test parcel."""
    def _make(**overrides):
        data = {
            "client": 1000,
            "status": ParcelStatus.REGISTERED,
            "address": "test",
            "created_at": rfc3339_now(),
        }
        data.update(overrides)
        return ParcelCreate(**data)
    return _make
