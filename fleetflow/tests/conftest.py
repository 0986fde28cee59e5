"""
Pytest configuration and shared fixtures for the FleetFlow test suite.

This module provides:
- Database fixtures (in-memory SQLite for fast tests)
- FastAPI async client with the database dependency overridden
- Factories for vehicles, drivers and trips
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("JWT_SECRET", "testsecret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXP_DELTA_SECONDS", "3600")

from fleetflow.core.db import Base, get_db
from fleetflow.main import create_app
from fleetflow.middleware.rate_limit import limiter
from fleetflow.models import Driver, Trip, Vehicle


# Test Database Configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def async_engine():
    """Create async engine for testing with in-memory SQLite."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def async_db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for testing."""
    async_session = async_sessionmaker(async_engine, expire_on_commit=False)

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(async_db_session) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over the full app, sharing the test session."""

    async def override_get_db():
        yield async_db_session

    app = create_app(use_lifespan=False)
    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Test Data Factories
@pytest_asyncio.fixture
async def make_vehicle(async_db_session):
    counter = {"n": 0}

    async def _make(**overrides) -> Vehicle:
        counter["n"] += 1
        data = {
            "name": f"Truck {counter['n']}",
            "license_plate": f"MH12TS{counter['n']:04d}",
            "max_capacity": 1000,
            "odometer": 5000,
        }
        data.update(overrides)
        vehicle = Vehicle(**data)
        async_db_session.add(vehicle)
        await async_db_session.commit()
        await async_db_session.refresh(vehicle)
        return vehicle

    return _make


@pytest_asyncio.fixture
async def make_driver(async_db_session):
    async def _make(**overrides) -> Driver:
        data = {"name": "Test Driver", "license_no": "DL-TEST-001"}
        data.update(overrides)
        driver = Driver(**data)
        async_db_session.add(driver)
        await async_db_session.commit()
        await async_db_session.refresh(driver)
        return driver

    return _make


@pytest_asyncio.fixture
async def test_vehicle(make_vehicle) -> Vehicle:
    return await make_vehicle()


@pytest_asyncio.fixture
async def test_driver(make_driver) -> Driver:
    return await make_driver()


@pytest_asyncio.fixture
async def draft_trip(async_db_session, test_vehicle, test_driver) -> Trip:
    trip = Trip(
        vehicle_id=test_vehicle.id,
        driver_id=test_driver.id,
        origin="Pune",
        destination="Mumbai",
        cargo_weight=500,
        status="Draft",
    )
    async_db_session.add(trip)
    await async_db_session.commit()
    await async_db_session.refresh(trip)
    return trip
