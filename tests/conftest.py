"""
Pytest configuration and fixtures for novellia-pets tests.

This module provides common fixtures for all tests in the package: a SQLite
database in a per-test temporary file, a session manager bound to it, an HTTP
client for the FastAPI application, and factory classes for test data.
"""

from datetime import date
from pathlib import Path
from typing import Any, AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from novellia_pets.api.app import create_app
from novellia_pets.database.connection import create_engine
from novellia_pets.database.session import SessionManager
from novellia_pets.models import MedicalRecord, Pet
from novellia_pets.models.base import Base


@pytest_asyncio.fixture
async def test_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a test database engine with the schema in place.

    A file-backed SQLite database is used so that tables created on one
    connection are visible to every other connection of the pool.
    """
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'novellia_pets_test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_manager(
    test_engine: AsyncEngine,
) -> AsyncGenerator[SessionManager, None]:
    """Create a session manager for testing."""
    session_manager = SessionManager(test_engine, statement_timeout=5.0)
    yield session_manager


@pytest_asyncio.fixture
async def async_session(
    test_session_manager: SessionManager,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide an async database session for testing with automatic cleanup.

    The session's transaction is rolled back after the test.
    """
    async with test_session_manager.get_session() as session:
        transaction = await session.begin()

        try:
            yield session
        finally:
            if transaction.is_active:
                await transaction.rollback()


@pytest_asyncio.fixture
async def client(
    test_session_manager: SessionManager,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client talking to an application that uses the test database."""
    app = create_app(session_manager=test_session_manager)
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# Factory classes for creating test entities
class PetFactory:
    """Factory for creating test Pet instances."""

    @staticmethod
    def payload(**kwargs: Any) -> Dict[str, Any]:
        """Build a JSON body for creating a pet."""
        defaults = {
            "name": "Rex",
            "animal_type": "dog",
            "owner_name": "Alice",
            "date_of_birth": "2020-01-01",
        }
        defaults.update(kwargs)
        return defaults

    @staticmethod
    def build(**kwargs: Any) -> Pet:
        """Build a Pet instance without saving to database."""
        defaults = {
            "name": "Rex",
            "animal_type": "dog",
            "owner_name": "Alice",
            "date_of_birth": date(2020, 1, 1),
        }
        defaults.update(kwargs)
        return Pet(**defaults)

    @staticmethod
    async def create(session: AsyncSession, **kwargs: Any) -> Pet:
        """Create and save a Pet instance to database."""
        pet = PetFactory.build(**kwargs)
        session.add(pet)
        await session.flush()
        await session.refresh(pet)
        return pet


class MedicalRecordFactory:
    """Factory for creating test MedicalRecord instances."""

    @staticmethod
    def vaccine_payload(**kwargs: Any) -> Dict[str, Any]:
        """Build a JSON body for creating a vaccine record."""
        defaults = {"record_type": "vaccine", "name": "Rabies", "date": "2024-03-01"}
        defaults.update(kwargs)
        return defaults

    @staticmethod
    def allergy_payload(**kwargs: Any) -> Dict[str, Any]:
        """Build a JSON body for creating an allergy record."""
        defaults = {"record_type": "allergy", "name": "Pollen", "severity": "mild"}
        defaults.update(kwargs)
        return defaults

    @staticmethod
    def build(pet_id: int, **kwargs: Any) -> MedicalRecord:
        """Build a MedicalRecord instance without saving to database."""
        defaults = {
            "record_type": "vaccine",
            "name": "Rabies",
            "date": date(2024, 3, 1),
        }
        defaults.update(kwargs)
        return MedicalRecord(pet_id=pet_id, **defaults)

    @staticmethod
    async def create(session: AsyncSession, pet_id: int, **kwargs: Any) -> MedicalRecord:
        """Create and save a MedicalRecord instance to database."""
        record = MedicalRecordFactory.build(pet_id, **kwargs)
        session.add(record)
        await session.flush()
        await session.refresh(record)
        return record


@pytest.fixture
def pet_factory() -> type:
    """Provide the pet factory class."""
    return PetFactory


@pytest.fixture
def record_factory() -> type:
    """Provide the medical record factory class."""
    return MedicalRecordFactory
