"""
Novellia Pets

A web service for tracking pets and their medical records (vaccines and
allergies), backed by a relational database.

This package includes:

- SQLAlchemy models for pets and medical records
- Pydantic schemas for request validation and response serialization
- Domain operations with existence and uniqueness checks
- Dashboard aggregation over pets and records
- A FastAPI application exposing everything under ``/api``
- Migration support through Alembic integration

Quick Start:
    >>> from novellia_pets.database import SessionManager, create_engine
    >>> from novellia_pets.queries import PetQueries

    >>> engine = create_engine("postgresql+asyncpg://postgres@localhost/novellia_pets")
    >>> store = SessionManager(engine)
    >>> async with store.get_transaction() as session:
    ...     pets = await PetQueries(session).list(search="rex")

Requirements:
    - Python 3.11+
    - PostgreSQL 13+
    - SQLAlchemy 2.0+
    - Pydantic 2.5+
"""

__version__ = "0.1.0"
__license__ = "MIT"

from . import database, exceptions, models, schemas, utils

# Convenience imports for common usage patterns
from .database import SessionManager, create_engine
from .exceptions import (
    DatabaseException,
    NotFoundException,
    NovelliaException,
    ValidationException,
)
from .models import MedicalRecord, Pet

__all__ = [
    # Version and metadata
    "__version__",
    "__license__",
    # Core modules
    "database",
    "exceptions",
    "models",
    "schemas",
    "utils",
    # Convenience imports
    "SessionManager",
    "create_engine",
    "NovelliaException",
    "ValidationException",
    "NotFoundException",
    "DatabaseException",
    "Pet",
    "MedicalRecord",
]
