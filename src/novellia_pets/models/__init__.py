"""
Database models for the novellia-pets package.

This module contains SQLAlchemy models for pets and their medical records.
"""

# Base model will be imported by all other models
from .base import Base, BaseModel
from .medical_record import MedicalRecord, RecordType, Severity
from .pet import Pet

__all__ = [
    "Base",
    "BaseModel",
    "Pet",
    "MedicalRecord",
    "RecordType",
    "Severity",
]
