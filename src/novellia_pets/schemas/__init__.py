"""
Pydantic schemas for API validation and serialization.

This module contains the request and response schemas for pets, medical
records and the dashboard, plus the cross-field rules applied to new
medical records.
"""

from .dashboard import DashboardStats, RecordWithPet
from .medical_record import (
    ALLERGY_SEVERITY_MESSAGE,
    RECORD_CREATE_RULES,
    RECORD_TYPE_MESSAGE,
    SEVERITY_MESSAGE,
    VACCINE_DATE_MESSAGE,
    MedicalRecordCreate,
    MedicalRecordResponse,
    MedicalRecordUpdate,
    allergy_requires_severity,
    vaccine_requires_date,
)
from .pet import PetCreate, PetFilters, PetResponse, PetUpdate

__all__ = [
    # Pet schemas
    "PetCreate",
    "PetUpdate",
    "PetResponse",
    "PetFilters",
    # Medical record schemas
    "MedicalRecordCreate",
    "MedicalRecordUpdate",
    "MedicalRecordResponse",
    "RECORD_CREATE_RULES",
    "vaccine_requires_date",
    "allergy_requires_severity",
    "RECORD_TYPE_MESSAGE",
    "SEVERITY_MESSAGE",
    "VACCINE_DATE_MESSAGE",
    "ALLERGY_SEVERITY_MESSAGE",
    # Dashboard schemas
    "DashboardStats",
    "RecordWithPet",
]
