"""
Medical record Pydantic schemas for API validation and serialization.

This module contains the create, update and response schemas for medical
records and the cross-field rules that depend on the record type. Empty
strings for the optional fields are treated as "no value"; an explicit null
is rejected like any other malformed value.
"""

from datetime import date as calendar_date
from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.medical_record import RecordType, Severity
from ..utils.validation import (
    CrossFieldRule,
    FieldError,
    parse_date_string,
    require_text,
)

RECORD_NAME_MAX_LENGTH = 255

RECORD_TYPE_MESSAGE = 'Record type must be "vaccine" or "allergy"'
SEVERITY_MESSAGE = 'Severity must be "mild" or "severe"'
VACCINE_DATE_MESSAGE = "Vaccine records require a date"
ALLERGY_SEVERITY_MESSAGE = "Allergy records require severity (mild or severe)"

_RECORD_TYPES = {member.value for member in RecordType}
_SEVERITIES = {member.value for member in Severity}


def _check_record_type(v: Any) -> str:
    if not isinstance(v, str) or v not in _RECORD_TYPES:
        raise ValueError(RECORD_TYPE_MESSAGE)
    return v


def _check_record_name(v: Any) -> str:
    return require_text(
        v, RECORD_NAME_MAX_LENGTH, "Name is required", "Name is too long"
    )


def _check_date(v: Any) -> Optional[calendar_date]:
    if v == "":
        return None
    return parse_date_string(v)


def _check_reactions(v: Any) -> Optional[str]:
    if v == "":
        return None
    if not isinstance(v, str):
        raise ValueError("Reactions must be text")
    return v


def _check_severity(v: Any) -> Optional[str]:
    if v == "":
        return None
    if not isinstance(v, str) or v not in _SEVERITIES:
        raise ValueError(SEVERITY_MESSAGE)
    return v


class MedicalRecordCreate(BaseModel):
    """Schema for creating a medical record for an existing pet."""

    record_type: Optional[str] = Field(
        None, validate_default=True, description="Either 'vaccine' or 'allergy'"
    )
    name: Optional[str] = Field(
        None, validate_default=True, description="Vaccine or allergen name"
    )
    date: Optional[calendar_date] = Field(
        None, description="Date administered or observed (YYYY-MM-DD)"
    )
    reactions: Optional[str] = Field(None, description="Observed reactions")
    severity: Optional[str] = Field(None, description="Either 'mild' or 'severe'")

    @field_validator("record_type", mode="before")
    @classmethod
    def validate_record_type(cls, v: Any) -> str:
        """Validate record type."""
        return _check_record_type(v)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        """Validate record name."""
        return _check_record_name(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> Optional[calendar_date]:
        """Validate record date format."""
        return _check_date(v)

    @field_validator("reactions", mode="before")
    @classmethod
    def validate_reactions(cls, v: Any) -> Optional[str]:
        """Validate reactions text."""
        return _check_reactions(v)

    @field_validator("severity", mode="before")
    @classmethod
    def validate_severity(cls, v: Any) -> Optional[str]:
        """Validate severity level."""
        return _check_severity(v)


class MedicalRecordUpdate(BaseModel):
    """
    Schema for updating a medical record.

    Every field is optional and no cross-field rules apply. Supplying an
    empty string for ``date``, ``reactions`` or ``severity`` clears it.
    """

    record_type: Optional[str] = None
    name: Optional[str] = None
    date: Optional[calendar_date] = None
    reactions: Optional[str] = None
    severity: Optional[str] = None

    @field_validator("record_type", mode="before")
    @classmethod
    def validate_record_type(cls, v: Any) -> str:
        """Validate record type."""
        return _check_record_type(v)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        """Validate record name."""
        return _check_record_name(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> Optional[calendar_date]:
        """Validate record date format."""
        return _check_date(v)

    @field_validator("reactions", mode="before")
    @classmethod
    def validate_reactions(cls, v: Any) -> Optional[str]:
        """Validate reactions text."""
        return _check_reactions(v)

    @field_validator("severity", mode="before")
    @classmethod
    def validate_severity(cls, v: Any) -> Optional[str]:
        """Validate severity level."""
        return _check_severity(v)


class MedicalRecordResponse(BaseModel):
    """Schema for medical record responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Record's unique identifier")
    pet_id: int
    record_type: str
    name: str
    date: Optional[calendar_date] = None
    reactions: Optional[str] = None
    severity: Optional[str] = None
    created_at: datetime
    updated_at: datetime


def _is_blank(data: Mapping[str, Any], key: str) -> bool:
    # an explicit null is reported by the field validator instead
    return data.get(key, "") == ""


def vaccine_requires_date(data: Mapping[str, Any]) -> Optional[FieldError]:
    """Vaccine records must carry a date."""
    if data.get("record_type") == RecordType.VACCINE.value and _is_blank(data, "date"):
        return FieldError(["date"], VACCINE_DATE_MESSAGE, "vaccine_date_required")
    return None


def allergy_requires_severity(data: Mapping[str, Any]) -> Optional[FieldError]:
    """Allergy records must carry a severity."""
    if data.get("record_type") == RecordType.ALLERGY.value and _is_blank(
        data, "severity"
    ):
        return FieldError(
            ["severity"], ALLERGY_SEVERITY_MESSAGE, "allergy_severity_required"
        )
    return None


RECORD_CREATE_RULES: List[CrossFieldRule] = [
    vaccine_requires_date,
    allergy_requires_severity,
]
