"""
Pet Pydantic schemas for API validation and serialization.

This module contains the create, update and response schemas for pets.
Validators raise ``ValueError`` with the exact message returned to clients.
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.validation import parse_date_string, require_text

NAME_MAX_LENGTH = 255
ANIMAL_TYPE_MAX_LENGTH = 100
OWNER_NAME_MAX_LENGTH = 255


def _check_name(v: Any) -> str:
    return require_text(v, NAME_MAX_LENGTH, "Name is required", "Name is too long")


def _check_animal_type(v: Any) -> str:
    return require_text(
        v, ANIMAL_TYPE_MAX_LENGTH, "Animal type is required", "Animal type is too long"
    )


def _check_owner_name(v: Any) -> str:
    return require_text(
        v, OWNER_NAME_MAX_LENGTH, "Owner name is required", "Owner name is too long"
    )


class PetCreate(BaseModel):
    """Schema for creating a new pet."""

    name: Optional[str] = Field(None, validate_default=True, description="Pet's name")
    animal_type: Optional[str] = Field(
        None, validate_default=True, description="Kind of animal, e.g. dog or cat"
    )
    owner_name: Optional[str] = Field(
        None, validate_default=True, description="Owner's full name"
    )
    date_of_birth: Optional[date] = Field(
        None, validate_default=True, description="Birth date (YYYY-MM-DD)"
    )

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        """Validate pet name."""
        return _check_name(v)

    @field_validator("animal_type", mode="before")
    @classmethod
    def validate_animal_type(cls, v: Any) -> str:
        """Validate animal type."""
        return _check_animal_type(v)

    @field_validator("owner_name", mode="before")
    @classmethod
    def validate_owner_name(cls, v: Any) -> str:
        """Validate owner name."""
        return _check_owner_name(v)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def validate_date_of_birth(cls, v: Any) -> date:
        """Validate birth date format."""
        return parse_date_string(v)


class PetUpdate(BaseModel):
    """
    Schema for updating an existing pet.

    Every field is optional and only supplied fields are checked. A field
    that is supplied as ``null`` is rejected with its "required" message.
    """

    name: Optional[str] = None
    animal_type: Optional[str] = None
    owner_name: Optional[str] = None
    date_of_birth: Optional[date] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        """Validate pet name."""
        return _check_name(v)

    @field_validator("animal_type", mode="before")
    @classmethod
    def validate_animal_type(cls, v: Any) -> str:
        """Validate animal type."""
        return _check_animal_type(v)

    @field_validator("owner_name", mode="before")
    @classmethod
    def validate_owner_name(cls, v: Any) -> str:
        """Validate owner name."""
        return _check_owner_name(v)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def validate_date_of_birth(cls, v: Any) -> date:
        """Validate birth date format."""
        return parse_date_string(v)


class PetResponse(BaseModel):
    """Schema for pet responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Pet's unique identifier")
    name: str
    animal_type: str
    owner_name: str
    date_of_birth: date
    created_at: datetime
    updated_at: datetime


class PetFilters(BaseModel):
    """Optional filters for listing pets."""

    search: Optional[str] = Field(
        None, description="Case-insensitive substring of the pet's name"
    )
    animal_type: Optional[str] = Field(None, description="Exact animal type")

    @field_validator("search", "animal_type", mode="before")
    @classmethod
    def empty_as_absent(cls, v: Any) -> Optional[str]:
        """Treat empty query parameters as absent."""
        if v == "":
            return None
        return v
