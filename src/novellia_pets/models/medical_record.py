"""
Medical record model for the novellia-pets package.

This module contains the MedicalRecord SQLAlchemy model along with the
record type and severity enumerations. Each record belongs to exactly one
pet; the rules tying ``date`` and ``severity`` to the record type are
enforced when payloads are validated, the table only checks the enum values.
"""

import enum
from datetime import date as calendar_date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .pet import Pet


class RecordType(str, enum.Enum):
    """Enumeration of medical record kinds."""

    VACCINE = "vaccine"
    ALLERGY = "allergy"


class Severity(str, enum.Enum):
    """Enumeration of allergy severities."""

    MILD = "mild"
    SEVERE = "severe"


class MedicalRecord(BaseModel):
    """
    Medical record model for a single vaccine or allergy entry.

    ``pet_id`` is fixed at creation. ``severity`` is accepted on vaccine
    records as well; only allergies require it.
    """

    __tablename__ = "medical_records"

    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
    )

    record_type: Mapped[str] = mapped_column(String(50), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    date: Mapped[Optional[calendar_date]] = mapped_column(Date, nullable=True)

    reactions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    severity: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "record_type IN ('vaccine', 'allergy')",
            name="ck_medical_records_record_type",
        ),
        CheckConstraint(
            "severity IS NULL OR severity IN ('mild', 'severe')",
            name="ck_medical_records_severity",
        ),
        Index("idx_medical_records_pet_id", "pet_id"),
        Index("idx_medical_records_type", "record_type"),
    )

    pet: Mapped["Pet"] = relationship("Pet", back_populates="medical_records")

    def __repr__(self) -> str:
        """String representation of the medical record."""
        return (
            f"<MedicalRecord(id={self.id}, pet_id={self.pet_id}, "
            f"record_type='{self.record_type}', name='{self.name}')>"
        )
