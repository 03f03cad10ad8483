"""
Pet model for the novellia-pets package.

This module contains the Pet SQLAlchemy model. A pet is identified to its
owner by the pair (name, owner_name); uniqueness of that pair is enforced
when pets are created, not by a database constraint.
"""

from datetime import date
from typing import TYPE_CHECKING, List

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .medical_record import MedicalRecord


class Pet(BaseModel):
    """
    Pet model representing one animal tracked by the service.

    All four editable fields are required. Deleting a pet removes its
    medical records through the ``ON DELETE CASCADE`` foreign key.
    """

    __tablename__ = "pets"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    animal_type: Mapped[str] = mapped_column(String(100), nullable=False)

    owner_name: Mapped[str] = mapped_column(String(255), nullable=False)

    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_pets_animal_type", "animal_type"),
        Index("idx_pets_name", "name"),
    )

    # The database performs the cascade; the ORM must not load children first
    medical_records: Mapped[List["MedicalRecord"]] = relationship(
        "MedicalRecord",
        back_populates="pet",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation of the pet."""
        return f"<Pet(id={self.id}, name='{self.name}', owner_name='{self.owner_name}')>"
