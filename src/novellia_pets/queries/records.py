"""
Domain operations for medical records.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.sql import func

from ..exceptions import NotFoundException
from ..models.medical_record import MedicalRecord
from ..models.pet import Pet
from ..utils.validation import blank_to_none
from .base import BaseQueries

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("record_type", "name", "date", "reactions", "severity")
OPTIONAL_RECORD_FIELDS = ("date", "reactions", "severity")


def _normalize(fields: Mapping[str, Any]) -> dict:
    normalized = {k: v for k, v in fields.items() if k in RECORD_FIELDS}
    for name in OPTIONAL_RECORD_FIELDS:
        if name in normalized:
            normalized[name] = blank_to_none(normalized[name])
    return normalized


class RecordQueries(BaseQueries):
    """Create, read, update and delete medical records within one transaction."""

    async def pet_exists(self, pet_id: int) -> bool:
        """Check whether the owning pet exists."""
        found = await self._scalar_one_or_none(
            select(Pet.id).where(Pet.id == pet_id), "check_pet_exists"
        )
        return found is not None

    async def list_by_pet(self, pet_id: int) -> List[MedicalRecord]:
        """
        List a pet's records, most recent date first.

        Records without a date come last; ties are broken by creation time.

        Raises:
            NotFoundException: If the pet does not exist
        """
        if not await self.pet_exists(pet_id):
            raise NotFoundException("Pet", pet_id)

        stmt = (
            select(MedicalRecord)
            .where(MedicalRecord.pet_id == pet_id)
            .order_by(
                MedicalRecord.date.desc().nulls_last(),
                MedicalRecord.created_at.desc(),
                MedicalRecord.id.desc(),
            )
        )
        return await self._scalars(stmt, "list_records_by_pet")

    async def get_by_id(self, record_id: int) -> Optional[MedicalRecord]:
        """Get a record by id, or None when it does not exist."""
        return await self._scalar_one_or_none(
            select(MedicalRecord).where(MedicalRecord.id == record_id), "get_record"
        )

    async def create(self, pet_id: int, fields: Mapping[str, Any]) -> MedicalRecord:
        """
        Create a record for an existing pet.

        Args:
            pet_id: Owning pet
            fields: Validated record values; empty optional values are stored as null

        Returns:
            The stored record with id and timestamps

        Raises:
            NotFoundException: If the pet does not exist
        """
        if not await self.pet_exists(pet_id):
            raise NotFoundException("Pet", pet_id)

        values = {name: None for name in OPTIONAL_RECORD_FIELDS}
        values.update(_normalize(fields))

        record = MedicalRecord(pet_id=pet_id, **values)
        self.session.add(record)
        await self._flush_and_refresh(record, "create_record")

        logger.info(f"Created medical record {record.id} for pet {pet_id}")
        return record

    async def update(self, record_id: int, fields: Mapping[str, Any]) -> MedicalRecord:
        """
        Update the supplied fields of a record and keep the rest.

        An empty string for ``date``, ``reactions`` or ``severity`` clears the
        stored value. ``pet_id`` cannot be changed.

        Raises:
            NotFoundException: If the record does not exist
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise NotFoundException("Medical record", record_id)

        record.update_fields(**_normalize(fields))
        record.updated_at = func.now()
        await self._flush_and_refresh(record, "update_record")

        logger.info(f"Updated medical record {record.id}")
        return record

    async def delete(self, record_id: int) -> None:
        """
        Delete a record.

        Raises:
            NotFoundException: If the record does not exist
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise NotFoundException("Medical record", record_id)

        await self._delete(record, "delete_record")
        logger.info(f"Deleted medical record {record_id}")
