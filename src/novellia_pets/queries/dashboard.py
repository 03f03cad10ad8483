"""
Read-only aggregation for the dashboard.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select

from ..models.medical_record import MedicalRecord, RecordType
from ..models.pet import Pet
from ..utils.datetime_utils import UPCOMING_WINDOW_DAYS, get_date_window
from .base import BaseQueries

logger = logging.getLogger(__name__)

DASHBOARD_LIST_LIMIT = 10


def _record_with_pet(record: MedicalRecord, pet_name: str, animal_type: str) -> Dict[str, Any]:
    row = {column.key: getattr(record, column.key) for column in MedicalRecord.__table__.columns}
    row["pet_name"] = pet_name
    row["animal_type"] = animal_type
    return row


class DashboardQueries(BaseQueries):
    """Counters and short record lists shown on the dashboard."""

    async def count_pets(self) -> int:
        return await self._scalar(select(func.count(Pet.id)), "count_pets")

    async def pets_by_type(self) -> Dict[str, int]:
        """Pet counts keyed by animal type, largest group first."""
        count = func.count(Pet.id).label("count")
        rows = await self._rows(
            select(Pet.animal_type, count)
            .group_by(Pet.animal_type)
            .order_by(count.desc(), Pet.animal_type),
            "pets_by_type",
        )
        return {animal_type: n for animal_type, n in rows}

    async def count_records(self) -> int:
        return await self._scalar(select(func.count(MedicalRecord.id)), "count_records")

    async def records_by_type(self) -> Dict[str, int]:
        count = func.count(MedicalRecord.id).label("count")
        rows = await self._rows(
            select(MedicalRecord.record_type, count)
            .group_by(MedicalRecord.record_type)
            .order_by(MedicalRecord.record_type),
            "records_by_type",
        )
        return {record_type: n for record_type, n in rows}

    async def upcoming_vaccines(
        self, reference_date: Optional[date] = None, limit: int = DASHBOARD_LIST_LIMIT
    ) -> List[Dict[str, Any]]:
        """
        Vaccines dated within the window around the reference date.

        The window spans ``UPCOMING_WINDOW_DAYS`` days on both sides, so
        recently given vaccines are included alongside those coming up.

        Args:
            reference_date: Center of the window (defaults to today)
            limit: Maximum number of records

        Returns:
            Records joined with their pet's name and type, earliest date first
        """
        start, end = get_date_window(UPCOMING_WINDOW_DAYS, reference_date)
        rows = await self._rows(
            select(MedicalRecord, Pet.name, Pet.animal_type)
            .join(Pet, MedicalRecord.pet_id == Pet.id)
            .where(
                MedicalRecord.record_type == RecordType.VACCINE.value,
                MedicalRecord.date.between(start, end),
            )
            .order_by(MedicalRecord.date.asc(), MedicalRecord.id.asc())
            .limit(limit),
            "upcoming_vaccines",
        )
        return [_record_with_pet(*row) for row in rows]

    async def recent_records(self, limit: int = DASHBOARD_LIST_LIMIT) -> List[Dict[str, Any]]:
        """Most recently created records joined with their pet's name and type."""
        rows = await self._rows(
            select(MedicalRecord, Pet.name, Pet.animal_type)
            .join(Pet, MedicalRecord.pet_id == Pet.id)
            .order_by(MedicalRecord.created_at.desc(), MedicalRecord.id.desc())
            .limit(limit),
            "recent_records",
        )
        return [_record_with_pet(*row) for row in rows]

    async def get_stats(self, reference_date: Optional[date] = None) -> Dict[str, Any]:
        """
        Collect every dashboard figure.

        Args:
            reference_date: Day the upcoming-vaccine window is centered on

        Returns:
            Dictionary keyed by snake_case field names of ``DashboardStats``
        """
        stats = {
            "total_pets": await self.count_pets(),
            "pets_by_type": await self.pets_by_type(),
            "total_records": await self.count_records(),
            "records_by_type": await self.records_by_type(),
            "upcoming_vaccines": await self.upcoming_vaccines(reference_date),
            "recent_records": await self.recent_records(),
        }
        logger.debug(
            f"Dashboard stats: {stats['total_pets']} pets, {stats['total_records']} records"
        )
        return stats
