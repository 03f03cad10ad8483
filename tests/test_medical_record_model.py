"""
Tests for the MedicalRecord model.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from novellia_pets.models.medical_record import RecordType, Severity


class TestMedicalRecordModel:
    """Test cases for the MedicalRecord model."""

    def test_record_creation(self, record_factory):
        record = record_factory.build(
            1, record_type=RecordType.ALLERGY.value, date=None, severity=Severity.SEVERE.value
        )

        assert record.pet_id == 1
        assert record.record_type == "allergy"
        assert record.date is None
        assert record.severity == "severe"

    def test_repr(self, record_factory):
        record = record_factory.build(3, id=9)

        assert repr(record) == (
            "<MedicalRecord(id=9, pet_id=3, record_type='vaccine', name='Rabies')>"
        )


class TestMedicalRecordConstraints:
    """Database-backed test cases for MedicalRecord constraints."""

    @pytest.mark.asyncio
    async def test_record_links_to_pet(self, async_session, pet_factory, record_factory):
        pet = await pet_factory.create(async_session)
        record = await record_factory.create(async_session, pet.id)

        assert record.id is not None
        assert record.pet_id == pet.id

    @pytest.mark.asyncio
    async def test_unknown_pet_is_rejected(self, async_session, record_factory):
        with pytest.raises(IntegrityError):
            await record_factory.create(async_session, 9999)

    @pytest.mark.asyncio
    async def test_record_type_check(self, async_session, pet_factory, record_factory):
        pet = await pet_factory.create(async_session)

        with pytest.raises(IntegrityError):
            await record_factory.create(async_session, pet.id, record_type="surgery")

    @pytest.mark.asyncio
    async def test_severity_check(self, async_session, pet_factory, record_factory):
        pet = await pet_factory.create(async_session)

        with pytest.raises(IntegrityError):
            await record_factory.create(async_session, pet.id, severity="moderate")
