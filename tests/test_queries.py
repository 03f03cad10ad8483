"""
Tests for the pet and medical record query classes.
"""

import asyncio
from datetime import date
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from novellia_pets.exceptions import (
    ConflictException,
    DatabaseException,
    DatabaseTimeoutException,
    NotFoundException,
)
from novellia_pets.queries import DashboardQueries, PetQueries, RecordQueries
from novellia_pets.queries.base import BaseQueries
from novellia_pets.queries.pets import merge_pet_fields

PET_FIELDS = {
    "name": "Rex",
    "animal_type": "dog",
    "owner_name": "Alice",
    "date_of_birth": date(2020, 1, 1),
}


class TestBaseQueries:
    """Test cases for the store-call wrapper."""

    @pytest.mark.asyncio
    async def test_run_returns_result(self):
        queries = BaseQueries(Mock(), timeout=1.0)

        async def answer():
            return 42

        assert await queries._run(answer(), "answer") == 42

    @pytest.mark.asyncio
    async def test_run_times_out(self):
        queries = BaseQueries(Mock(), timeout=0.01)

        with pytest.raises(DatabaseTimeoutException) as exc_info:
            await queries._run(asyncio.sleep(1), "slow_query")

        assert exc_info.value.details["operation"] == "slow_query"
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_run_wraps_driver_errors(self):
        queries = BaseQueries(Mock(), timeout=1.0)

        async def broken():
            raise OperationalError("SELECT 1", {}, Exception("connection reset"))

        with pytest.raises(DatabaseException) as exc_info:
            await queries._run(broken(), "broken_query")

        assert exc_info.value.error_code == "DATABASE_QUERY_ERROR"
        assert isinstance(exc_info.value.original_error, OperationalError)

    @pytest.mark.asyncio
    async def test_run_without_timeout(self):
        queries = BaseQueries(Mock(), timeout=None)

        async def answer():
            return "ok"

        assert await queries._run(answer(), "answer") == "ok"


class TestPetQueries:
    """Test cases for PetQueries."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, async_session):
        queries = PetQueries(async_session)

        pet = await queries.create(PET_FIELDS)
        fetched = await queries.get_by_id(pet.id)

        assert fetched is pet
        assert pet.created_at is not None

    @pytest.mark.asyncio
    async def test_create_duplicate_name_and_owner(self, async_session, pet_factory):
        await pet_factory.create(async_session)
        queries = PetQueries(async_session)

        with pytest.raises(ConflictException):
            await queries.create(PET_FIELDS)

    @pytest.mark.asyncio
    async def test_same_name_different_owner_allowed(self, async_session, pet_factory):
        await pet_factory.create(async_session)
        queries = PetQueries(async_session)

        pet = await queries.create({**PET_FIELDS, "owner_name": "Bob"})

        assert pet.owner_name == "Bob"

    @pytest.mark.asyncio
    async def test_duplicate_check_is_case_sensitive(self, async_session, pet_factory):
        await pet_factory.create(async_session)

        assert not await PetQueries(async_session).exists_by_name_and_owner("rex", "Alice")

    @pytest.mark.asyncio
    async def test_list_newest_first(self, async_session, pet_factory):
        first = await pet_factory.create(async_session, name="Rex")
        second = await pet_factory.create(async_session, name="Max")

        pets = await PetQueries(async_session).list()

        assert [p.id for p in pets] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_filters(self, async_session, pet_factory):
        await pet_factory.create(async_session, name="Rex", animal_type="dog")
        await pet_factory.create(async_session, name="Rexy", animal_type="cat")
        await pet_factory.create(async_session, name="Tom", animal_type="cat")
        queries = PetQueries(async_session)

        by_name = await queries.list(search="rEX")
        by_type = await queries.list(animal_type="cat")
        both = await queries.list(search="rex", animal_type="cat")

        assert sorted(p.name for p in by_name) == ["Rex", "Rexy"]
        assert sorted(p.name for p in by_type) == ["Rexy", "Tom"]
        assert [p.name for p in both] == ["Rexy"]

    @pytest.mark.asyncio
    async def test_search_wildcards_match_literally(self, async_session, pet_factory):
        await pet_factory.create(async_session, name="Rex")
        await pet_factory.create(async_session, name="100% Good Boy")
        queries = PetQueries(async_session)

        assert [p.name for p in await queries.list(search="%")] == ["100% Good Boy"]
        assert await queries.list(search="R_x") == []

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, async_session, pet_factory):
        pet = await pet_factory.create(async_session)

        updated = await PetQueries(async_session).update(
            pet.id, {**PET_FIELDS, "name": "Max", "date_of_birth": date(2019, 6, 1)}
        )

        assert updated.name == "Max"
        assert updated.date_of_birth == date(2019, 6, 1)
        assert updated.updated_at is not None

    @pytest.mark.asyncio
    async def test_update_missing_pet(self, async_session):
        with pytest.raises(NotFoundException) as exc_info:
            await PetQueries(async_session).update(999, PET_FIELDS)

        assert exc_info.value.message == "Pet not found"

    @pytest.mark.asyncio
    async def test_delete(self, async_session, pet_factory):
        pet = await pet_factory.create(async_session)
        queries = PetQueries(async_session)

        await queries.delete(pet.id)

        assert await queries.get_by_id(pet.id) is None
        with pytest.raises(NotFoundException):
            await queries.delete(pet.id)

    def test_merge_pet_fields(self, pet_factory):
        pet = pet_factory.build()

        merged = merge_pet_fields(pet, {"name": "Max", "unknown": 1})

        assert merged == {**PET_FIELDS, "name": "Max"}


class TestRecordQueries:
    """Test cases for RecordQueries."""

    @pytest.mark.asyncio
    async def test_create_for_existing_pet(self, async_session, pet_factory):
        pet = await pet_factory.create(async_session)

        record = await RecordQueries(async_session).create(
            pet.id,
            {"record_type": "allergy", "name": "Pollen", "severity": "mild", "reactions": ""},
        )

        assert record.pet_id == pet.id
        assert record.date is None
        assert record.reactions is None
        assert record.severity == "mild"

    @pytest.mark.asyncio
    async def test_create_for_missing_pet(self, async_session):
        with pytest.raises(NotFoundException) as exc_info:
            await RecordQueries(async_session).create(
                999, {"record_type": "vaccine", "name": "Rabies", "date": date(2024, 1, 1)}
            )

        assert exc_info.value.message == "Pet not found"

    @pytest.mark.asyncio
    async def test_list_by_pet_ordering(self, async_session, pet_factory, record_factory):
        pet = await pet_factory.create(async_session)
        other = await pet_factory.create(async_session, name="Max")
        old = await record_factory.create(async_session, pet.id, date=date(2023, 1, 1))
        undated = await record_factory.create(
            async_session, pet.id, record_type="allergy", date=None, severity="mild"
        )
        new = await record_factory.create(async_session, pet.id, date=date(2024, 1, 1))
        await record_factory.create(async_session, other.id)

        records = await RecordQueries(async_session).list_by_pet(pet.id)

        assert [r.id for r in records] == [new.id, old.id, undated.id]

    @pytest.mark.asyncio
    async def test_list_by_pet_without_records(self, async_session, pet_factory):
        pet = await pet_factory.create(async_session)

        assert await RecordQueries(async_session).list_by_pet(pet.id) == []

    @pytest.mark.asyncio
    async def test_list_by_missing_pet(self, async_session):
        with pytest.raises(NotFoundException):
            await RecordQueries(async_session).list_by_pet(999)

    @pytest.mark.asyncio
    async def test_update_merges_supplied_fields(
        self, async_session, pet_factory, record_factory
    ):
        pet = await pet_factory.create(async_session)
        record = await record_factory.create(async_session, pet.id, reactions="sleepy")

        updated = await RecordQueries(async_session).update(
            record.id, {"name": "Distemper", "reactions": "", "pet_id": 999}
        )

        assert updated.name == "Distemper"
        assert updated.reactions is None
        assert updated.date == date(2024, 3, 1)
        assert updated.pet_id == pet.id

    @pytest.mark.asyncio
    async def test_update_missing_record(self, async_session):
        with pytest.raises(NotFoundException) as exc_info:
            await RecordQueries(async_session).update(999, {"name": "x"})

        assert exc_info.value.message == "Medical record not found"

    @pytest.mark.asyncio
    async def test_delete(self, async_session, pet_factory, record_factory):
        pet = await pet_factory.create(async_session)
        record = await record_factory.create(async_session, pet.id)
        queries = RecordQueries(async_session)

        await queries.delete(record.id)

        assert await queries.get_by_id(record.id) is None
        with pytest.raises(NotFoundException):
            await queries.delete(record.id)


class TestDashboardQueries:
    """Test cases for DashboardQueries type counts."""

    @pytest.mark.asyncio
    async def test_type_counts_are_maps(self, async_session, pet_factory, record_factory):
        bird = await pet_factory.create(async_session, name="Tweety", animal_type="bird")
        await pet_factory.create(async_session, name="Tom", animal_type="cat")
        await pet_factory.create(async_session, name="Kit", animal_type="cat")
        await record_factory.create(async_session, bird.id)
        await record_factory.create(
            async_session, bird.id, record_type="allergy", date=None, severity="mild"
        )
        queries = DashboardQueries(async_session)

        pets = await queries.pets_by_type()

        assert pets == {"cat": 2, "bird": 1}
        assert list(pets) == ["cat", "bird"]
        assert await queries.records_by_type() == {"allergy": 1, "vaccine": 1}

    @pytest.mark.asyncio
    async def test_type_counts_empty(self, async_session):
        queries = DashboardQueries(async_session)

        assert await queries.pets_by_type() == {}
        assert await queries.records_by_type() == {}
