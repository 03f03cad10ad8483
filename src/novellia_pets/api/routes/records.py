"""Medical record endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body

from ...exceptions import NotFoundException
from ...queries.records import RecordQueries
from ...schemas.medical_record import (
    RECORD_CREATE_RULES,
    MedicalRecordCreate,
    MedicalRecordResponse,
    MedicalRecordUpdate,
)
from ...utils.validation import validate_payload
from ..deps import PetId, RecordId, Store

router = APIRouter()


@router.get(
    "/pet/{pet_id}",
    response_model=List[MedicalRecordResponse],
    summary="List a pet's medical records",
)
async def list_pet_records(pet_id: PetId, store: Store):
    async with store.get_transaction() as session:
        records = await RecordQueries(session, store.statement_timeout).list_by_pet(pet_id)
        return [MedicalRecordResponse.model_validate(record) for record in records]


@router.get("/{record_id}", response_model=MedicalRecordResponse, summary="Get a medical record")
async def get_record(record_id: RecordId, store: Store):
    async with store.get_transaction() as session:
        record = await RecordQueries(session, store.statement_timeout).get_by_id(record_id)
        if record is None:
            raise NotFoundException("Medical record", record_id)
        return MedicalRecordResponse.model_validate(record)


@router.post(
    "/pet/{pet_id}",
    status_code=201,
    response_model=MedicalRecordResponse,
    summary="Add a medical record to a pet",
)
async def create_record(pet_id: PetId, store: Store, payload: Any = Body(None)):
    async with store.get_transaction() as session:
        queries = RecordQueries(session, store.statement_timeout)

        # A missing pet wins over an invalid payload
        if not await queries.pet_exists(pet_id):
            raise NotFoundException("Pet", pet_id)

        fields = (
            validate_payload(MedicalRecordCreate, payload, RECORD_CREATE_RULES)
            .unwrap()
            .model_dump()
        )
        record = await queries.create(pet_id, fields)
        return MedicalRecordResponse.model_validate(record)


@router.patch("/{record_id}", response_model=MedicalRecordResponse, summary="Update a medical record")
@router.put("/{record_id}", response_model=MedicalRecordResponse, summary="Update a medical record")
async def update_record(record_id: RecordId, store: Store, payload: Any = Body(None)):
    async with store.get_transaction() as session:
        queries = RecordQueries(session, store.statement_timeout)

        if await queries.get_by_id(record_id) is None:
            raise NotFoundException("Medical record", record_id)

        changes = (
            validate_payload(MedicalRecordUpdate, payload)
            .unwrap()
            .model_dump(exclude_unset=True)
        )
        record = await queries.update(record_id, changes)
        return MedicalRecordResponse.model_validate(record)


@router.delete("/{record_id}", summary="Delete a medical record")
async def delete_record(record_id: RecordId, store: Store) -> Dict[str, str]:
    async with store.get_transaction() as session:
        await RecordQueries(session, store.statement_timeout).delete(record_id)
    return {"message": "Medical record deleted successfully"}
