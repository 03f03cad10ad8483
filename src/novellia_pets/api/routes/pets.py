"""Pet endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query

from ...exceptions import NotFoundException
from ...queries.pets import PetQueries, merge_pet_fields
from ...schemas.pet import PetCreate, PetFilters, PetResponse, PetUpdate
from ...utils.validation import validate_payload
from ..deps import PetId, Store

router = APIRouter()


@router.get("", response_model=List[PetResponse], summary="List pets")
async def list_pets(
    store: Store,
    search: Optional[str] = Query(None, description="Substring of the pet's name"),
    animal_type: Optional[str] = Query(None, description="Exact animal type"),
):
    filters = PetFilters(search=search, animal_type=animal_type)
    async with store.get_transaction() as session:
        pets = await PetQueries(session, store.statement_timeout).list(
            search=filters.search, animal_type=filters.animal_type
        )
        return [PetResponse.model_validate(pet) for pet in pets]


@router.get("/{pet_id}", response_model=PetResponse, summary="Get a pet")
async def get_pet(pet_id: PetId, store: Store):
    async with store.get_transaction() as session:
        pet = await PetQueries(session, store.statement_timeout).get_by_id(pet_id)
        if pet is None:
            raise NotFoundException("Pet", pet_id)
        return PetResponse.model_validate(pet)


@router.post("", status_code=201, response_model=PetResponse, summary="Create a pet")
async def create_pet(store: Store, payload: Any = Body(None)):
    fields = validate_payload(PetCreate, payload).unwrap().model_dump()

    async with store.get_transaction() as session:
        pet = await PetQueries(session, store.statement_timeout).create(fields)
        return PetResponse.model_validate(pet)


@router.patch("/{pet_id}", response_model=PetResponse, summary="Update a pet")
@router.put("/{pet_id}", response_model=PetResponse, summary="Update a pet")
async def update_pet(pet_id: PetId, store: Store, payload: Any = Body(None)):
    async with store.get_transaction() as session:
        queries = PetQueries(session, store.statement_timeout)

        pet = await queries.get_by_id(pet_id)
        if pet is None:
            raise NotFoundException("Pet", pet_id)

        changes = validate_payload(PetUpdate, payload).unwrap().model_dump(exclude_unset=True)
        pet = await queries.update(pet_id, merge_pet_fields(pet, changes))
        return PetResponse.model_validate(pet)


@router.delete("/{pet_id}", summary="Delete a pet and its medical records")
async def delete_pet(pet_id: PetId, store: Store) -> Dict[str, str]:
    async with store.get_transaction() as session:
        await PetQueries(session, store.statement_timeout).delete(pet_id)
    return {"message": "Pet deleted successfully"}
