"""
Domain operations for pets.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.sql import func

from ..exceptions import ConflictException, NotFoundException
from ..models.pet import Pet
from .base import BaseQueries

logger = logging.getLogger(__name__)

PET_FIELDS = ("name", "animal_type", "owner_name", "date_of_birth")


class PetQueries(BaseQueries):
    """Create, read, update and delete pets within one transaction."""

    async def list(
        self, search: Optional[str] = None, animal_type: Optional[str] = None
    ) -> List[Pet]:
        """
        List pets, newest first.

        Args:
            search: Case-insensitive substring of the name; wildcards match literally
            animal_type: Exact animal type

        Returns:
            Matching pets ordered by creation time, newest first
        """
        stmt = select(Pet)
        if search:
            stmt = stmt.where(Pet.name.icontains(search, autoescape=True))
        if animal_type:
            stmt = stmt.where(Pet.animal_type == animal_type)
        stmt = stmt.order_by(Pet.created_at.desc(), Pet.id.desc())

        return await self._scalars(stmt, "list_pets")

    async def get_by_id(self, pet_id: int) -> Optional[Pet]:
        """Get a pet by id, or None when it does not exist."""
        return await self._scalar_one_or_none(
            select(Pet).where(Pet.id == pet_id), "get_pet"
        )

    async def exists_by_name_and_owner(self, name: str, owner_name: str) -> bool:
        """Check whether a pet with exactly this name and owner exists."""
        found = await self._scalar_one_or_none(
            select(Pet.id)
            .where(Pet.name == name, Pet.owner_name == owner_name)
            .limit(1),
            "find_pet_by_name_and_owner",
        )
        return found is not None

    async def create(self, fields: Mapping[str, Any]) -> Pet:
        """
        Create a pet.

        Args:
            fields: Validated values for all editable fields

        Returns:
            The stored pet with id and timestamps

        Raises:
            ConflictException: If a pet with the same name and owner exists
        """
        if await self.exists_by_name_and_owner(fields["name"], fields["owner_name"]):
            raise ConflictException(
                context={"name": fields["name"], "owner_name": fields["owner_name"]}
            )

        pet = Pet(**{name: fields[name] for name in PET_FIELDS})
        self.session.add(pet)
        await self._flush_and_refresh(pet, "create_pet")

        logger.info(f"Created pet {pet.id}")
        return pet

    async def update(self, pet_id: int, fields: Mapping[str, Any]) -> Pet:
        """
        Replace all editable fields of a pet.

        Args:
            pet_id: Pet to update
            fields: Values for every editable field

        Returns:
            The updated pet

        Raises:
            NotFoundException: If the pet does not exist
        """
        pet = await self.get_by_id(pet_id)
        if pet is None:
            raise NotFoundException("Pet", pet_id)

        pet.update_fields(**{name: fields[name] for name in PET_FIELDS})
        pet.updated_at = func.now()
        await self._flush_and_refresh(pet, "update_pet")

        logger.info(f"Updated pet {pet.id}")
        return pet

    async def delete(self, pet_id: int) -> None:
        """
        Delete a pet together with its medical records.

        Raises:
            NotFoundException: If the pet does not exist
        """
        pet = await self.get_by_id(pet_id)
        if pet is None:
            raise NotFoundException("Pet", pet_id)

        await self._delete(pet, "delete_pet")
        logger.info(f"Deleted pet {pet_id}")


def merge_pet_fields(pet: Pet, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay supplied changes on a pet's current values."""
    merged = {name: getattr(pet, name) for name in PET_FIELDS}
    merged.update({k: v for k, v in changes.items() if k in PET_FIELDS})
    return merged
