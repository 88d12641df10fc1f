# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the request pipeline.
#
# Each pet route resolves, in order:
#   repository -> service -> owner (404 if absent) -> pet types
# and the handler body only runs when every step succeeded. A failing step
# raises, and the exception handlers in app/main.py render the error page.
# =============================================================================

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Path

from app.config import settings
from core.models import Owner, Pet, PetType
from core.repository import OwnerRepository
from core.services.pet_service import PetService

logger = logging.getLogger(__name__)


@lru_cache
def get_repository() -> OwnerRepository:
    """
    Get the configured repository instance.

    Built once per process; tests replace it via dependency_overrides.
    """
    if settings.REPOSITORY_BACKEND == "supabase":
        from lib.supabase_client import SupabaseOwnerRepository
        logger.info("Using Supabase repository")
        return SupabaseOwnerRepository()

    from lib.memory import InMemoryOwnerRepository
    logger.info(f"Using in-memory repository (seeded={settings.SEED_SAMPLE_DATA})")
    if settings.SEED_SAMPLE_DATA:
        return InMemoryOwnerRepository.with_sample_data()
    return InMemoryOwnerRepository()


RepositoryDep = Annotated[OwnerRepository, Depends(get_repository)]


def get_pet_service(repository: RepositoryDep) -> PetService:
    return PetService(repository)


PetServiceDep = Annotated[PetService, Depends(get_pet_service)]


def get_owner(
    owner_id: Annotated[int, Path(description="Owner id")],
    service: PetServiceDep,
) -> Owner:
    """Resolve the owner from the path, raising OwnerNotFoundError if absent."""
    return service.find_owner(owner_id)


OwnerDep = Annotated[Owner, Depends(get_owner)]


def get_pet_types(service: PetServiceDep) -> list[PetType]:
    return service.populate_pet_types()


PetTypesDep = Annotated[list[PetType], Depends(get_pet_types)]


def get_new_pet(
    owner_id: Annotated[int, Path(description="Owner id")],
    service: PetServiceDep,
) -> Pet:
    """Fresh pet for the creation form."""
    return service.find_pet(owner_id)


def get_existing_pet(
    owner_id: Annotated[int, Path(description="Owner id")],
    pet_id: Annotated[int, Path(description="Pet id")],
    service: PetServiceDep,
) -> Pet:
    """Copy of the owner's pet for the edit form (fresh pet if the owner has none)."""
    return service.find_pet(owner_id, pet_id)


NewPetDep = Annotated[Pet, Depends(get_new_pet)]
ExistingPetDep = Annotated[Pet, Depends(get_existing_pet)]
