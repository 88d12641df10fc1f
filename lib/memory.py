# =============================================================================
# lib/memory.py - In-Memory Owner Repository
# =============================================================================
# Dictionary-backed OwnerRepository used for local development and tests.
#
# Behaves like a database as far as callers can tell:
# - reads return copies, so an unsaved mutation never leaks into the store
# - ids are assigned from counters on first save
# - a lock serializes access (FastAPI runs requests on a thread pool)
#
# Usage:
#   from lib.memory import InMemoryOwnerRepository
#   repo = InMemoryOwnerRepository.with_sample_data()
#   owner = repo.find_by_id(1)
# =============================================================================

from __future__ import annotations

import logging
import threading
from datetime import date
from itertools import count

from core.models import Owner, Pet, PetType
from core.repository import OwnerRepository

logger = logging.getLogger(__name__)


# =============================================================================
# Sample Data
# =============================================================================
# The classic clinic data set: (name) for types, and for owners
# (first, last, address, city, telephone, [(pet, birth date, type)]).

SAMPLE_PET_TYPES = ["cat", "dog", "lizard", "snake", "bird", "hamster"]

SAMPLE_OWNERS = [
    ("George", "Franklin", "110 W. Liberty St.", "Madison", "6085551023",
     [("Leo", "2010-09-07", "cat")]),
    ("Betty", "Davis", "638 Cardinal Ave.", "Sun Prairie", "6085551749",
     [("Basil", "2012-08-06", "hamster")]),
    ("Eduardo", "Rodriquez", "2693 Commerce St.", "McFarland", "6085558763",
     [("Rosy", "2011-04-17", "dog"), ("Jewel", "2010-03-07", "dog")]),
    ("Harold", "Davis", "563 Friendly St.", "Windsor", "6085553198",
     [("Iggy", "2010-11-30", "lizard")]),
    ("Peter", "McTavish", "2387 S. Fair Way", "Madison", "6085552765",
     [("George", "2010-01-20", "snake")]),
    ("Jean", "Coleman", "105 N. Lake St.", "Monona", "6085552654",
     [("Samantha", "2012-09-04", "cat"), ("Max", "2012-09-04", "cat")]),
    ("Jeff", "Black", "1450 Oak Blvd.", "Monona", "6085555387",
     [("Lucky", "2011-08-06", "bird")]),
    ("Maria", "Escobito", "345 Maple St.", "Madison", "6085557683",
     [("Mulligan", "2007-02-24", "dog")]),
    ("David", "Schroeder", "2749 Blackhawk Trail", "Madison", "6085559435",
     [("Freddy", "2010-03-09", "bird")]),
    ("Carlos", "Estaban", "2335 Independence La.", "Waunakee", "6085555487",
     [("Lucky", "2010-06-24", "dog"), ("Sly", "2012-06-08", "cat")]),
]


class InMemoryOwnerRepository(OwnerRepository):
    """
    OwnerRepository kept in process memory.

    Example:
        repo = InMemoryOwnerRepository()
        cat = repo.add_pet_type("cat")
        owner = Owner(first_name="Jean", last_name="Coleman")
        repo.save(owner)           # owner.id assigned
        owner.add_pet(Pet(name="Max", type=cat))
        repo.save(owner)           # Max gets an id, stored with the owner
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._owners: dict[int, Owner] = {}
        self._types: dict[int, PetType] = {}
        self._owner_ids = count(1)
        self._pet_ids = count(1)
        self._type_ids = count(1)

    @classmethod
    def with_sample_data(cls) -> InMemoryOwnerRepository:
        """Create a repository seeded with the sample owners and pets."""
        repo = cls()
        types = {name: repo.add_pet_type(name) for name in SAMPLE_PET_TYPES}

        for first, last, address, city, telephone, pets in SAMPLE_OWNERS:
            owner = Owner(
                first_name=first,
                last_name=last,
                address=address,
                city=city,
                telephone=telephone,
            )
            for name, birth_date, type_name in pets:
                owner.add_pet(Pet(
                    name=name,
                    birth_date=date.fromisoformat(birth_date),
                    type=types[type_name],
                ))
            repo.save(owner)

        logger.info(
            f"Seeded in-memory repository with {len(repo._owners)} owners"
        )
        return repo

    # -------------------------------------------------------------------------
    # Reference Data
    # -------------------------------------------------------------------------

    def add_pet_type(self, name: str) -> PetType:
        """Register a pet type and return it with its id."""
        with self._lock:
            pet_type = PetType(id=next(self._type_ids), name=name)
            self._types[pet_type.id] = pet_type
            return pet_type

    def find_pet_types(self) -> list[PetType]:
        with self._lock:
            return sorted(self._types.values(), key=lambda t: t.name)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_by_id(self, owner_id: int) -> Owner | None:
        with self._lock:
            owner = self._owners.get(owner_id)
            return owner.model_copy(deep=True) if owner else None

    def find_pet_by_id(self, pet_id: int) -> Pet | None:
        with self._lock:
            pet = self._find_stored_pet(pet_id)
            return pet.model_copy(deep=True) if pet else None

    def _find_stored_pet(self, pet_id: int) -> Pet | None:
        for owner in self._owners.values():
            pet = owner.get_pet_by_id(pet_id)
            if pet is not None:
                return pet
        return None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def save(self, entity: Owner | Pet) -> None:
        with self._lock:
            if isinstance(entity, Owner):
                self._save_owner(entity)
            elif isinstance(entity, Pet):
                self._save_pet(entity)
            else:
                raise TypeError(f"Cannot save {type(entity).__name__}")

    def _save_owner(self, owner: Owner) -> None:
        """
        Insert or merge an owner.

        The caller's copy may be stale: only the owner's own fields and its
        new pets are written. Pets already stored are changed through
        save(pet) alone.
        """
        if owner.id is None:
            owner.id = next(self._owner_ids)
            logger.debug(f"Inserted owner {owner.id}")

        stored = self._owners.get(owner.id)
        if stored is None:
            stored = owner.model_copy(update={
                "pets": [p.model_copy(deep=True) for p in owner.pets if not p.is_new]
            })
            self._owners[owner.id] = stored
        else:
            stored.first_name = owner.first_name
            stored.last_name = owner.last_name
            stored.address = owner.address
            stored.city = owner.city
            stored.telephone = owner.telephone

        for pet in owner.pets:
            if pet.is_new:
                pet.id = next(self._pet_ids)
                stored.pets.append(pet.model_copy(deep=True))
                logger.debug(f"Inserted pet {pet.id} for owner {owner.id}")

    def _save_pet(self, pet: Pet) -> None:
        stored = self._find_stored_pet(pet.id) if pet.id is not None else None
        if stored is None:
            # A pet can only be inserted through its owner
            raise LookupError(f"No stored pet with id: {pet.id}")

        stored.name = pet.name
        stored.birth_date = pet.birth_date
        stored.type = pet.type
        logger.debug(f"Updated pet {pet.id}")
