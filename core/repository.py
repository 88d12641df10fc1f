# =============================================================================
# core/repository.py - Owner Repository Interface
# =============================================================================
# The one seam between the pet flows and storage. The web layer never talks to
# a database directly; it asks the repository for owners, pets and pet types
# and hands entities back to save().
#
# Implementations:
# - lib.memory.InMemoryOwnerRepository: dict-backed store (dev and tests)
# - lib.supabase_client.SupabaseOwnerRepository: Postgres through Supabase
# =============================================================================

from abc import ABC, abstractmethod

from core.models import Owner, Pet, PetType


class OwnerRepository(ABC):
    """
    Storage operations used by the owner and pet pages.

    Entities returned are detached: mutating them has no effect until they
    are passed back to save().
    """

    @abstractmethod
    def find_by_id(self, owner_id: int) -> Owner | None:
        """Owner with its pets (insertion order), or None."""

    @abstractmethod
    def find_pet_by_id(self, pet_id: int) -> Pet | None:
        """Pet by id, regardless of owner, or None."""

    @abstractmethod
    def find_pet_types(self) -> list[PetType]:
        """All pet types ordered by name."""

    @abstractmethod
    def save(self, entity: Owner | Pet) -> None:
        """
        Persist an owner or a pet.

        Saving an owner writes the owner fields and cascades to its new pets:
        they are inserted and get their id assigned back onto the caller's
        instance. Pets that already exist are left as stored, so a stale owner
        copy never drops or reverts them. Saving a pet updates name, birth
        date and type of an existing pet.
        """

    def ping(self) -> bool:
        """Connectivity probe for readiness checks."""
        return True
