# =============================================================================
# lib/supabase_client.py - Supabase-Backed Owner Repository
# =============================================================================
# This module provides the production OwnerRepository. It talks to Postgres
# through the Supabase client and maps rows of three tables onto the domain
# models:
#
#   types  (id, name)
#   owners (id, first_name, last_name, address, city, telephone)
#   pets   (id, name, birth_date, type_id, owner_id)
#
# The client itself is a singleton shared across the application.
#
# Usage:
#   from lib.supabase_client import SupabaseOwnerRepository
#   repo = SupabaseOwnerRepository()
#   owner = repo.find_by_id(1)
# =============================================================================

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from supabase import create_client, Client

from app.config import settings
from core.models import Owner, Pet, PetType
from core.repository import OwnerRepository

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "no rows" on .single()
NO_ROWS = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    Uses the service_role key, which bypasses Row Level Security (RLS).
    This is appropriate for server-side operations.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Raises:
            SupabaseClientError: If settings are missing or creation fails
        """
        if cls._instance is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
                raise SupabaseClientError(
                    message="Supabase is not configured",
                    code="CLIENT_NOT_CONFIGURED",
                    suggestion="Set SUPABASE_URL and SUPABASE_SERVICE_KEY, "
                               "or use REPOSITORY_BACKEND=memory",
                )
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests)."""
        cls._instance = None


# =============================================================================
# Row Mapping
# =============================================================================

def _pet_type_from_row(row: dict[str, Any]) -> PetType:
    return PetType(id=row["id"], name=row["name"])


def _pet_from_row(row: dict[str, Any], types: dict[int, PetType]) -> Pet:
    birth_date = row.get("birth_date")
    return Pet(
        id=row["id"],
        name=row.get("name"),
        birth_date=date.fromisoformat(birth_date) if birth_date else None,
        type=types.get(row.get("type_id")),
    )


def _pet_to_row(pet: Pet) -> dict[str, Any]:
    return {
        "name": pet.name,
        "birth_date": pet.birth_date.isoformat() if pet.birth_date else None,
        "type_id": pet.type.id if pet.type else None,
    }


def _owner_to_row(owner: Owner) -> dict[str, Any]:
    return {
        "first_name": owner.first_name,
        "last_name": owner.last_name,
        "address": owner.address,
        "city": owner.city,
        "telephone": owner.telephone,
    }


class SupabaseOwnerRepository(OwnerRepository):
    """
    OwnerRepository over Supabase tables.

    Example:
        repo = SupabaseOwnerRepository()
        owner = repo.find_by_id(6)
        owner.add_pet(Pet(name="Tom", type=repo.find_pet_types()[0]))
        repo.save(owner)
    """

    def __init__(self, client: Client | None = None) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = SupabaseClient.get_client()
        return self._client

    # -------------------------------------------------------------------------
    # Pet Types
    # -------------------------------------------------------------------------

    def find_pet_types(self) -> list[PetType]:
        try:
            response = (
                self.client.table("types")
                .select("id, name")
                .order("name")
                .execute()
            )
            return [_pet_type_from_row(row) for row in response.data or []]

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch pet types: {e}",
                code="FETCH_TYPES_FAILED",
                suggestion="Check that the types table exists and is readable",
            )

    def _types_by_id(self) -> dict[int, PetType]:
        return {t.id: t for t in self.find_pet_types()}

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_by_id(self, owner_id: int) -> Owner | None:
        """
        Fetch an owner and its pets.

        Pets come back ordered by id, which is insertion order.
        """
        try:
            response = (
                self.client.table("owners")
                .select("*")
                .eq("id", owner_id)
                .single()
                .execute()
            )
            row = response.data

        except Exception as e:
            if NO_ROWS in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch owner: {e}",
                code="FETCH_OWNER_FAILED",
                details={"owner_id": owner_id}
            )

        if not row:
            return None

        try:
            pets_response = (
                self.client.table("pets")
                .select("id, name, birth_date, type_id")
                .eq("owner_id", owner_id)
                .order("id")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch pets for owner: {e}",
                code="FETCH_PETS_FAILED",
                details={"owner_id": owner_id}
            )

        types = self._types_by_id()
        return Owner(
            id=row["id"],
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            address=row.get("address") or "",
            city=row.get("city") or "",
            telephone=row.get("telephone") or "",
            pets=[_pet_from_row(p, types) for p in pets_response.data or []],
        )

    def find_pet_by_id(self, pet_id: int) -> Pet | None:
        try:
            response = (
                self.client.table("pets")
                .select("id, name, birth_date, type_id")
                .eq("id", pet_id)
                .single()
                .execute()
            )
        except Exception as e:
            if NO_ROWS in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch pet: {e}",
                code="FETCH_PET_FAILED",
                details={"pet_id": pet_id}
            )

        if not response.data:
            return None
        return _pet_from_row(response.data, self._types_by_id())

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def save(self, entity: Owner | Pet) -> None:
        if isinstance(entity, Owner):
            self._save_owner(entity)
        elif isinstance(entity, Pet):
            self._save_pet(entity)
        else:
            raise TypeError(f"Cannot save {type(entity).__name__}")

    def _save_owner(self, owner: Owner) -> None:
        try:
            if owner.id is None:
                response = (
                    self.client.table("owners")
                    .insert(_owner_to_row(owner))
                    .execute()
                )
                owner.id = response.data[0]["id"]
                logger.info(f"Inserted owner {owner.id}")
            else:
                (
                    self.client.table("owners")
                    .update(_owner_to_row(owner))
                    .eq("id", owner.id)
                    .execute()
                )

            # Existing pet rows are only written by save(pet)
            for pet in owner.pets:
                if pet.is_new:
                    row = _pet_to_row(pet)
                    row["owner_id"] = owner.id
                    response = self.client.table("pets").insert(row).execute()
                    pet.id = response.data[0]["id"]
                    logger.info(f"Inserted pet {pet.id} for owner {owner.id}")

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to save owner: {e}",
                code="SAVE_OWNER_FAILED",
                suggestion="Check that the owners and pets tables are writable",
                details={"owner_id": owner.id}
            )

    def _save_pet(self, pet: Pet) -> None:
        if pet.id is None:
            raise SupabaseClientError(
                message="Cannot update a pet that has no id",
                code="SAVE_PET_FAILED",
                suggestion="Add new pets to their owner and save the owner",
            )
        try:
            self._update_pet_row(pet)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to save pet: {e}",
                code="SAVE_PET_FAILED",
                details={"pet_id": pet.id}
            )

    def _update_pet_row(self, pet: Pet) -> None:
        (
            self.client.table("pets")
            .update(_pet_to_row(pet))
            .eq("id", pet.id)
            .execute()
        )
        logger.debug(f"Updated pet {pet.id}")

    def ping(self) -> bool:
        try:
            self.client.table("types").select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase ping failed: {e}")
            return False
