# =============================================================================
# core/services/pet_service.py - Pet Form Business Logic
# =============================================================================
# The create and edit flows for a pet under an owner:
#
#   resolve owner -> resolve pet -> bind -> validate -> rules -> save -> redirect
#
# Binding and the HTTP response live in app/routers/pets.py; this module does
# the lookups, the business rules and the persistence, and tells the router
# whether to show the form again or where to redirect.
# =============================================================================

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from app.exceptions import OwnerNotFoundError, PetNotFoundError
from core.models import Owner, Pet, PetType
from core.repository import OwnerRepository
from core.validation import BindingResult, PetValidator

logger = logging.getLogger(__name__)

VIEWS_PETS_CREATE_OR_UPDATE_FORM = "pets/createOrUpdatePetForm.html"

DUPLICATE_PET_NAME = "duplicatePetName"
INVALID_BIRTH_DATE = "invalidBirthDate"

MSG_DUPLICATE_PET_NAME = "This pet name already exists for this owner."
MSG_INVALID_BIRTH_DATE = "Birth date cannot be in the future."
MSG_PET_ADDED = "New Pet has been Added"
MSG_PET_EDITED = "Pet details has been edited"


@dataclass
class PetFormOutcome:
    """
    Result of submitting a pet form.

    Either the form has errors and is shown again (`redirect_to` is None),
    or the pet was saved and the browser goes to `redirect_to`.
    """
    pet: Pet
    result: BindingResult
    redirect_to: str | None = None
    message: str | None = None

    @property
    def saved(self) -> bool:
        return self.redirect_to is not None


def owner_url(owner: Owner) -> str:
    return f"/owners/{owner.id}"


class PetService:
    """
    Pet creation and edit flows.

    Args:
        repository: Storage for owners, pets and pet types
        today: Clock used for the birth date rule
    """

    def __init__(
        self,
        repository: OwnerRepository,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.today = today
        self.validator = PetValidator()

    # -------------------------------------------------------------------------
    # Per-request resolution
    # -------------------------------------------------------------------------

    def populate_pet_types(self) -> list[PetType]:
        """All pet types, for the type selection field."""
        return self.repository.find_pet_types()

    def find_owner(self, owner_id: int) -> Owner:
        """
        Resolve the owner from the path.

        Raises:
            OwnerNotFoundError: If no owner has this id
        """
        owner = self.repository.find_by_id(owner_id)
        if owner is None:
            raise OwnerNotFoundError(owner_id)
        return owner

    def find_pet(self, owner_id: int, pet_id: int | None = None) -> Pet:
        """
        Resolve the pet that the form will be bound onto.

        Without a pet id this is a fresh pet (create). With one, it is a copy
        of the owner's pet so a rejected submission leaves the owner
        untouched. A pet the owner doesn't have resolves to a fresh pet; the
        edit flow reports it as not found when it tries to save.

        Raises:
            OwnerNotFoundError: If no owner has this id
        """
        owner = self.find_owner(owner_id)
        if pet_id is None:
            return Pet()

        pet = owner.get_pet_by_id(pet_id)
        if pet is None:
            return Pet()
        return pet.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def init_creation_form(self, owner: Owner) -> Pet:
        return Pet()

    def process_creation_form(
        self,
        owner: Owner,
        pet: Pet,
        result: BindingResult,
    ) -> PetFormOutcome:
        """
        Add a new pet to an owner.

        Rules, checked after the validator:
        1. the name is not already used by any of the owner's pets
        2. the birth date, if given, is not after today

        On success the owner is saved, which inserts the pet.
        """
        self.validator.validate(pet, result)

        if pet.name and owner.get_pet(pet.name) is not None:
            result.reject_value("name", DUPLICATE_PET_NAME, MSG_DUPLICATE_PET_NAME, pet.name)

        self._check_birth_date(pet, result)

        if result.has_errors:
            logger.debug(
                f"Rejected new pet for owner {owner.id} with {result.error_count} "
                f"error(s): {[e.code for e in result.field_errors]}"
            )
            return PetFormOutcome(pet=pet, result=result)

        owner.add_pet(pet)
        self.repository.save(owner)
        logger.info(f"Added pet {pet.id} ({pet.name}) to owner {owner.id}")

        return PetFormOutcome(
            pet=pet,
            result=result,
            redirect_to=owner_url(owner),
            message=MSG_PET_ADDED,
        )

    # -------------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------------

    def init_update_form(self, owner: Owner, pet_id: int) -> Pet:
        """
        The owner's pet to prefill the edit form with.

        Raises:
            PetNotFoundError: If the owner has no pet with this id
        """
        pet = owner.get_pet_by_id(pet_id)
        if pet is None:
            raise PetNotFoundError(pet_id)
        return pet

    def process_update_form(
        self,
        owner: Owner,
        pet: Pet,
        result: BindingResult,
        pet_id: int | None = None,
    ) -> PetFormOutcome:
        """
        Save changes to an existing pet.

        Same rules as creation, except the pet may keep its own name: a name
        match only counts as a duplicate when it is a different pet.

        Raises:
            PetNotFoundError: If the pet is not stored (checked after validation)
        """
        self.validator.validate(pet, result)

        if pet.name:
            existing = owner.get_pet(pet.name)
            if existing is not None and existing.id != pet.id:
                result.reject_value("name", DUPLICATE_PET_NAME, MSG_DUPLICATE_PET_NAME, pet.name)

        self._check_birth_date(pet, result)

        if result.has_errors:
            logger.debug(
                f"Rejected edit of pet {pet.id} for owner {owner.id} with "
                f"{result.error_count} error(s): {[e.code for e in result.field_errors]}"
            )
            return PetFormOutcome(pet=pet, result=result)

        self._update_existing_pet(pet, pet_id)
        logger.info(f"Updated pet {pet.id} ({pet.name}) of owner {owner.id}")

        return PetFormOutcome(
            pet=pet,
            result=result,
            redirect_to=owner_url(owner),
            message=MSG_PET_EDITED,
        )

    def _update_existing_pet(self, pet: Pet, pet_id: int | None) -> None:
        existing = self.repository.find_pet_by_id(pet.id) if pet.id is not None else None
        if existing is None:
            raise PetNotFoundError(pet.id if pet.id is not None else pet_id)

        existing.name = pet.name
        existing.birth_date = pet.birth_date
        existing.type = pet.type
        self.repository.save(existing)

    # -------------------------------------------------------------------------
    # Shared rules
    # -------------------------------------------------------------------------

    def _check_birth_date(self, pet: Pet, result: BindingResult) -> None:
        if pet.birth_date is not None and pet.birth_date > self.today():
            result.reject_value(
                "birth_date", INVALID_BIRTH_DATE, MSG_INVALID_BIRTH_DATE, pet.birth_date
            )
