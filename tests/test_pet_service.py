# =============================================================================
# tests/test_pet_service.py - Pet Form Business Logic Tests
# =============================================================================
# This module contains tests for:
# - Owner/pet resolution and not-found errors
# - Creation: duplicate names, future birth dates, cascade save
# - Edit: self-match on name, field copy, missing stored pet
#
# Uses the seeded in-memory repository and a fixed "today" (see conftest.py).
# =============================================================================

import logging
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from app.exceptions import OwnerNotFoundError, PetNotFoundError
from core.models import Owner, Pet
from core.services.pet_service import (
    DUPLICATE_PET_NAME,
    INVALID_BIRTH_DATE,
    MSG_PET_ADDED,
    MSG_PET_EDITED,
    PetService,
)
from core.validation import BindingResult, REQUIRED
from lib.memory import InMemoryOwnerRepository
from tests.conftest import TODAY


# =============================================================================
# Resolution
# =============================================================================

class TestResolution:
    """Test per-request lookups."""

    def test_populate_pet_types_sorted_by_name(self, service):
        names = [t.name for t in service.populate_pet_types()]
        assert names == ["bird", "cat", "dog", "hamster", "lizard", "snake"]

    def test_populate_pet_types_may_be_empty(self):
        assert PetService(InMemoryOwnerRepository()).populate_pet_types() == []

    def test_find_owner(self, service):
        owner = service.find_owner(6)

        assert owner.full_name == "Jean Coleman"
        assert [p.name for p in owner.pets] == ["Samantha", "Max"]

    def test_find_owner_missing(self, service):
        with pytest.raises(OwnerNotFoundError) as exc_info:
            service.find_owner(999)

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Owner not found with id: 999"

    def test_find_pet_without_id_is_fresh(self, service):
        assert service.find_pet(1).is_new

    def test_find_pet_with_id_is_detached_copy(self, service):
        owner = service.find_owner(1)
        pet = service.find_pet(1, 1)

        assert pet.id == 1
        assert pet.name == "Leo"
        assert pet is not owner.get_pet_by_id(1)

    def test_find_pet_not_on_owner_is_fresh(self, service):
        # Pet 2 (Basil) belongs to owner 2
        assert service.find_pet(1, 2).is_new

    def test_find_pet_missing_owner(self, service):
        with pytest.raises(OwnerNotFoundError):
            service.find_pet(999, 1)


# =============================================================================
# Creation
# =============================================================================

class TestCreation:
    """Test adding a pet to an owner."""

    def test_init_creation_form_is_blank(self, service):
        pet = service.init_creation_form(service.find_owner(1))
        assert pet.is_new
        assert pet.name is None

    def test_successful_creation(self, service, repository, types):
        owner = service.find_owner(1)
        before = len(owner.pets)
        pet = Pet(name="Tom", birth_date=date(2020, 5, 1), type=types["cat"])

        outcome = service.process_creation_form(owner, pet, BindingResult("pet"))

        assert outcome.saved
        assert outcome.redirect_to == "/owners/1"
        assert outcome.message == MSG_PET_ADDED
        assert pet.id is not None

        stored = repository.find_by_id(1)
        assert len(stored.pets) == before + 1
        assert stored.pets[-1].name == "Tom"

    def test_duplicate_name_rejected(self, service, repository, types):
        owner = service.find_owner(1)
        pet = Pet(name="Leo", type=types["dog"])

        outcome = service.process_creation_form(owner, pet, BindingResult("pet"))

        assert not outcome.saved
        assert outcome.result.get_field_error("name").code == DUPLICATE_PET_NAME
        assert len(repository.find_by_id(1).pets) == 1

    def test_duplicate_name_differs_only_in_case(self, service, types):
        owner = service.find_owner(1)

        outcome = service.process_creation_form(
            owner, Pet(name="LEO", type=types["dog"]), BindingResult("pet")
        )

        assert outcome.result.has_field_errors("name")

    def test_same_name_under_another_owner_allowed(self, service, types):
        # Owner 7 has a "Lucky"; owner 1 does not
        owner = service.find_owner(1)

        outcome = service.process_creation_form(
            owner, Pet(name="Lucky", type=types["bird"]), BindingResult("pet")
        )

        assert outcome.saved

    def test_future_birth_date_rejected(self, service, repository, types):
        owner = service.find_owner(1)
        pet = Pet(name="Tom", birth_date=TODAY + timedelta(days=1), type=types["cat"])

        outcome = service.process_creation_form(owner, pet, BindingResult("pet"))

        assert not outcome.saved
        assert outcome.result.get_field_error("birth_date").code == INVALID_BIRTH_DATE
        assert len(repository.find_by_id(1).pets) == 1

    def test_birth_date_today_allowed(self, service, types):
        owner = service.find_owner(1)
        pet = Pet(name="Tom", birth_date=TODAY, type=types["cat"])

        assert service.process_creation_form(owner, pet, BindingResult("pet")).saved

    def test_required_fields_checked(self, service):
        owner = service.find_owner(1)

        outcome = service.process_creation_form(owner, Pet(), BindingResult("pet"))

        assert not outcome.saved
        assert outcome.result.get_field_error("name").code == REQUIRED
        assert outcome.result.get_field_error("type").code == REQUIRED

    def test_all_rule_failures_reported_together(self, service, types):
        owner = service.find_owner(1)
        pet = Pet(name="Leo", birth_date=TODAY + timedelta(days=30), type=types["cat"])

        outcome = service.process_creation_form(owner, pet, BindingResult("pet"))

        assert outcome.result.has_field_errors("name")
        assert outcome.result.has_field_errors("birth_date")

    def test_rejection_logged_with_error_count(self, service, types, caplog):
        caplog.set_level(logging.DEBUG, logger="core.services.pet_service")
        owner = service.find_owner(1)
        pet = Pet(name="Leo", birth_date=TODAY + timedelta(days=30), type=types["cat"])

        service.process_creation_form(owner, pet, BindingResult("pet"))

        assert "Rejected new pet for owner 1 with 2 error(s)" in caplog.text

    def test_binding_errors_block_save(self, types):
        repository = MagicMock()
        service = PetService(repository, today=lambda: TODAY)
        result = BindingResult("pet")
        result.reject_value("birth_date", "typeMismatch", "invalid date")

        outcome = service.process_creation_form(
            Owner(id=1), Pet(name="Tom", type=types["cat"]), result
        )

        assert not outcome.saved
        repository.save.assert_not_called()


# =============================================================================
# Edit
# =============================================================================

class TestEdit:
    """Test editing an existing pet."""

    def test_init_update_form(self, service):
        owner = service.find_owner(6)
        assert service.init_update_form(owner, 8).name == "Max"

    def test_init_update_form_missing_pet(self, service):
        owner = service.find_owner(6)

        with pytest.raises(PetNotFoundError) as exc_info:
            service.init_update_form(owner, 1)

        assert str(exc_info.value) == "Pet not found with id: 1"

    def test_unchanged_name_is_not_duplicate(self, service):
        owner = service.find_owner(6)
        pet = service.find_pet(6, 7)

        outcome = service.process_update_form(owner, pet, BindingResult("pet"), 7)

        assert outcome.saved
        assert not outcome.result.has_errors

    def test_rename_to_sibling_name_rejected(self, service, repository):
        owner = service.find_owner(6)
        pet = service.find_pet(6, 7)
        pet.name = "max"

        outcome = service.process_update_form(owner, pet, BindingResult("pet"), 7)

        assert not outcome.saved
        assert outcome.result.get_field_error("name").code == DUPLICATE_PET_NAME
        assert repository.find_pet_by_id(7).name == "Samantha"

    def test_successful_edit_updates_fields_and_keeps_id(self, service, repository, types):
        owner = service.find_owner(6)
        pet = service.find_pet(6, 7)
        pet.name = "Sam"
        pet.birth_date = date(2013, 1, 2)
        pet.type = types["dog"]

        outcome = service.process_update_form(owner, pet, BindingResult("pet"), 7)

        assert outcome.redirect_to == "/owners/6"
        assert outcome.message == MSG_PET_EDITED

        stored = repository.find_pet_by_id(7)
        assert stored.id == 7
        assert stored.name == "Sam"
        assert stored.birth_date == date(2013, 1, 2)
        assert stored.type.name == "dog"
        assert [p.id for p in repository.find_by_id(6).pets] == [7, 8]

    def test_future_birth_date_rejected_on_edit(self, service, repository):
        owner = service.find_owner(6)
        pet = service.find_pet(6, 7)
        pet.birth_date = TODAY + timedelta(days=1)

        outcome = service.process_update_form(owner, pet, BindingResult("pet"), 7)

        assert outcome.result.get_field_error("birth_date").code == INVALID_BIRTH_DATE
        assert repository.find_pet_by_id(7).birth_date == date(2012, 9, 4)

    def test_pet_not_on_owner_raises_on_save(self, service, types):
        owner = service.find_owner(6)
        pet = service.find_pet(6, 1)  # Leo belongs to owner 1
        pet.name = "Intruder"
        pet.type = types["cat"]

        with pytest.raises(PetNotFoundError) as exc_info:
            service.process_update_form(owner, pet, BindingResult("pet"), 1)

        assert exc_info.value.details == {"pet_id": 1}

    def test_pet_deleted_from_store_raises(self, service, types):
        repository = MagicMock()
        repository.find_pet_by_id.return_value = None
        service = PetService(repository, today=lambda: TODAY)

        owner = Owner(id=1, pets=[Pet(id=5, name="Iggy", type=types["lizard"])])
        pet = Pet(id=5, name="Iggy", type=types["lizard"])

        with pytest.raises(PetNotFoundError):
            service.process_update_form(owner, pet, BindingResult("pet"), 5)

        repository.save.assert_not_called()
