# =============================================================================
# core/models/pet.py - Pet and PetType Schemas
# =============================================================================
# - PetType: shared reference data (cat, dog, ...). Read-only for the web layer.
# - Pet: created transient by a form submission (no id), persisted on first
#   save, then updated in place on edit.
# =============================================================================

from datetime import date

from pydantic import BaseModel, Field


class PetType(BaseModel):
    """
    Kind of animal a pet is.

    Pet types are referenced by many pets and owned by none.
    """

    id: int | None = Field(
        default=None,
        description="Pet type identifier"
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=80,
        description="Display name, also used as the form value"
    )

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.name


class Pet(BaseModel):
    """
    A pet owned by an owner.

    Fields are optional at the model level because a pet is bound from a form
    before it is validated; the required-field rules live in PetValidator.

    Example:
        {
            "id": 7,
            "name": "Samantha",
            "birth_date": "2012-09-04",
            "type": {"id": 1, "name": "cat"}
        }
    """

    # Identity (None until first save)
    id: int | None = Field(
        default=None,
        description="Pet identifier, None while transient"
    )

    name: str | None = Field(
        default=None,
        description="Pet name, unique per owner"
    )

    birth_date: date | None = Field(
        default=None,
        description="Date of birth, never in the future"
    )

    type: PetType | None = Field(
        default=None,
        description="Kind of animal"
    )

    model_config = {
        "validate_assignment": True,
        "from_attributes": True,
    }

    @property
    def is_new(self) -> bool:
        """True while the pet has not been persisted."""
        return self.id is None
