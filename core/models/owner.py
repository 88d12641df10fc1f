# =============================================================================
# core/models/owner.py - Owner Aggregate
# =============================================================================
# The Owner is the aggregate root of the clinic: it owns its pets, and the
# create path persists a new pet by saving the owner.
#
# Pets are kept in insertion order (that is the order the owner page lists
# them in). Name lookups are case-insensitive, which is the rule the pet forms
# use to keep pet names unique per owner.
# =============================================================================

from pydantic import BaseModel, Field

from .pet import Pet


class Owner(BaseModel):
    """
    A pet owner and the pets they own.

    Example:
        {
            "id": 1,
            "first_name": "George",
            "last_name": "Franklin",
            "address": "110 W. Liberty St.",
            "city": "Madison",
            "telephone": "6085551023",
            "pets": [{"id": 1, "name": "Leo", ...}]
        }
    """

    # Identity (None until the owner row exists)
    id: int | None = Field(
        default=None,
        description="Owner identifier"
    )

    first_name: str = Field(
        default="",
        max_length=30,
        description="Owner first name"
    )

    last_name: str = Field(
        default="",
        max_length=30,
        description="Owner last name"
    )

    address: str = Field(
        default="",
        max_length=255,
        description="Street address"
    )

    city: str = Field(
        default="",
        max_length=80,
        description="City"
    )

    telephone: str = Field(
        default="",
        max_length=20,
        description="Contact phone number (digits only)"
    )

    # Owned pets, insertion order preserved
    pets: list[Pet] = Field(
        default_factory=list,
        description="Pets owned by this owner"
    )

    model_config = {
        "validate_assignment": True,
        "from_attributes": True,
    }

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def add_pet(self, pet: Pet) -> None:
        """
        Add a pet to this owner.

        Only transient pets are appended; a persisted pet already belongs to
        an owner and is updated through its own id instead.
        """
        if pet.is_new:
            self.pets.append(pet)

    def get_pet(self, name: str | None, ignore_new: bool = False) -> Pet | None:
        """
        Find a pet by name (case-insensitive).

        Args:
            name: Pet name to look for
            ignore_new: Skip pets that have not been persisted yet

        Returns:
            The first matching pet, or None
        """
        if not name:
            return None

        wanted = name.lower()
        for pet in self.pets:
            if ignore_new and pet.is_new:
                continue
            if pet.name and pet.name.lower() == wanted:
                return pet
        return None

    def get_pet_by_id(self, pet_id: int | None) -> Pet | None:
        """Find a persisted pet by id."""
        if pet_id is None:
            return None

        for pet in self.pets:
            if not pet.is_new and pet.id == pet_id:
                return pet
        return None
