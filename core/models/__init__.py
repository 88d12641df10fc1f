# =============================================================================
# core/models/ - Pydantic Domain Models
# =============================================================================
# This package contains the clinic's domain entities:
# - pet.py: Pet and PetType
# - owner.py: Owner aggregate (owns its pets)
#
# The same models are handed to the templates, so they double as the
# "model" the views render.
# =============================================================================

from .pet import Pet, PetType
from .owner import Owner

__all__ = [
    "Owner",
    "Pet",
    "PetType",
]
