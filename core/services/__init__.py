# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .pet_service import PetFormOutcome, PetService

__all__ = [
    "PetFormOutcome",
    "PetService",
]
