# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic domain entities (Owner, Pet, PetType)
# - repository.py: Storage interface the web layer depends on
# - binding.py: Form parameters -> Pet
# - validation.py: Field error accumulation and the pet validator
# - services/: The pet creation and edit flows
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
