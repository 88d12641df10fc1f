# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the PetClinic web app:
# - test_models.py: Owner/Pet/PetType behavior
# - test_validation.py: Form binding and the pet validator
# - test_pet_service.py: Pet create/edit business rules
# - test_memory_repository.py: In-memory store
# - test_supabase_repository.py: Supabase store with a mocked client
# - test_pets_routes.py: HTTP flows, redirects and error pages
#
# Run tests with: poetry run pytest
# =============================================================================
