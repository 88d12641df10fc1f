# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides a freshly seeded repository per test
# - Provides a TestClient wired to that repository
# =============================================================================

import os
from datetime import date

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("REPOSITORY_BACKEND", "memory")
os.environ.setdefault("SEED_SAMPLE_DATA", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_repository
from app.main import app
from core.services.pet_service import PetService
from lib.memory import InMemoryOwnerRepository


# Fixed "today" for the birth date rule
TODAY = date(2024, 6, 15)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def repository():
    """Repository seeded with the sample owners (ids 1-10) and pets (ids 1-13)."""
    return InMemoryOwnerRepository.with_sample_data()


@pytest.fixture
def empty_repository():
    """Repository with pet types only."""
    repo = InMemoryOwnerRepository()
    for name in ("cat", "dog", "hamster"):
        repo.add_pet_type(name)
    return repo


@pytest.fixture
def service(repository):
    """PetService over the seeded repository with a fixed clock."""
    return PetService(repository, today=lambda: TODAY)


@pytest.fixture
def types(repository):
    """Pet types keyed by name."""
    return {t.name: t for t in repository.find_pet_types()}


@pytest.fixture
def client(repository):
    """TestClient whose requests use the seeded repository."""
    app.dependency_overrides[get_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
