# =============================================================================
# lib/ - Storage Backends
# =============================================================================
# This package contains the OwnerRepository implementations:
# - memory.py: In-memory store, optionally seeded with sample data
# - supabase_client.py: Supabase (Postgres) store and client singleton
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.memory import InMemoryOwnerRepository
from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    SupabaseOwnerRepository,
)

__all__ = [
    # Memory
    "InMemoryOwnerRepository",
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "SupabaseOwnerRepository",
]
