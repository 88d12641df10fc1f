# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - owners.py: Owner detail page
# - pets.py: Pet creation and edit forms
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import owners
from . import pets

__all__ = [
    "health",
    "owners",
    "pets",
]
