# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the web application:
# - main.py: App entry point, logging, error handlers, router mounting
# - config.py: Environment variable loading and settings
# - dependencies.py: Per-request resolution (repository, owner, pet)
# - exceptions.py: Not-found exceptions and the error page handlers
# - routers/: Page and endpoint definitions organized by feature
# - templates/: Jinja2 views
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"
