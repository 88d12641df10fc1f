# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the PetClinic web app.
# It configures the FastAPI application with logging, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload --port 8080
#   poetry run python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    PetClinicException,
    petclinic_exception_handler,
    render_error,
    validation_exception_handler,
)
from app.routers import health, owners, pets

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the configuration on startup and a line on shutdown.
    """
    logger.info(f"Starting PetClinic in {settings.ENVIRONMENT} mode")
    logger.info(f"Repository backend: {settings.REPOSITORY_BACKEND}")

    yield

    logger.info("Shutting down PetClinic")


# Create FastAPI application
app = FastAPI(
    title="PetClinic",
    description="""
## Veterinary Clinic Demo

Server-rendered pages for registering pets under their owners.

| Page | Path |
|------|------|
| Owner details | `/owners/{ownerId}` |
| Add pet | `/owners/{ownerId}/pets/new` |
| Edit pet | `/owners/{ownerId}/pets/{petId}/edit` |
""",
    version=__version__,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Owners",
            "description": "Owner detail page",
        },
        {
            "name": "Pets",
            "description": "Add and edit an owner's pets",
        },
        {
            "name": "Health",
            "description": "Health and readiness checks",
        },
    ],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PetClinicException)
async def handle_petclinic_exception(request: Request, exc: PetClinicException):
    """Handle owner/pet not found and other clinic exceptions."""
    return await petclinic_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed path parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors (unknown route, wrong method) as pages."""
    return render_error(request, str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return render_error(request, "An unexpected error occurred", 500)


# =============================================================================
# Routers
# =============================================================================

# Owner detail page (redirect target of the pet forms)
app.include_router(
    owners.router,
    prefix="/owners",
    tags=["Owners"]
)

# Pet create/edit forms
app.include_router(
    pets.router,
    prefix="/owners/{owner_id}",
    tags=["Pets"]
)

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns app info.
    """
    return {
        "name": "PetClinic",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
