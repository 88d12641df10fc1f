# =============================================================================
# app/exceptions.py - Custom Exceptions and Error Pages
# =============================================================================
# Centralized exception handling for the web app.
#
# "Entity absent" failures are raised anywhere in the request pipeline and
# turned into a rendered error page by the handlers below. Form validation
# problems are NOT exceptions: they are collected in a BindingResult and the
# form is shown again.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse

from app.templating import templates

logger = logging.getLogger(__name__)

ERROR_VIEW = "error.html"


class PetClinicException(Exception):
    """
    Base exception for the clinic web app.

    All custom exceptions inherit from this class.
    Carries the status code and the message shown on the error page.
    """

    def __init__(
        self,
        message: str,
        code: str = "PETCLINIC_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for the handler's log line."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Not Found Exceptions
# =============================================================================

class OwnerNotFoundError(PetClinicException):
    """Raised when an owner id has no matching record."""

    def __init__(self, owner_id: int):
        super().__init__(
            message=f"Owner not found with id: {owner_id}",
            code="OWNER_NOT_FOUND",
            status_code=404,
            suggestion="Check the owner id in the address",
            details={"owner_id": owner_id}
        )


class PetNotFoundError(PetClinicException):
    """Raised when a pet id has no matching record, on the owner or in storage."""

    def __init__(self, pet_id: int | None):
        super().__init__(
            message=f"Pet not found with id: {pet_id}",
            code="PET_NOT_FOUND",
            status_code=404,
            suggestion="Go back to the owner page and pick one of the listed pets",
            details={"pet_id": pet_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def render_error(
    request: Request,
    message: str,
    status_code: int,
    suggestion: str | None = None,
) -> HTMLResponse:
    """Render the generic error view with `errorMessage` in the model."""
    return templates.TemplateResponse(
        request,
        ERROR_VIEW,
        {
            "errorMessage": message,
            "suggestion": suggestion,
            "status_code": status_code,
        },
        status_code=status_code,
    )


async def petclinic_exception_handler(
    request: Request,
    exc: PetClinicException
) -> HTMLResponse:
    """
    Convert a PetClinicException to an error page.

    The page gets the exception message as `errorMessage` and the response
    carries the exception's status code (404 for both not-found kinds).
    """
    logger.info(f"{request.method} {request.url.path} failed: {exc.to_dict()}")
    return render_error(request, exc.message, exc.status_code, exc.suggestion)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> HTMLResponse:
    """
    Handle malformed path or query parameters (e.g. /owners/abc).

    Renders the error page with 400 instead of a JSON body.
    """
    fields = [
        ".".join(str(part) for part in error.get("loc", ())[1:])
        for error in exc.errors()
    ]
    message = f"Invalid request parameter: {', '.join(f for f in fields if f) or 'unknown'}"
    logger.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return render_error(request, message, 400)
