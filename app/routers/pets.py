# =============================================================================
# app/routers/pets.py - Pet Create/Edit Pages
# =============================================================================
# Server-rendered forms for adding a pet to an owner and editing one.
# Mounted under /owners/{owner_id}.
#
# Endpoints:
# - GET  /pets/new:            blank creation form
# - POST /pets/new:            add the pet, redirect to the owner page
# - GET  /pets/{pet_id}/edit:  prefilled edit form
# - POST /pets/{pet_id}/edit:  save changes, redirect to the owner page
#
# A rejected submission re-renders the form (200) with the user's input and
# the field messages. Nothing is saved in that case.
# =============================================================================

import logging
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Form, Path, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.config import settings
from app.dependencies import (
    ExistingPetDep,
    NewPetDep,
    OwnerDep,
    PetServiceDep,
    PetTypesDep,
)
from app.templating import templates
from core.binding import bind_pet
from core.models import Owner, Pet, PetType
from core.services.pet_service import PetFormOutcome, VIEWS_PETS_CREATE_OR_UPDATE_FORM
from core.validation import BindingResult

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Responses
# =============================================================================

def render_pet_form(
    request: Request,
    owner: Owner,
    pet: Pet,
    types: list[PetType],
    result: BindingResult | None = None,
    form: dict[str, str] | None = None,
) -> HTMLResponse:
    """Render the create/edit form with its model."""
    return templates.TemplateResponse(
        request,
        VIEWS_PETS_CREATE_OR_UPDATE_FORM,
        {
            "owner": owner,
            "pet": pet,
            "types": types,
            "errors": result or BindingResult("pet"),
            "form": form or {},
        },
    )


def redirect_with_message(outcome: PetFormOutcome) -> RedirectResponse:
    """Redirect after a successful save, carrying the message in a flash cookie."""
    response = RedirectResponse(outcome.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    if outcome.message:
        response.set_cookie(
            settings.FLASH_COOKIE_NAME,
            quote(outcome.message),
            max_age=60,
            httponly=True,
            samesite="lax",
        )
    return response


# Submitted pet fields; FastAPI reads an empty input as None
NameForm = Annotated[str | None, Form(description="Pet name")]
BirthDateForm = Annotated[str | None, Form(description="Birth date, yyyy-MM-dd")]
TypeForm = Annotated[str | None, Form(alias="type", description="Pet type name")]


def pet_form(name: str | None, birth_date: str | None, pet_type: str | None) -> dict[str, str]:
    """Submitted values as the binder and the re-rendered form see them."""
    return {
        "name": name or "",
        "birth_date": birth_date or "",
        "type": pet_type or "",
    }


# =============================================================================
# Create
# =============================================================================

@router.get("/pets/new", response_class=HTMLResponse)
async def init_creation_form(
    request: Request,
    owner: OwnerDep,
    types: PetTypesDep,
    service: PetServiceDep,
):
    """Show the blank creation form."""
    pet = service.init_creation_form(owner)
    return render_pet_form(request, owner, pet, types)


@router.post("/pets/new", response_class=HTMLResponse)
async def process_creation_form(
    request: Request,
    owner: OwnerDep,
    pet: NewPetDep,
    types: PetTypesDep,
    service: PetServiceDep,
    name: NameForm = None,
    birth_date: BirthDateForm = None,
    pet_type: TypeForm = None,
):
    """
    Add a new pet to the owner.

    Redirects to the owner page on success; shows the form again otherwise.
    """
    form = pet_form(name, birth_date, pet_type)
    result = BindingResult("pet")
    bind_pet(form, pet, types, result)

    outcome = service.process_creation_form(owner, pet, result)
    if not outcome.saved:
        return render_pet_form(request, owner, outcome.pet, types, outcome.result, form)

    return redirect_with_message(outcome)


# =============================================================================
# Edit
# =============================================================================

@router.get("/pets/{pet_id}/edit", response_class=HTMLResponse)
async def init_update_form(
    request: Request,
    pet_id: Annotated[int, Path(description="Pet id")],
    owner: OwnerDep,
    types: PetTypesDep,
    service: PetServiceDep,
):
    """
    Show the edit form prefilled with the pet.

    An unknown pet id raises PetNotFoundError (404 page).
    """
    pet = service.init_update_form(owner, pet_id)
    return render_pet_form(request, owner, pet, types)


@router.post("/pets/{pet_id}/edit", response_class=HTMLResponse)
async def process_update_form(
    request: Request,
    pet_id: Annotated[int, Path(description="Pet id")],
    owner: OwnerDep,
    pet: ExistingPetDep,
    types: PetTypesDep,
    service: PetServiceDep,
    name: NameForm = None,
    birth_date: BirthDateForm = None,
    pet_type: TypeForm = None,
):
    """
    Save changes to the pet.

    Redirects to the owner page on success; shows the form again otherwise.
    """
    form = pet_form(name, birth_date, pet_type)
    result = BindingResult("pet")
    bind_pet(form, pet, types, result)

    outcome = service.process_update_form(owner, pet, result, pet_id)
    if not outcome.saved:
        return render_pet_form(request, owner, outcome.pet, types, outcome.result, form)

    return redirect_with_message(outcome)
