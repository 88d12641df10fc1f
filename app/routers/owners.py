# =============================================================================
# app/routers/owners.py - Owner Detail Page
# =============================================================================
# GET /owners/{owner_id}: the owner, their pets, and the message left by the
# last pet form (read from the flash cookie, then cleared).
# =============================================================================

from urllib.parse import unquote

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.config import settings
from app.dependencies import OwnerDep
from app.templating import templates

router = APIRouter()


@router.get("/{owner_id}", response_class=HTMLResponse)
async def show_owner(request: Request, owner: OwnerDep):
    """Show an owner and their pets."""
    flash = request.cookies.get(settings.FLASH_COOKIE_NAME)
    message = unquote(flash) if flash else None

    response = templates.TemplateResponse(
        request,
        "owners/ownerDetails.html",
        {"owner": owner, "message": message},
    )
    if flash:
        response.delete_cookie(settings.FLASH_COOKIE_NAME)
    return response
