# =============================================================================
# core/binding.py - Form Binding
# =============================================================================
# Copies submitted request parameters onto a Pet.
#
# Conversion problems (a date that doesn't parse, a type nobody knows) are
# recorded as typeMismatch field errors instead of raised, so the form comes
# back with the user's input and a message next to the field.
#
# The pet id is never read from the form: identity comes from the URL.
# =============================================================================

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from core.models import Pet, PetType
from core.validation import BindingResult, TYPE_MISMATCH

logger = logging.getLogger(__name__)

# Fields a pet form is allowed to set
PET_FIELDS = ("name", "birth_date", "type")


def _text(form: Mapping[str, Any], key: str) -> str | None:
    value = form.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def bind_pet(
    form: Mapping[str, Any],
    pet: Pet,
    types: Iterable[PetType],
    result: BindingResult,
) -> Pet:
    """
    Bind form fields onto a pet.

    Args:
        form: Submitted parameters (name, birth_date, type)
        pet: Target instance, modified in place
        types: Known pet types; the form submits a type by name
        result: Collects conversion errors

    Returns:
        The same pet, for chaining
    """
    pet.name = _text(form, "name")

    raw_birth_date = _text(form, "birth_date")
    if raw_birth_date is None:
        pet.birth_date = None
    else:
        try:
            pet.birth_date = date.fromisoformat(raw_birth_date)
        except ValueError:
            pet.birth_date = None
            result.reject_value(
                "birth_date", TYPE_MISMATCH, "invalid date", raw_birth_date
            )

    raw_type = _text(form, "type")
    if raw_type is None:
        pet.type = None
    else:
        by_name = {t.name.lower(): t for t in types}
        pet_type = by_name.get(raw_type.lower())
        if pet_type is None:
            pet.type = None
            result.reject_value(
                "type", TYPE_MISMATCH, f"unknown pet type: {raw_type}", raw_type
            )
        else:
            pet.type = pet_type

    ignored = [key for key in form.keys() if key not in PET_FIELDS]
    if ignored:
        logger.debug(f"Ignored non-bindable pet fields: {ignored}")

    return pet
