# =============================================================================
# core/validation.py - Field Errors and the Pet Validator
# =============================================================================
# Validation failures on a submitted form are collected, not raised: the
# handler keeps the user on the form and shows every message at once.
#
# - BindingResult: accumulator shared by the binder, the validator and the
#   business rules of the pet flows
# - PetValidator: required-field rules for a Pet candidate
# =============================================================================

from dataclasses import dataclass, field
from typing import Any

from core.models import Pet


REQUIRED = "required"
TYPE_MISMATCH = "typeMismatch"


@dataclass(frozen=True)
class FieldError:
    """A rejected value on a single form field."""
    field: str
    code: str
    message: str
    rejected_value: Any = None


@dataclass
class BindingResult:
    """
    Errors collected while binding and validating one submitted object.

    Example:
        result = BindingResult("pet")
        result.reject_value("name", "required", "is required")
        result.has_field_errors("name")  # True
    """

    object_name: str
    field_errors: list[FieldError] = field(default_factory=list)

    def reject_value(
        self,
        field_name: str,
        code: str,
        message: str,
        rejected_value: Any = None,
    ) -> None:
        self.field_errors.append(
            FieldError(field_name, code, message, rejected_value)
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.field_errors)

    @property
    def error_count(self) -> int:
        return len(self.field_errors)

    def has_field_errors(self, field_name: str) -> bool:
        return any(e.field == field_name for e in self.field_errors)

    def get_field_error(self, field_name: str) -> FieldError | None:
        """First error recorded for a field, or None."""
        for error in self.field_errors:
            if error.field == field_name:
                return error
        return None

    def get_field_errors(self, field_name: str) -> list[FieldError]:
        return [e for e in self.field_errors if e.field == field_name]


class PetValidator:
    """
    Required-field rules for a Pet.

    A pet needs a non-blank name and a type. Runs before the business rules
    of the pet flows and records into the same BindingResult.
    """

    def validate(self, pet: Pet, result: BindingResult) -> None:
        if not pet.name or not pet.name.strip():
            result.reject_value("name", REQUIRED, "is required", pet.name)

        # A type that failed to bind already has a typeMismatch error
        if pet.type is None and not result.has_field_errors("type"):
            result.reject_value("type", REQUIRED, "is required")
