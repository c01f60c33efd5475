"""Validation rule set for photo mutations."""
from photo_portfolio.models.schemas.photo import is_blank

from .rules import (
    FEATURED_HINTS,
    check_create,
    check_update,
    field_errors,
    validate_asset_exists,
    validate_create_fields,
    validate_field,
    validate_update_fields,
)

__all__ = [
    "FEATURED_HINTS",
    "check_create",
    "check_update",
    "field_errors",
    "is_blank",
    "validate_asset_exists",
    "validate_create_fields",
    "validate_field",
    "validate_update_fields",
]
