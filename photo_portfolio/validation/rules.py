"""
Validation shared by every mutation entry point.

Field rules are declared once, on the photo schemas. This module runs them
and turns each pydantic error into a FieldError carrying the input row, so
callers can report every violation of a batch at once. Only the asset check,
which needs the image directory, is written here.
"""
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from photo_portfolio.models.schemas.photo import PhotoCreate, PhotoUpdate, is_blank
from photo_portfolio.models.schemas.validation import FieldError
from photo_portfolio.assets.service import AssetExistenceChecker
from photo_portfolio.assets.paths import photo_relative_path

# Appended to range and type errors of the curation columns
FEATURED_HINTS = {
    "homepage_featured": "1=hero, 2+=homepage grid order, 0=not featured",
    "category_featured": "1=navigation, 2-4=portfolio order, 0=not featured",
    "country_featured": "0=not country nav photo, 1=country nav photo",
}


def field_errors(error: ValidationError, row: Optional[int] = None) -> List[FieldError]:
    """
    One FieldError per pydantic error.

    Args:
        error: Validation error raised by a photo schema
        row: Input row number for batch reporting

    Returns:
        Field errors in schema field order
    """
    errors = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"]) or "row"
        message = detail["msg"]
        if detail["type"] == "missing":
            message = f"{field.capitalize()} is required"
        elif field in FEATURED_HINTS:
            message = f"{message} ({FEATURED_HINTS[field]})"
        errors.append(FieldError(field=field, message=message, row=row))
    return errors


def validate_asset_exists(
    filename: str,
    category: str,
    checker: AssetExistenceChecker,
    row: Optional[int] = None
) -> Optional[FieldError]:
    """The image file must exist in the asset directory."""
    if not checker.exists(category, filename):
        return FieldError(
            field="filename",
            message=f"Photo file not found at {photo_relative_path(category, filename)}",
            row=row,
        )
    return None


def check_create(
    data: Mapping[str, Any],
    row: Optional[int] = None,
    checker: Optional[AssetExistenceChecker] = None
) -> Tuple[Optional[PhotoCreate], List[FieldError]]:
    """
    Validate one creation input.

    The asset check runs whenever filename and category are themselves
    valid, so a bad caption and a missing file are reported together.

    Args:
        data: Column name to raw value
        row: Input row number for batch reporting
        checker: Asset existence capability; the file check is skipped without one

    Returns:
        The parsed photo (None if a field is invalid) and every violation found
    """
    try:
        create = PhotoCreate.model_validate(dict(data))
        errors = []
    except ValidationError as e:
        create = None
        errors = field_errors(e, row)

    invalid = {error.field for error in errors}
    if checker is not None and not invalid & {"filename", "category"}:
        error = validate_asset_exists(
            str(data["filename"]).strip(), str(data["category"]).strip(), checker, row
        )
        if error:
            errors.append(error)
    return create, errors


def check_update(
    data: Mapping[str, Any],
    row: Optional[int] = None
) -> Tuple[Optional[PhotoUpdate], List[FieldError]]:
    """
    Validate one update input.

    Absent keys are not validated (they are left unchanged). The asset check
    needs the stored row and is done by the caller.

    Returns:
        The parsed update (None when invalid) and every violation found
    """
    if is_blank(data.get("id")) and is_blank(data.get("filename")):
        return None, [FieldError(
            field="id/filename",
            message="Either id or filename is required to identify the photo",
            row=row,
        )]
    try:
        return PhotoUpdate.model_validate(dict(data)), []
    except ValidationError as e:
        return None, field_errors(e, row)


def validate_create_fields(
    data: Mapping[str, Any],
    row: Optional[int] = None,
    checker: Optional[AssetExistenceChecker] = None
) -> List[FieldError]:
    """Every violation of one creation input (empty when valid)."""
    return check_create(data, row, checker)[1]


def validate_update_fields(data: Mapping[str, Any], row: Optional[int] = None) -> List[FieldError]:
    """Every violation of one update input (empty when valid)."""
    return check_update(data, row)[1]


def validate_field(field: str, value: Any) -> Optional[FieldError]:
    """
    First violation of a single field value, for interactive prompts.

    Blank values pass for optional fields and fail for the alt text fields.
    """
    try:
        PhotoUpdate.model_validate({field: value})
    except ValidationError as e:
        return field_errors(e)[0]
    return None
