"""Photo Pydantic schemas."""
import datetime as dt
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from photo_portfolio.models.database.photo import (
    CATEGORIES,
    CATEGORY_FEATURED_MAX,
    IMAGE_EXTENSIONS,
)

# Columns a batch file may set on creation, besides the required ones
OPTIONAL_COLUMNS = (
    "sub_category",
    "date",
    "homepage_featured",
    "category_featured",
    "country_featured",
)
REQUIRED_COLUMNS = ("filename", "category", "caption", "location", "country")
FEATURED_COLUMNS = ("homepage_featured", "category_featured", "country_featured")
TEXT_COLUMNS = ("caption", "location", "country")

# filename identifies a row and is never rewritten
UPDATABLE_COLUMNS = ("category",) + TEXT_COLUMNS + OPTIONAL_COLUMNS
IDENTITY_COLUMNS = ("id", "filename")


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def _label(info: ValidationInfo) -> str:
    return info.field_name.capitalize()


def _known_category(value: str) -> str:
    if value not in CATEGORIES:
        raise PydanticCustomError(
            "category", "Must be one of: {choices}", {"choices": ", ".join(CATEGORIES)}
        )
    return value


def _image_filename(value: str) -> str:
    if not value.lower().endswith(IMAGE_EXTENSIONS):
        raise PydanticCustomError(
            "filename_extension",
            "Must end with {extensions}",
            {"extensions": ", ".join(IMAGE_EXTENSIONS)},
        )
    return value


class PhotoBase(BaseModel):
    """Base photo schema with the editable fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    category: str = Field(..., description="Portfolio category")
    caption: str = Field(..., description="Caption, part of the alt text")
    location: str = Field(..., description="Location within the country")
    country: str = Field(..., description="Country")
    sub_category: Optional[str] = Field(default=None, description="Group within the category page")
    date: Optional[dt.date] = Field(default=None, description="Date the photo was taken")
    homepage_featured: Optional[int] = Field(
        default=None, ge=0, description="Homepage rank (1 is the hero, 0 is not featured)"
    )
    category_featured: Optional[int] = Field(
        default=None,
        ge=0,
        le=CATEGORY_FEATURED_MAX,
        description="1=category navigation, 2-4=overview order, 0=not featured"
    )
    country_featured: Optional[int] = Field(
        default=None, ge=0, le=1, description="1=country navigation photo"
    )

    @field_validator("category", "caption", "location", "country", mode="before")
    @classmethod
    def required_value(cls, v, info: ValidationInfo):
        if is_blank(v):
            raise PydanticCustomError("required", "{label} is required", {"label": _label(info)})
        return v

    @field_validator("sub_category", "date", *FEATURED_COLUMNS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return None if is_blank(v) else v

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str) -> str:
        return _known_category(v)


class PhotoCreate(PhotoBase):
    """Schema for creating a new photo."""

    filename: str = Field(..., max_length=255, description="Image filename")

    @field_validator("filename", mode="before")
    @classmethod
    def filename_present(cls, v, info: ValidationInfo):
        if is_blank(v):
            raise PydanticCustomError("required", "{label} is required", {"label": _label(info)})
        return v

    @field_validator("filename")
    @classmethod
    def check_extension(cls, v: str) -> str:
        return _image_filename(v)


class PhotoUpdate(BaseModel):
    """
    Schema for a partial photo update.

    ``id`` or ``filename`` names the photo; every other explicitly set field
    is a change. Setting an optional field to None (or blank) clears it,
    while the fields the alt text is built from can never be cleared.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = Field(default=None, ge=1, description="Photo ID")
    filename: Optional[str] = Field(default=None, max_length=255, description="Image filename")
    category: Optional[str] = None
    caption: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    sub_category: Optional[str] = None
    date: Optional[dt.date] = None
    homepage_featured: Optional[int] = Field(default=None, ge=0)
    category_featured: Optional[int] = Field(default=None, ge=0, le=CATEGORY_FEATURED_MAX)
    country_featured: Optional[int] = Field(default=None, ge=0, le=1)

    @field_validator("category", "caption", "location", "country", mode="before")
    @classmethod
    def not_cleared(cls, v, info: ValidationInfo):
        if is_blank(v):
            raise PydanticCustomError(
                "required",
                "{label} cannot be empty (required for alt text)",
                {"label": _label(info)},
            )
        return v

    @field_validator("id", "filename", "sub_category", "date", *FEATURED_COLUMNS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return None if is_blank(v) else v

    @field_validator("category")
    @classmethod
    def known_category(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _known_category(v)

    @field_validator("filename")
    @classmethod
    def check_extension(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _image_filename(v)

    def identifier(self) -> Optional[Union[int, str]]:
        """ID when given, else the filename."""
        return self.id if self.id is not None else self.filename

    def changes(self) -> dict:
        """Explicitly supplied fields mapped to their new values."""
        return self.model_dump(exclude_unset=True, exclude=set(IDENTITY_COLUMNS))


class PhotoRead(PhotoBase):
    """Schema for photos read back from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    created_at: dt.datetime
    updated_at: dt.datetime
