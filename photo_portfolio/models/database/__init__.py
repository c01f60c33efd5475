"""SQLAlchemy ORM models."""
from .photo import Photo, CATEGORIES, IMAGE_EXTENSIONS

__all__ = [
    "Photo",
    "CATEGORIES",
    "IMAGE_EXTENSIONS",
]
