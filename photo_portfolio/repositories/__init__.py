"""Data access layer - repositories."""
from .base import BaseRepository
from .photo_repository import PhotoRepository

__all__ = [
    "BaseRepository",
    "PhotoRepository",
]
