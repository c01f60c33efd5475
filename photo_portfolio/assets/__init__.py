"""Photo asset naming and access to the image files."""
from .paths import photo_alt, photo_path, photo_relative_path
from .service import (
    AssetExistenceChecker,
    FilesystemAssetChecker,
    ImageAssetService,
    LocalImageAssetService,
)

__all__ = [
    "photo_alt",
    "photo_path",
    "photo_relative_path",
    "AssetExistenceChecker",
    "FilesystemAssetChecker",
    "ImageAssetService",
    "LocalImageAssetService",
]
