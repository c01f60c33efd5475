"""Access to the image files behind photo records."""
import logging
from pathlib import Path
from typing import Optional, Protocol, Tuple

from PIL import Image as PILImage, UnidentifiedImageError

from photo_portfolio.core.exceptions import AssetMissingException
from photo_portfolio.assets.paths import photo_relative_path

logger = logging.getLogger(__name__)


class AssetExistenceChecker(Protocol):
    """Answers whether the image file for a (category, filename) pair exists."""

    def exists(self, category: str, filename: str) -> bool:
        ...


class ImageAssetService(Protocol):
    """External image service consulted when building page views."""

    def dimensions(self, relative_path: str) -> Optional[Tuple[int, int]]:
        """Width and height of the image, or None if it cannot be read."""
        ...

    def optimized_variant(self, relative_path: str, width: int, quality: int) -> Optional[str]:
        """Public path of a resized variant, or None if none is available."""
        ...


class FilesystemAssetChecker:
    """Checks for image files under ``images_dir/{category}/{filename}``."""

    def __init__(self, images_dir: Path):
        self.images_dir = Path(images_dir)

    def file_path(self, category: str, filename: str) -> Path:
        """Full path of a photo file."""
        return self.images_dir / photo_relative_path(category, filename)

    def exists(self, category: str, filename: str) -> bool:
        return self.file_path(category, filename).is_file()

    def require(self, category: str, filename: str) -> Path:
        """
        Path of an existing photo file.

        Raises:
            AssetMissingException: If the file does not exist
        """
        if not self.exists(category, filename):
            raise AssetMissingException(photo_relative_path(category, filename))
        return self.file_path(category, filename)


class LocalImageAssetService:
    """Reads image dimensions from the local asset directory with Pillow."""

    def __init__(self, images_dir: Path):
        self.images_dir = Path(images_dir)

    def dimensions(self, relative_path: str) -> Optional[Tuple[int, int]]:
        path = self.images_dir / relative_path
        if not path.is_file():
            return None
        try:
            with PILImage.open(path) as img:
                return img.size
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not read image dimensions of {path}: {e}")
            return None

    def optimized_variant(self, relative_path: str, width: int, quality: int) -> Optional[str]:
        # Resizing belongs to the site generator; serve the original.
        return None
