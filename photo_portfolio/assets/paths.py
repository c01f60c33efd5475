"""Asset path and alt text derivation for photos."""
from typing import Optional

from photo_portfolio.core.config import settings


def photo_relative_path(category: str, filename: str) -> str:
    """
    Location of a photo inside the asset root.

    Every other path (public URL, file on disk) is built from this one.
    """
    return f"{category}/{filename}"


def photo_path(photo, asset_root: Optional[str] = None) -> str:
    """
    Public path of a photo: ``{asset_root}/{category}/{filename}``.

    Args:
        photo: Anything with ``category`` and ``filename`` attributes
        asset_root: Path prefix, defaults to the configured asset URL prefix

    Returns:
        Path string
    """
    root = settings.asset_url_prefix if asset_root is None else asset_root
    return f"{root.rstrip('/')}/{photo_relative_path(photo.category, photo.filename)}"


def photo_alt(photo) -> str:
    """Accessibility text: ``{country}, {location} - {caption}``."""
    return f"{photo.country}, {photo.location} - {photo.caption}"
