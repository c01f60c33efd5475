"""Read-side queries producing the photo sets each page needs."""
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from photo_portfolio.core.config import Settings, settings as default_settings
from photo_portfolio.core.exceptions import InvalidArgumentException
from photo_portfolio.models.database import CATEGORIES, Photo
from photo_portfolio.models.schemas import PhotoGroup, PhotoRead
from photo_portfolio.repositories import PhotoRepository

# Group for photos without a sub-category; always listed last
OTHER_GROUP = "Other"


def _read(photos: List[Photo]) -> List[PhotoRead]:
    return [PhotoRead.model_validate(photo) for photo in photos]


def group_photos(
    photos: List[PhotoRead],
    key: Callable[[PhotoRead], Optional[str]],
    fallback: Optional[str] = None,
) -> List[PhotoGroup]:
    """
    Group photos by a key, keeping their order inside each group.

    Groups are sorted by name. Photos whose key is empty go into the
    ``fallback`` group, which is sorted last.

    Args:
        photos: Photos in display order
        key: Group name of a photo
        fallback: Name of the group for photos without a key
    """
    groups = {}
    for photo in photos:
        name = key(photo) or fallback
        groups.setdefault(name, []).append(photo)

    ordered = sorted(groups, key=lambda name: (name == fallback, name))
    return [PhotoGroup(name=name, photos=groups[name]) for name in ordered]


class PhotoQueryService:
    """
    Page queries over the photo store.

    Every method is read-only. Empty results are valid; only malformed
    arguments raise.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        """
        Initialize query service.

        Args:
            db: Database session
            settings: Application settings (homepage slot count)
        """
        self.db = db
        self.settings = settings or default_settings
        self.repo = PhotoRepository(db)

    @staticmethod
    def all_categories() -> List[str]:
        """Portfolio categories in display order."""
        return list(CATEGORIES)

    def homepage_featured(self, limit: Optional[int] = None) -> List[PhotoRead]:
        """
        Homepage photos: slot 1 is the hero, the rest fill the grid.

        Args:
            limit: Slot count, defaults to the configured ``homepage_slots``

        Raises:
            InvalidArgumentException: If limit is not a positive integer
        """
        slots = self.settings.homepage_slots if limit is None else limit
        if isinstance(slots, bool) or not isinstance(slots, int) or slots < 1:
            raise InvalidArgumentException("limit", limit, "must be a positive integer")
        return _read(self.repo.homepage_featured(slots))

    def category_navigation_photo(self, category: str) -> Optional[PhotoRead]:
        """Representative photo of a category, or None."""
        self._check_category(category)
        photo = self.repo.category_navigation_photo(category)
        return PhotoRead.model_validate(photo) if photo else None

    def category_featured(self, category: str) -> List[PhotoRead]:
        """Featured photos of a category in priority order."""
        self._check_category(category)
        return _read(self.repo.category_featured(category))

    def all_category_photos(self, category: str) -> List[PhotoGroup]:
        """
        Every photo of a category grouped by sub-category.

        Groups are alphabetical with "Other" (no sub-category) last; photos
        inside a group are newest first, undated last.
        """
        self._check_category(category)
        photos = _read(self.repo.category_photos(category, OTHER_GROUP))
        return group_photos(photos, lambda p: p.sub_category, fallback=OTHER_GROUP)

    def country_photos(self, country: str) -> List[PhotoGroup]:
        """Every photo of a country grouped by location, alphabetically."""
        self._check_country(country)
        photos = _read(self.repo.country_photos(country))
        return group_photos(photos, lambda p: p.location)

    def all_countries(self) -> List[str]:
        """Sorted distinct country names."""
        return self.repo.distinct_countries()

    def country_navigation_photos(self) -> List[PhotoRead]:
        """One representative photo per country, ordered by country."""
        chosen = {}
        for photo in self.repo.country_featured_photos():
            chosen.setdefault(photo.country, photo)
        return _read([chosen[country] for country in sorted(chosen)])

    def _check_category(self, category: str):
        if category not in CATEGORIES:
            raise InvalidArgumentException(
                "category", category, f"must be one of: {', '.join(CATEGORIES)}"
            )

    def _check_country(self, country: str):
        if not isinstance(country, str) or not country.strip():
            raise InvalidArgumentException("country", country, "must be a non-empty name")
