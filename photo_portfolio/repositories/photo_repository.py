"""Photo repository."""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Union

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from photo_portfolio.core.exceptions import (
    ConstraintViolationException,
    InvalidArgumentException,
    NotFoundException,
)
from photo_portfolio.models.database import Photo
from photo_portfolio.models.database.photo import CATEGORY_NAVIGATION_PRIORITY, utcnow
from photo_portfolio.repositories.base import BaseRepository

Identifier = Union[int, str]

# Newest first, undated photos after dated ones
_DATE_NEWEST_FIRST = (case((Photo.date.is_(None), 1), else_=0), Photo.date.desc())


class PhotoRepository(BaseRepository[Photo]):
    """Repository for photo metadata."""

    def __init__(self, db: Session):
        super().__init__(Photo, db)

    # Lookups

    def get_by_filename(self, filename: str) -> Optional[Photo]:
        """
        Get photo by filename.

        Args:
            filename: Image filename

        Returns:
            Photo or None
        """
        return self.db.execute(
            select(Photo).where(Photo.filename == filename)
        ).scalar_one_or_none()

    def get_by_identifier(self, identifier: Identifier) -> Optional[Photo]:
        """
        Get photo by ID (int) or filename (str).

        Raises:
            InvalidArgumentException: If identifier is neither an int nor a str
        """
        if isinstance(identifier, bool) or not isinstance(identifier, (int, str)):
            raise InvalidArgumentException(
                "identifier", identifier, "must be a photo id or a filename"
            )
        if isinstance(identifier, int):
            return self.get_by_id(identifier)
        return self.get_by_filename(identifier)

    def get_by_identifier_or_fail(self, identifier: Identifier) -> Photo:
        """
        Get photo by ID or filename, or raise exception.

        Raises:
            NotFoundException: If no photo matches
        """
        photo = self.get_by_identifier(identifier)
        if photo is None:
            raise NotFoundException(resource="Photo", identifier=str(identifier))
        return photo

    def existing_filenames(self, filenames: Iterable[str]) -> Set[str]:
        """Subset of the given filenames already in the store."""
        wanted = set(filenames)
        if not wanted:
            return set()
        result = self.db.execute(
            select(Photo.filename).where(Photo.filename.in_(wanted))
        )
        return set(result.scalars().all())

    def existing_ids(self, ids: Iterable[int]) -> Set[int]:
        """Subset of the given IDs already in the store."""
        wanted = set(ids)
        if not wanted:
            return set()
        result = self.db.execute(select(Photo.id).where(Photo.id.in_(wanted)))
        return set(result.scalars().all())

    def list_all(self) -> List[Photo]:
        """Every photo ordered by category, then ID."""
        result = self.db.execute(select(Photo).order_by(Photo.category, Photo.id))
        return list(result.scalars().all())

    # Writes

    def update_partial(self, identifier: Identifier, fields: dict) -> Photo:
        """
        Update only the supplied fields of one photo.

        Args:
            identifier: Photo ID or filename
            fields: Column name to new value, for the columns to change

        Returns:
            Updated photo

        Raises:
            NotFoundException: If no photo matches
            ConstraintViolationException: If the change breaks a table rule
        """
        photo = self.get_by_identifier_or_fail(identifier)

        values = dict(fields)
        new_filename = values.pop("filename", photo.filename)
        if new_filename != photo.filename:
            raise ConstraintViolationException("filename", "cannot be changed after creation")

        unknown = [column for column in values if column not in Photo.__table__.c]
        if unknown:
            raise InvalidArgumentException("fields", unknown, "unknown photo columns")

        values.pop("id", None)
        values["updated_at"] = utcnow()
        return self.update(photo, values)

    # Page queries

    def homepage_featured(self, limit: int) -> List[Photo]:
        """
        Homepage photos by rank, hero first.

        Args:
            limit: Number of homepage slots

        Returns:
            At most ``limit`` photos ordered by rank, then ID
        """
        result = self.db.execute(
            select(Photo)
            .where(Photo.homepage_featured > 0)
            .order_by(Photo.homepage_featured, Photo.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    def category_navigation_photo(self, category: str) -> Optional[Photo]:
        """Navigation photo of a category (lowest ID if several are marked)."""
        return self.db.execute(
            select(Photo)
            .where(
                Photo.category == category,
                Photo.category_featured == CATEGORY_NAVIGATION_PRIORITY,
            )
            .order_by(Photo.id)
            .limit(1)
        ).scalar_one_or_none()

    def category_featured(self, category: str) -> List[Photo]:
        """Featured photos of a category by priority, then ID."""
        result = self.db.execute(
            select(Photo)
            .where(Photo.category == category, Photo.category_featured > 0)
            .order_by(Photo.category_featured, Photo.id)
        )
        return list(result.scalars().all())

    def category_photos(self, category: str, unnamed_group: str) -> List[Photo]:
        """
        Every photo of a category, ordered for grouping by sub-category.

        Photos without a sub-category sort under ``unnamed_group``, together
        with any photo given that sub-category explicitly. Inside a group the
        newest photos come first.
        """
        result = self.db.execute(
            select(Photo)
            .where(Photo.category == category)
            .order_by(
                func.coalesce(Photo.sub_category, unnamed_group),
                *_DATE_NEWEST_FIRST,
                Photo.id,
            )
        )
        return list(result.scalars().all())

    def country_photos(self, country: str) -> List[Photo]:
        """Every photo of a country, ordered by location, newest first."""
        result = self.db.execute(
            select(Photo)
            .where(Photo.country == country)
            .order_by(Photo.location, *_DATE_NEWEST_FIRST, Photo.id)
        )
        return list(result.scalars().all())

    def distinct_countries(self) -> List[str]:
        """Sorted distinct country names."""
        result = self.db.execute(
            select(Photo.country).distinct().order_by(Photo.country)
        )
        return list(result.scalars().all())

    def country_featured_photos(self) -> List[Photo]:
        """Photos marked as country navigation photos, by country, then ID."""
        result = self.db.execute(
            select(Photo)
            .where(Photo.country_featured == 1)
            .order_by(Photo.country, Photo.id)
        )
        return list(result.scalars().all())

    # Audit queries

    def navigation_photos_by_category(self) -> Dict[str, List[Photo]]:
        """Photos marked as category navigation photos, grouped by category."""
        result = self.db.execute(
            select(Photo)
            .where(Photo.category_featured == CATEGORY_NAVIGATION_PRIORITY)
            .order_by(Photo.category, Photo.id)
        )
        grouped = defaultdict(list)
        for photo in result.scalars().all():
            grouped[photo.category].append(photo)
        return dict(grouped)

    def homepage_ranked(self) -> List[Photo]:
        """Every homepage featured photo by rank, then ID."""
        result = self.db.execute(
            select(Photo)
            .where(Photo.homepage_featured > 0)
            .order_by(Photo.homepage_featured, Photo.id)
        )
        return list(result.scalars().all())
