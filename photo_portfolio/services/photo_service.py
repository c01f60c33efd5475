"""Validated, atomic photo mutations."""
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from photo_portfolio.assets import AssetExistenceChecker, FilesystemAssetChecker
from photo_portfolio.core.config import Settings, settings as default_settings
from photo_portfolio.core.exceptions import BatchRejectedException, ConstraintViolationException
from photo_portfolio.models.database import Photo
from photo_portfolio.models.schemas import (
    BatchSummary,
    CategoryTally,
    FieldError,
    PhotoCreate,
    PhotoUpdate,
    PlannedOperation,
)
from photo_portfolio.models.schemas.photo import (
    OPTIONAL_COLUMNS,
    REQUIRED_COLUMNS,
    UPDATABLE_COLUMNS,
)
from photo_portfolio.repositories import PhotoRepository
from photo_portfolio.validation import (
    check_create,
    check_update,
    is_blank,
    validate_asset_exists,
)

logger = logging.getLogger(__name__)

CREATE_COLUMNS = REQUIRED_COLUMNS + OPTIONAL_COLUMNS

Row = Mapping[str, object]


class PhotoService:
    """
    Service for creating and updating photos.

    Every call validates its whole input first and reports every violation
    in one BatchRejectedException. Nothing is written unless the whole input
    is valid; a database failure while writing rolls the session back.
    """

    def __init__(
        self,
        db: Session,
        checker: Optional[AssetExistenceChecker] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize photo service.

        Args:
            db: Database session
            checker: Asset existence capability, defaults to the configured images directory
            settings: Application settings
        """
        self.db = db
        self.settings = settings or default_settings
        self.checker = checker or FilesystemAssetChecker(self.settings.images_dir)
        self.repo = PhotoRepository(db)

    def add_one(self, data: Row) -> int:
        """
        Validate and insert one photo.

        Args:
            data: Column name to raw value

        Returns:
            ID of the new photo

        Raises:
            BatchRejectedException: With every violation, duplicates included
        """
        create, errors = check_create(data, None, self.checker)
        errors.extend(self._duplicate_errors([(None, data)]))
        if errors:
            logger.warning(f"Rejected photo {data.get('filename')!r}: {len(errors)} error(s)")
            raise BatchRejectedException(errors)

        photo = self._insert(None, create)
        logger.info(f"Added photo {photo.filename} (ID {photo.id})")
        return photo.id

    def add_batch(
        self,
        rows: Sequence[Row],
        dry_run: bool = False,
        first_row: int = 1
    ) -> BatchSummary:
        """
        Validate and insert many photos, all or nothing.

        Args:
            rows: Inputs in write order
            dry_run: Validate and summarise without writing
            first_row: Number reported for the first input (2 for CSV data lines)

        Returns:
            Batch summary

        Raises:
            BatchRejectedException: With every violation across every row
        """
        numbered = list(enumerate(rows, start=first_row))

        errors: List[FieldError] = []
        creates: List[Tuple[int, PhotoCreate]] = []
        for row, data in numbered:
            create, row_errors = check_create(data, row, self.checker)
            errors.extend(row_errors)
            if create is not None:
                creates.append((row, create))
        errors.extend(self._duplicate_errors(numbered))
        if errors:
            logger.warning(f"Rejected batch of {len(numbered)} photo(s): {len(errors)} error(s)")
            raise BatchRejectedException(errors)

        summary = BatchSummary(
            total=len(creates),
            dry_run=dry_run,
            by_category=self._tally(create for _, create in creates),
            columns=[c for c in CREATE_COLUMNS if any(c in data for _, data in numbered)],
            operations=[
                PlannedOperation(row=row, identifier=create.filename, changes=create.model_dump())
                for row, create in creates
            ],
        )
        if dry_run:
            return summary

        for row, create in creates:
            self._insert(row, create)

        summary.written = len(creates)
        summary.store_total = self.repo.count()
        logger.info(f"Imported {summary.written} photo(s); store holds {summary.store_total}")
        return summary

    def update_batch(
        self,
        rows: Sequence[Row],
        dry_run: bool = False,
        first_row: int = 1
    ) -> BatchSummary:
        """
        Validate and apply partial updates, all or nothing.

        Each input names its photo by ``id`` or ``filename`` and carries only
        the columns to change. Absent columns are left untouched; blank
        optional columns are cleared. A photo may be named by one input only,
        whichever identifier is used.

        Args:
            rows: Inputs in write order
            dry_run: Validate and summarise without writing
            first_row: Number reported for the first input

        Returns:
            Batch summary

        Raises:
            BatchRejectedException: With every violation across every row
        """
        errors: List[FieldError] = []
        planned: List[PlannedOperation] = []
        seen: Dict[int, int] = {}

        for row, data in enumerate(rows, start=first_row):
            update, row_errors = check_update(data, row)
            if row_errors:
                errors.extend(row_errors)
                continue

            identifier = update.identifier()
            field = "id" if update.id is not None else "filename"
            photo = self.repo.get_by_identifier(identifier)
            if photo is None:
                errors.append(FieldError(
                    field=field,
                    message=f"Photo {identifier!r} not found in database",
                    row=row,
                ))
                continue

            if photo.id in seen:
                errors.append(FieldError(
                    field=field,
                    message=f"Photo {identifier!r} is already updated by row {seen[photo.id]}",
                    row=row,
                ))
                continue
            seen[photo.id] = row

            errors.extend(self._stored_row_errors(photo, update, row))
            planned.append(PlannedOperation(row=row, identifier=identifier, changes=update.changes()))

        if errors:
            logger.warning(f"Rejected update of {len(rows)} photo(s): {len(errors)} error(s)")
            raise BatchRejectedException(errors)

        summary = BatchSummary(
            total=len(planned),
            dry_run=dry_run,
            columns=[c for c in UPDATABLE_COLUMNS if any(c in op.changes for op in planned)],
            operations=planned,
        )
        if dry_run:
            return summary

        for op in planned:
            if not op.changes:
                summary.unchanged += 1
                continue
            try:
                self.repo.update_partial(op.identifier, op.changes)
            except ConstraintViolationException as e:
                self._reject_write(op.row, e)
            summary.written += 1

        summary.store_total = self.repo.count()
        logger.info(f"Updated {summary.written} photo(s), {summary.unchanged} unchanged")
        return summary

    def _stored_row_errors(self, photo: Photo, update: PhotoUpdate, row: int) -> List[FieldError]:
        """Checks of an update input against the photo it targets."""
        errors = []
        if update.filename is not None and update.filename != photo.filename:
            errors.append(FieldError(
                field="filename",
                message=f"Filename cannot be changed (photo {photo.id} is {photo.filename})",
                row=row,
            ))
        if "category" in update.model_fields_set:
            error = validate_asset_exists(photo.filename, update.category, self.checker, row)
            if error:
                errors.append(error)
        return errors

    def _duplicate_errors(self, numbered: List[Tuple[Optional[int], Row]]) -> List[FieldError]:
        """Filenames repeated inside the input or already in the store."""
        errors = []
        first_seen: Dict[str, Optional[int]] = {}
        for row, data in numbered:
            if is_blank(data.get("filename")):
                continue
            filename = str(data["filename"]).strip()
            if filename in first_seen:
                errors.append(FieldError(
                    field="filename",
                    message=f'Duplicate filename in batch: "{filename}"',
                    row=row,
                ))
            else:
                first_seen[filename] = row

        existing = self.repo.existing_filenames(first_seen)
        for filename in existing:
            errors.append(FieldError(
                field="filename",
                message=f'Photo already exists in database: "{filename}"',
                row=first_seen[filename],
            ))
        return sorted(errors, key=lambda e: e.row or 0)

    def _insert(self, row: Optional[int], create: PhotoCreate) -> Photo:
        try:
            return self.repo.create(Photo(**create.model_dump()))
        except ConstraintViolationException as e:
            self._reject_write(row, e)

    def _reject_write(self, row: Optional[int], error: ConstraintViolationException):
        self.db.rollback()
        logger.error(f"Write failed at row {row}: {error.message}; batch rolled back")
        raise BatchRejectedException(
            [FieldError(field=error.field, message=error.reason, row=row)]
        ) from error

    @staticmethod
    def _tally(creates) -> Dict[str, CategoryTally]:
        tally: Dict[str, CategoryTally] = {}
        for create in creates:
            counts = tally.setdefault(create.category, CategoryTally())
            counts.total += 1
            if create.homepage_featured:
                counts.homepage += 1
            if create.category_featured:
                counts.category += 1
        return tally
