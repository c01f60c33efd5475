"""Base repository with common CRUD operations."""
import re
from typing import Generic, TypeVar, Type, Optional, List

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from photo_portfolio.core.database import Base
from photo_portfolio.core.exceptions import ConstraintViolationException, NotFoundException

ModelType = TypeVar("ModelType", bound=Base)

_COLUMN_FAILURE = re.compile(r"(?:UNIQUE|NOT NULL) constraint failed: \w+\.(\w+)")
_CHECK_FAILURE = re.compile(r"CHECK constraint failed: (\w+)")


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations."""

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity instance or None if not found
        """
        return self.db.execute(
            select(self.model).where(self.model.id == id)
        ).scalar_one_or_none()

    def get_by_id_or_fail(self, id: int) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            NotFoundException: If entity not found
        """
        entity = self.get_by_id(id)
        if not entity:
            raise NotFoundException(
                resource=self.model.__tablename__,
                identifier=str(id)
            )
        return entity

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get all entities with pagination."""
        result = self.db.execute(
            select(self.model).order_by(self.model.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    def count(self) -> int:
        """Count total number of entities."""
        return self.db.execute(
            select(func.count()).select_from(self.model)
        ).scalar_one()

    def create(self, entity: ModelType) -> ModelType:
        """
        Create new entity.

        Args:
            entity: Entity instance to create

        Returns:
            Created entity with generated ID

        Raises:
            ConstraintViolationException: If a table constraint rejects the row
        """
        self.db.add(entity)
        self.flush()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType, values: dict) -> ModelType:
        """
        Apply values to a loaded entity and flush.

        Args:
            entity: Entity instance
            values: Dictionary of column values to set

        Returns:
            Updated entity
        """
        for column, value in values.items():
            setattr(entity, column, value)
        self.flush()
        self.db.refresh(entity)
        return entity

    def exists(self, id: int) -> bool:
        """Check if entity exists."""
        result = self.db.execute(
            select(func.count()).select_from(self.model).where(self.model.id == id)
        )
        return result.scalar_one() > 0

    def flush(self):
        """Flush pending changes, translating constraint failures."""
        try:
            self.db.flush()
        except IntegrityError as e:
            field, reason = self._describe_integrity_error(e)
            raise ConstraintViolationException(field, reason) from e

    def _describe_integrity_error(self, error: IntegrityError) -> tuple:
        detail = str(error.orig)
        match = _COLUMN_FAILURE.search(detail)
        if match:
            field = match.group(1)
            if detail.startswith("UNIQUE"):
                return field, "value already exists"
            return field, "value is required"

        match = _CHECK_FAILURE.search(detail)
        if match:
            prefix = f"ck_{self.model.__tablename__}_"
            name = match.group(1)
            field = name[len(prefix):] if name.startswith(prefix) else name
            return field, "value is not allowed"

        return "row", detail
