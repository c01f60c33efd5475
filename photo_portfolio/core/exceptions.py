"""Custom exceptions for the application."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from photo_portfolio.models.schemas.validation import FieldError


class PortfolioException(Exception):
    """Base exception for all portfolio-related errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidArgumentException(PortfolioException):
    """Raised when a caller passes a value outside a documented domain."""

    def __init__(self, argument: str, value: object, reason: str):
        self.argument = argument
        self.value = value
        super().__init__(f"Invalid {argument} {value!r}: {reason}")


class ConstraintViolationException(PortfolioException):
    """Raised when a write would break a uniqueness, enum, range or non-empty rule."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Constraint violated on '{field}': {reason}")


class NotFoundException(PortfolioException):
    """Raised when a resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(message)


class AssetMissingException(PortfolioException):
    """Raised when an image file cannot be found in the asset directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Photo file not found at {path}")


class BatchRejectedException(PortfolioException):
    """Raised when a mutation is rejected; carries every violation found."""

    def __init__(self, errors: List["FieldError"]):
        self.errors = list(errors)
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"Rejected with {count} validation {noun}")


class SchemaMigrationException(PortfolioException):
    """Raised when an existing database cannot be brought to the current schema."""

    def __init__(self, reason: str, backup: Optional[Path] = None):
        self.reason = reason
        self.backup = backup
        message = f"Schema migration failed: {reason}"
        if backup:
            message += f" (backup kept at {backup})"
        super().__init__(message)
