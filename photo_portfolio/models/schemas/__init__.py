"""Pydantic schemas for validation and view models."""
from __future__ import annotations

from .validation import FieldError
from .photo import (
    PhotoBase,
    PhotoCreate,
    PhotoUpdate,
    PhotoRead,
)
from .batch import (
    BatchSummary,
    CategoryTally,
    PlannedOperation,
)
from .views import (
    PhotoGroup,
    PhotoView,
    PhotoGroupView,
    NavigationItem,
    HomepageView,
    CategoryPageView,
    CountryPageView,
)
from .audit import AuditFinding, AuditReport

__all__ = [
    # Validation
    "FieldError",
    # Photo
    "PhotoBase",
    "PhotoCreate",
    "PhotoUpdate",
    "PhotoRead",
    # Batch
    "BatchSummary",
    "CategoryTally",
    "PlannedOperation",
    # Views
    "PhotoGroup",
    "PhotoView",
    "PhotoGroupView",
    "NavigationItem",
    "HomepageView",
    "CategoryPageView",
    "CountryPageView",
    # Audit
    "AuditFinding",
    "AuditReport",
]
