"""Batch mutation summary schemas."""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class CategoryTally(BaseModel):
    """Per-category counts in a batch."""

    total: int = 0
    homepage: int = 0
    category: int = 0


class PlannedOperation(BaseModel):
    """One row of a batch as it will be (or was) written."""

    row: int
    identifier: Union[int, str]
    changes: Dict[str, Any] = Field(default_factory=dict)


class BatchSummary(BaseModel):
    """Outcome of a validated batch mutation."""

    total: int = Field(..., description="Rows in the batch")
    written: int = Field(default=0, description="Rows inserted or updated")
    unchanged: int = Field(default=0, description="Update rows with nothing to change")
    dry_run: bool = False
    by_category: Dict[str, CategoryTally] = Field(default_factory=dict)
    columns: List[str] = Field(default_factory=list, description="Columns the batch touches")
    operations: List[PlannedOperation] = Field(default_factory=list)
    store_total: Optional[int] = Field(default=None, description="Rows in the store afterwards")
