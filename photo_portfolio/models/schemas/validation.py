"""Validation error schemas."""
from typing import Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """One rule violation: which field, why, and (in batches) which input row."""

    field: str = Field(..., description="Offending field or column name")
    message: str = Field(..., description="Human readable reason")
    row: Optional[int] = Field(default=None, description="1-based input row number")

    def __str__(self) -> str:
        if self.row is None:
            return f"{self.field}: {self.message}"
        return f"Row {self.row}, {self.field}: {self.message}"
