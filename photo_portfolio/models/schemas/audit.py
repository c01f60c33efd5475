"""Constraint audit schemas."""
from typing import List, Literal

from pydantic import BaseModel, Field


class AuditFinding(BaseModel):
    """One integrity problem found by the audit."""

    check: str
    severity: Literal["error", "warning"] = "error"
    message: str
    photo_ids: List[int] = Field(default_factory=list)


class AuditReport(BaseModel):
    """Result of a constraint audit."""

    checks_run: List[str] = Field(default_factory=list)
    findings: List[AuditFinding] = Field(default_factory=list)

    @property
    def errors(self) -> List[AuditFinding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def passed(self) -> bool:
        return not self.errors
