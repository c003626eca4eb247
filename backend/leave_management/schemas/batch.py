from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

EntityName = Literal["Employees", "LeaveTypes", "Managers", "LeaveRequests", "Approvals"]


class BatchOperation(BaseModel):
    """A single entity operation inside a batch."""

    method: Literal["create", "update", "delete"]
    entity: EntityName
    key: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)


class BatchRequest(BaseModel):
    """Request body for applying several entity operations as one change set."""

    operations: list[BatchOperation] = Field(min_length=1, max_length=100)


class BatchResponse(BaseModel):
    """Records produced by each operation, in order. Deletes yield null."""

    results: list[dict[str, Any] | None]
