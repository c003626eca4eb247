# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateEmployeeRequest(BaseModel):
    """Request body for creating an employee.

    Fields are loosely typed on purpose: trimming, length and format checks
    happen in the validation gate so that every failure reads the same way.
    """

    emp_id: str | None = None
    name: str | None = None
    email: str | None = None
    leave_balance: int | None = None
    manager_id: str | None = None


class UpdateEmployeeRequest(BaseModel):
    """Request body for a partial employee update. Omitted fields stay unchanged."""

    name: str | None = None
    email: str | None = None
    leave_balance: int | None = None
    manager_id: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    emp_id: str
    name: str
    email: str
    leave_balance: int
    manager_id: uuid.UUID | None
    created_at: datetime


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
