from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CreateLeaveTypeRequest(BaseModel):
    """Request body for creating a leave type."""

    code: str | None = None
    name: str | None = None
    max_days: int | None = None


class UpdateLeaveTypeRequest(BaseModel):
    """Request body for a partial leave type update. The code is the key and cannot change."""

    name: str | None = None
    max_days: int | None = None


class LeaveTypeResponse(BaseModel):
    """Response schema for a leave type."""

    code: str
    name: str
    max_days: int
    created_at: datetime


class LeaveTypeListResponse(BaseModel):
    """List of leave types."""

    items: list[LeaveTypeResponse]
    total: int
