# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel

from leave_management.models.enums import RequestStatus
from leave_management.schemas.employee import EmployeeResponse
from leave_management.schemas.leave_type import LeaveTypeResponse

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateLeaveRequestPayload(BaseModel):
    """Request body for submitting a leave request.

    A client-supplied ``status`` is accepted and ignored: new requests are
    always Pending.
    """

    employee_id: str | None = None
    leave_type_code: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = None
    status: str | None = None


class UpdateLeaveRequestPayload(BaseModel):
    """Request body for updating a leave request. Only the reason is editable."""

    reason: str | None = None
    status: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveRequestResponse(BaseModel):
    """Response schema for a single leave request."""

    id: uuid.UUID
    employee_id: str
    leave_type_code: str
    start_date: date
    end_date: date
    days: int
    reason: str | None
    status: RequestStatus
    created_at: datetime
    employee: EmployeeResponse | None = None
    leave_type: LeaveTypeResponse | None = None


class LeaveRequestListResponse(BaseModel):
    """List of leave requests."""

    items: list[LeaveRequestResponse]
    total: int
