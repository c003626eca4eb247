# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from leave_management.models.enums import Decision
from leave_management.schemas.employee import EmployeeResponse
from leave_management.schemas.manager import ManagerResponse
from leave_management.schemas.request import LeaveRequestResponse


class CreateApprovalPayload(BaseModel):
    """Request body for recording a manager's decision on a leave request."""

    request_id: uuid.UUID | None = None
    decision: str | None = None
    manager_name: str | None = None
    comments: str | None = None


class ApprovalResponse(BaseModel):
    """Response schema for an approval record."""

    id: uuid.UUID
    request_id: uuid.UUID
    employee_id: str
    manager_name: str
    decision: Decision
    comments: str | None
    created_at: datetime
    request: LeaveRequestResponse | None = None
    employee: EmployeeResponse | None = None
    manager: ManagerResponse | None = None


class ApprovalListResponse(BaseModel):
    """List of approvals."""

    items: list[ApprovalResponse]
    total: int
