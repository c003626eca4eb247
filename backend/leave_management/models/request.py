# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from leave_management.models.base import TimestampMixin, UUIDBase
from leave_management.models.enums import RequestStatus


class LeaveRequest(UUIDBase, TimestampMixin, table=True):
    """An employee's leave request with approval workflow state."""

    __tablename__ = "leave_request"
    __table_args__ = (sa.Index("ix_leave_request_employee_status", "employee_id", "status"),)

    employee_id: str = Field(
        sa_column=sa.Column(sa.String(10), sa.ForeignKey("employee.emp_id"), nullable=False, index=True),
    )
    leave_type_code: str = Field(
        sa_column=sa.Column(sa.String(15), sa.ForeignKey("leave_type.code"), nullable=False, index=True),
    )
    start_date: date
    end_date: date
    days: int
    reason: str | None = None
    status: str = Field(
        default=RequestStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "Pending"}
    )
