from __future__ import annotations

from sqlmodel import Field

from leave_management.models.base import TimestampMixin


class LeaveType(TimestampMixin, table=True):
    """A category of leave with a per-request day limit."""

    __tablename__ = "leave_type"

    code: str = Field(primary_key=True, max_length=15)
    name: str = Field(max_length=40)
    max_days: int
