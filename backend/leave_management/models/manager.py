from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field

from leave_management.models.base import TimestampMixin, UUIDBase


class Manager(UUIDBase, TimestampMixin, table=True):
    """A manager who decides on leave requests."""

    __tablename__ = "manager"
    __table_args__ = (sa.UniqueConstraint("email", name="uq_manager_email"),)

    name: str = Field(max_length=100, index=True)
    email: str = Field(max_length=100)
