# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leave_management.models.base import TimestampMixin, UUIDBase


class Approval(UUIDBase, TimestampMixin, table=True):
    """Immutable record of a manager's decision on a leave request.

    The manager is referenced by name, not by key, to stay compatible with
    existing clients.
    """

    __tablename__ = "approval"

    request_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("leave_request.id"), nullable=False, index=True),
    )
    employee_id: str = Field(max_length=10, index=True)
    manager_name: str = Field(max_length=100)
    decision: str = Field(max_length=20)
    comments: str | None = None
