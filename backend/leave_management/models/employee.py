# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leave_management.models.base import TimestampMixin


class Employee(TimestampMixin, table=True):
    """An employee keyed by their HR identifier."""

    __tablename__ = "employee"

    emp_id: str = Field(primary_key=True, max_length=10)
    name: str = Field(max_length=100)
    email: str = Field(max_length=100, index=True)
    leave_balance: int = Field(default=0, sa_column_kwargs={"server_default": "0"})
    manager_id: uuid.UUID | None = Field(
        default=None,
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("manager.id"), nullable=True, index=True),
    )
