# ruff: noqa: TC003
"""Shared columns for the leave tables.

Managers, leave requests and approvals are keyed by a generated UUID; employees
and leave types use their natural keys and only take the creation timestamp.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UUIDBase(SQLModel):
    """Surrogate UUID primary key, assigned client-side on construction."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, sa_type=sa.Uuid)


class TimestampMixin(SQLModel):
    """Creation time, used for list ordering, the monthly trend and the audit trail."""

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
