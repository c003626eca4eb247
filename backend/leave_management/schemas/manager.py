# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class CreateManagerRequest(BaseModel):
    """Request body for creating a manager."""

    name: str | None = None
    email: str | None = None


class UpdateManagerRequest(BaseModel):
    """Request body for a partial manager update."""

    name: str | None = None
    email: str | None = None


class ManagerResponse(BaseModel):
    """Response schema for a manager."""

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime


class ManagerListResponse(BaseModel):
    """List of managers."""

    items: list[ManagerResponse]
    total: int
