# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from leave_management.api.deps import RepositoriesDep
from leave_management.schemas.manager import (
    CreateManagerRequest,
    ManagerListResponse,
    ManagerResponse,
    UpdateManagerRequest,
)
from leave_management.services import manager as manager_service

managers_router = APIRouter(prefix="/managers", tags=["managers"])


@managers_router.post("", response_model=ManagerResponse, status_code=status.HTTP_201_CREATED)
async def create_manager(payload: CreateManagerRequest, repos: RepositoriesDep) -> ManagerResponse:
    """Create a manager."""
    return await manager_service.create_manager(repos, payload)


@managers_router.get("", response_model=ManagerListResponse)
async def list_managers(
    repos: RepositoriesDep,
    search: str | None = Query(default=None),
) -> ManagerListResponse:
    """List managers."""
    return await manager_service.list_managers(repos, search)


@managers_router.get("/{manager_id}", response_model=ManagerResponse)
async def get_manager(manager_id: uuid.UUID, repos: RepositoriesDep) -> ManagerResponse:
    """Get a single manager."""
    return await manager_service.get_manager(repos, manager_id)


@managers_router.patch("/{manager_id}", response_model=ManagerResponse)
async def update_manager(
    manager_id: uuid.UUID,
    payload: UpdateManagerRequest,
    repos: RepositoriesDep,
) -> ManagerResponse:
    """Update a manager's name or email."""
    return await manager_service.update_manager(repos, manager_id, payload)


@managers_router.delete("/{manager_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_manager(manager_id: uuid.UUID, repos: RepositoriesDep) -> None:
    """Delete a manager with no employees."""
    await manager_service.delete_manager(repos, manager_id)
