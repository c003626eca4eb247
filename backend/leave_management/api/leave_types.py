# ruff: noqa: B008, TC001
from __future__ import annotations

from fastapi import APIRouter, Query, status

from leave_management.api.deps import RepositoriesDep
from leave_management.schemas.leave_type import (
    CreateLeaveTypeRequest,
    LeaveTypeListResponse,
    LeaveTypeResponse,
    UpdateLeaveTypeRequest,
)
from leave_management.services import leave_type as leave_type_service

leave_types_router = APIRouter(prefix="/leave-types", tags=["leave-types"])


@leave_types_router.post("", response_model=LeaveTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_leave_type(payload: CreateLeaveTypeRequest, repos: RepositoriesDep) -> LeaveTypeResponse:
    """Create a leave type."""
    return await leave_type_service.create_leave_type(repos, payload)


@leave_types_router.get("", response_model=LeaveTypeListResponse)
async def list_leave_types(
    repos: RepositoriesDep,
    search: str | None = Query(default=None),
) -> LeaveTypeListResponse:
    """List leave types."""
    return await leave_type_service.list_leave_types(repos, search)


@leave_types_router.get("/{code}", response_model=LeaveTypeResponse)
async def get_leave_type(code: str, repos: RepositoriesDep) -> LeaveTypeResponse:
    """Get a leave type by code."""
    return await leave_type_service.get_leave_type(repos, code)


@leave_types_router.patch("/{code}", response_model=LeaveTypeResponse)
async def update_leave_type(code: str, payload: UpdateLeaveTypeRequest, repos: RepositoriesDep) -> LeaveTypeResponse:
    """Update a leave type's name or day limit."""
    return await leave_type_service.update_leave_type(repos, code, payload)


@leave_types_router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave_type(code: str, repos: RepositoriesDep) -> None:
    """Delete an unused leave type."""
    await leave_type_service.delete_leave_type(repos, code)
