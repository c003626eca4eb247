# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from leave_management.api.deps import RepositoriesDep
from leave_management.models.enums import RequestStatus
from leave_management.schemas.request import (
    CreateLeaveRequestPayload,
    LeaveRequestListResponse,
    LeaveRequestResponse,
    UpdateLeaveRequestPayload,
)
from leave_management.services import request as request_service

requests_router = APIRouter(prefix="/leave-requests", tags=["leave-requests"])


@requests_router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_leave_request(payload: CreateLeaveRequestPayload, repos: RepositoriesDep) -> LeaveRequestResponse:
    """Submit a new leave request."""
    return await request_service.create_leave_request(repos, payload)


@requests_router.get("", response_model=LeaveRequestListResponse)
async def list_leave_requests(
    repos: RepositoriesDep,
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    employee_id: str | None = Query(default=None),
    leave_type_code: str | None = Query(default=None),
    expand: str | None = Query(default=None, description="Comma-separated: employee, leave_type"),
) -> LeaveRequestListResponse:
    """List leave requests with optional filters."""
    return await request_service.list_leave_requests(
        repos,
        status_filter.value if status_filter else None,
        employee_id,
        leave_type_code,
        expand,
    )


@requests_router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    request_id: uuid.UUID,
    repos: RepositoriesDep,
    expand: str | None = Query(default=None),
) -> LeaveRequestResponse:
    """Get a single leave request."""
    return await request_service.get_leave_request(repos, request_id, expand)


@requests_router.patch("/{request_id}", response_model=LeaveRequestResponse)
async def update_leave_request(
    request_id: uuid.UUID,
    payload: UpdateLeaveRequestPayload,
    repos: RepositoriesDep,
) -> LeaveRequestResponse:
    """Edit a leave request's reason."""
    return await request_service.update_leave_request(repos, request_id, payload)


@requests_router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave_request(request_id: uuid.UUID, repos: RepositoriesDep) -> None:
    """Withdraw an undecided leave request."""
    await request_service.delete_leave_request(repos, request_id)
