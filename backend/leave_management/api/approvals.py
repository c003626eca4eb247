# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from leave_management.api.deps import RepositoriesDep
from leave_management.models.enums import Decision
from leave_management.schemas.approval import ApprovalListResponse, ApprovalResponse, CreateApprovalPayload
from leave_management.services import approval as approval_service

approvals_router = APIRouter(prefix="/approvals", tags=["approvals"])


@approvals_router.post("", response_model=ApprovalResponse, status_code=status.HTTP_201_CREATED)
async def create_approval(payload: CreateApprovalPayload, repos: RepositoriesDep) -> ApprovalResponse:
    """Approve or reject a pending leave request."""
    return await approval_service.create_approval(repos, payload)


@approvals_router.get("", response_model=ApprovalListResponse)
async def list_approvals(
    repos: RepositoriesDep,
    request_id: uuid.UUID | None = Query(default=None),
    employee_id: str | None = Query(default=None),
    manager_name: str | None = Query(default=None),
    decision: Decision | None = Query(default=None),
    expand: str | None = Query(default=None, description="Comma-separated: request, employee, manager"),
) -> ApprovalListResponse:
    """List recorded approvals."""
    return await approval_service.list_approvals(
        repos,
        request_id,
        employee_id,
        manager_name,
        decision.value if decision else None,
        expand,
    )


@approvals_router.get("/{approval_id}", response_model=ApprovalResponse)
async def get_approval(
    approval_id: uuid.UUID,
    repos: RepositoriesDep,
    expand: str | None = Query(default=None),
) -> ApprovalResponse:
    """Get a single approval."""
    return await approval_service.get_approval(repos, approval_id, expand)
