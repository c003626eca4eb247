from __future__ import annotations

from typing import TYPE_CHECKING

from leave_management.exceptions import ConflictError, NotFoundError
from leave_management.schemas.leave_type import LeaveTypeListResponse, LeaveTypeResponse
from leave_management.services.validation import (
    normalize_leave_type_code,
    validate_leave_type_create,
    validate_leave_type_update,
)

if TYPE_CHECKING:
    from leave_management.models import LeaveType
    from leave_management.repositories import Repositories
    from leave_management.schemas.leave_type import CreateLeaveTypeRequest, UpdateLeaveTypeRequest


def build_leave_type_response(leave_type: LeaveType) -> LeaveTypeResponse:
    return LeaveTypeResponse(
        code=leave_type.code,
        name=leave_type.name,
        max_days=leave_type.max_days,
        created_at=leave_type.created_at,
    )


async def _get_leave_type_or_404(repos: Repositories, code: str) -> LeaveType:
    """Look up a leave type by code, case-insensitively."""
    normalized = normalize_leave_type_code(code)
    leave_type = await repos.leave_types.get(normalized)
    if leave_type is None:
        raise NotFoundError(f"Leave type {normalized} not found")
    return leave_type


async def create_leave_type(repos: Repositories, payload: CreateLeaveTypeRequest) -> LeaveTypeResponse:
    leave_type = await validate_leave_type_create(repos, payload)
    await repos.leave_types.add(leave_type)
    await repos.commit()
    return build_leave_type_response(leave_type)


async def update_leave_type(
    repos: Repositories,
    code: str,
    payload: UpdateLeaveTypeRequest,
) -> LeaveTypeResponse:
    leave_type = await _get_leave_type_or_404(repos, code)
    for field, value in validate_leave_type_update(payload).items():
        setattr(leave_type, field, value)
    await repos.commit()
    return build_leave_type_response(leave_type)


async def delete_leave_type(repos: Repositories, code: str) -> None:
    """Delete a leave type no request refers to."""
    leave_type = await _get_leave_type_or_404(repos, code)
    if await repos.requests.count_for_leave_type(leave_type.code) > 0:
        raise ConflictError(f"Leave type {leave_type.code} is used by leave requests and cannot be deleted")
    await repos.leave_types.delete(leave_type)
    await repos.commit()


async def get_leave_type(repos: Repositories, code: str) -> LeaveTypeResponse:
    return build_leave_type_response(await _get_leave_type_or_404(repos, code))


async def list_leave_types(repos: Repositories, search: str | None = None) -> LeaveTypeListResponse:
    leave_types = await repos.leave_types.list(search=search)
    return LeaveTypeListResponse(items=[build_leave_type_response(t) for t in leave_types], total=len(leave_types))
