from __future__ import annotations

from typing import TYPE_CHECKING

from leave_management.exceptions import ConflictError, NotFoundError, ValidationError
from leave_management.models.enums import RequestStatus
from leave_management.schemas.request import LeaveRequestListResponse, LeaveRequestResponse
from leave_management.services.employee import build_employee_response
from leave_management.services.leave_type import build_leave_type_response
from leave_management.services.validation import (
    normalize_leave_type_code,
    validate_leave_request_create,
    validate_leave_request_update,
)

if TYPE_CHECKING:
    import uuid

    from leave_management.models import LeaveRequest
    from leave_management.repositories import Repositories
    from leave_management.schemas.request import CreateLeaveRequestPayload, UpdateLeaveRequestPayload

REQUEST_EXPANSIONS = frozenset({"employee", "leave_type"})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def parse_expand(expand: str | None, allowed: frozenset[str]) -> set[str]:
    """Split a comma-separated expand list and reject unknown relations."""
    if not expand:
        return set()
    names = {part.strip() for part in expand.split(",") if part.strip()}
    unknown = names - allowed
    if unknown:
        raise ValidationError(f"Cannot expand {', '.join(sorted(unknown))}; allowed: {', '.join(sorted(allowed))}")
    return names


async def build_request_response(
    repos: Repositories,
    leave_request: LeaveRequest,
    expand: set[str] | None = None,
) -> LeaveRequestResponse:
    """Map a leave request model to its response schema, embedding expanded relations."""
    response = LeaveRequestResponse(
        id=leave_request.id,
        employee_id=leave_request.employee_id,
        leave_type_code=leave_request.leave_type_code,
        start_date=leave_request.start_date,
        end_date=leave_request.end_date,
        days=leave_request.days,
        reason=leave_request.reason,
        status=RequestStatus(leave_request.status),
        created_at=leave_request.created_at,
    )
    expand = expand or set()
    if "employee" in expand:
        employee = await repos.employees.get(leave_request.employee_id)
        response.employee = build_employee_response(employee) if employee is not None else None
    if "leave_type" in expand:
        leave_type = await repos.leave_types.get(leave_request.leave_type_code)
        response.leave_type = build_leave_type_response(leave_type) if leave_type is not None else None
    return response


async def _get_request_or_404(repos: Repositories, request_id: uuid.UUID) -> LeaveRequest:
    leave_request = await repos.requests.get(request_id)
    if leave_request is None:
        raise NotFoundError("Leave request not found")
    return leave_request


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_leave_request(
    repos: Repositories,
    payload: CreateLeaveRequestPayload,
) -> LeaveRequestResponse:
    """Submit a leave request. It is always stored as Pending."""
    leave_request = await validate_leave_request_create(repos, payload)
    await repos.requests.add(leave_request)
    await repos.commit()
    return await build_request_response(repos, leave_request)


async def update_leave_request(
    repos: Repositories,
    request_id: uuid.UUID,
    payload: UpdateLeaveRequestPayload,
) -> LeaveRequestResponse:
    leave_request = await _get_request_or_404(repos, request_id)
    for field, value in validate_leave_request_update(payload).items():
        setattr(leave_request, field, value)
    await repos.commit()
    return await build_request_response(repos, leave_request)


async def delete_leave_request(repos: Repositories, request_id: uuid.UUID) -> None:
    """Withdraw a request that has not been decided yet."""
    leave_request = await _get_request_or_404(repos, request_id)
    if await repos.approvals.count_for_request(request_id) > 0:
        raise ConflictError(f"This request has already been {str(leave_request.status).lower()}")
    await repos.requests.delete(leave_request)
    await repos.commit()


async def get_leave_request(
    repos: Repositories,
    request_id: uuid.UUID,
    expand: str | None = None,
) -> LeaveRequestResponse:
    relations = parse_expand(expand, REQUEST_EXPANSIONS)
    return await build_request_response(repos, await _get_request_or_404(repos, request_id), relations)


async def list_leave_requests(
    repos: Repositories,
    status_filter: str | None = None,
    employee_id: str | None = None,
    leave_type_code: str | None = None,
    expand: str | None = None,
) -> LeaveRequestListResponse:
    """List requests, newest first, with optional filters and expansions."""
    relations = parse_expand(expand, REQUEST_EXPANSIONS)
    if leave_type_code is not None:
        leave_type_code = normalize_leave_type_code(leave_type_code)
    requests = await repos.requests.list(
        status=status_filter,
        employee_id=employee_id,
        leave_type_code=leave_type_code,
    )
    return LeaveRequestListResponse(
        items=[await build_request_response(repos, r, relations) for r in requests],
        total=len(requests),
    )
