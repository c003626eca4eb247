from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from leave_management.exceptions import AppError, NotFoundError
from leave_management.models.enums import Decision
from leave_management.schemas.approval import ApprovalListResponse, ApprovalResponse
from leave_management.services.employee import build_employee_response
from leave_management.services.manager import build_manager_response
from leave_management.services.request import build_request_response, parse_expand
from leave_management.services.validation import validate_approval_create
from leave_management.services.workflow import apply_approval

if TYPE_CHECKING:
    import uuid

    from leave_management.models import Approval
    from leave_management.repositories import Repositories
    from leave_management.schemas.approval import CreateApprovalPayload

logger = logging.getLogger(__name__)

APPROVAL_EXPANSIONS = frozenset({"request", "employee", "manager"})


async def build_approval_response(
    repos: Repositories,
    approval: Approval,
    expand: set[str] | None = None,
) -> ApprovalResponse:
    """Map an approval model to its response schema, embedding expanded relations."""
    response = ApprovalResponse(
        id=approval.id,
        request_id=approval.request_id,
        employee_id=approval.employee_id,
        manager_name=approval.manager_name,
        decision=Decision(approval.decision),
        comments=approval.comments,
        created_at=approval.created_at,
    )
    expand = expand or set()
    if "request" in expand:
        leave_request = await repos.requests.get(approval.request_id)
        response.request = await build_request_response(repos, leave_request) if leave_request is not None else None
    if "employee" in expand:
        employee = await repos.employees.get(approval.employee_id)
        response.employee = build_employee_response(employee) if employee is not None else None
    if "manager" in expand:
        manager = await repos.managers.get_by_name(approval.manager_name)
        response.manager = build_manager_response(manager) if manager is not None else None
    return response


async def create_approval(repos: Repositories, payload: CreateApprovalPayload) -> ApprovalResponse:
    """Record a decision and apply it within the same transaction.

    Flow:
    1. Validate decision, manager and request state.
    2. Insert the approval row.
    3. Apply the workflow: status transition and, on approval, balance deduction.
    4. Commit.

    Any error from steps 2-3 rolls the whole operation back.
    """
    approval = await validate_approval_create(repos, payload)
    await repos.approvals.add(approval)
    try:
        await apply_approval(repos, approval)
    except AppError:
        # Reported by the exception handler, or by the batch for change sets.
        if not repos.in_batch:
            await repos.rollback()
        raise
    except Exception:
        logger.exception("Applying approval %s for request %s failed", approval.id, approval.request_id)
        if not repos.in_batch:
            await repos.rollback()
        raise
    await repos.commit()
    return await build_approval_response(repos, approval)


async def get_approval(repos: Repositories, approval_id: uuid.UUID, expand: str | None = None) -> ApprovalResponse:
    relations = parse_expand(expand, APPROVAL_EXPANSIONS)
    approval = await repos.approvals.get(approval_id)
    if approval is None:
        raise NotFoundError("Approval not found")
    return await build_approval_response(repos, approval, relations)


async def list_approvals(
    repos: Repositories,
    request_id: uuid.UUID | None = None,
    employee_id: str | None = None,
    manager_name: str | None = None,
    decision: str | None = None,
    expand: str | None = None,
) -> ApprovalListResponse:
    """List approvals, newest first."""
    relations = parse_expand(expand, APPROVAL_EXPANSIONS)
    approvals = await repos.approvals.list(
        request_id=request_id,
        employee_id=employee_id,
        manager_name=manager_name,
        decision=decision,
    )
    return ApprovalListResponse(
        items=[await build_approval_response(repos, a, relations) for a in approvals],
        total=len(approvals),
    )
