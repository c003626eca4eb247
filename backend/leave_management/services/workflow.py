"""Approval workflow engine.

Applies a freshly created approval to its leave request and, for approvals,
to the employee's balance. Runs inside the approval creation use case, after
the approval row is flushed and before the transaction commits.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from leave_management.exceptions import ConflictError
from leave_management.models.enums import Decision, RequestStatus
from leave_management.services.duration import inclusive_day_count

if TYPE_CHECKING:
    from leave_management.models import Approval
    from leave_management.repositories import Repositories

logger = logging.getLogger(__name__)

_DECISION_TO_STATUS = {
    Decision.APPROVED.value: RequestStatus.APPROVED,
    Decision.REJECTED.value: RequestStatus.REJECTED,
}


async def apply_approval(repos: Repositories, approval: Approval) -> None:
    """Transition the referenced request and deduct balance on approval.

    1. Re-read the request. A missing request is logged and skipped; the
       approval itself stays.
    2. Recompute the inclusive day count from the stored dates.
    3. Conditionally move the request out of Pending. If another decision got
       there first, raise ConflictError so the whole approval rolls back.
    4. On Approved, decrement the employee's balance by the day count.
    """
    leave_request = await repos.requests.get(approval.request_id)
    if leave_request is None:
        logger.error(
            "Leave request %s not found while applying approval %s; no status or balance change made",
            approval.request_id,
            approval.id,
        )
        return

    new_status = _DECISION_TO_STATUS[approval.decision]
    days = inclusive_day_count(leave_request.start_date, leave_request.end_date)

    transitioned = await repos.requests.transition_status(leave_request.id, RequestStatus.PENDING, new_status)
    if not transitioned:
        current = await repos.requests.get(leave_request.id)
        current_status = str(current.status).lower() if current is not None else "removed"
        raise ConflictError(f"This request has already been {current_status}")

    if new_status is RequestStatus.REJECTED:
        logger.info(
            "Leave request %s rejected by %s: %s",
            leave_request.id,
            approval.manager_name,
            approval.comments,
        )
        return

    touched = await repos.employees.decrement_balance(leave_request.employee_id, days)
    if touched == 0:
        logger.error(
            "Employee %s not found while deducting %d days for approved request %s",
            leave_request.employee_id,
            days,
            leave_request.id,
        )
        return

    employee = await repos.employees.get(leave_request.employee_id)
    if employee is not None and employee.leave_balance < 0:
        logger.warning(
            "Employee %s balance is negative (%d) after approving request %s",
            employee.emp_id,
            employee.leave_balance,
            leave_request.id,
        )
    logger.info(
        "Leave request %s approved by %s; deducted %d days from employee %s",
        leave_request.id,
        approval.manager_name,
        days,
        leave_request.employee_id,
    )
