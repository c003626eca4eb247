"""Validation gate: pre-commit checks for every mutating entity operation.

Each ``validate_*`` function either returns the normalized record (or the
normalized field changes for updates) or raises the ``AppError`` subclass that
describes the first violated rule. Nothing here writes to the store.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from email_validator import EmailNotValidError, validate_email

from leave_management.exceptions import (
    ConflictError,
    DateRangeError,
    DuplicateError,
    InsufficientBalance,
    NotFoundError,
    PolicyViolation,
    ValidationError,
)
from leave_management.models import Approval, Employee, LeaveRequest, LeaveType, Manager
from leave_management.models.enums import Decision, RequestStatus
from leave_management.services.duration import inclusive_day_count

if TYPE_CHECKING:
    from leave_management.repositories import Repositories
    from leave_management.schemas.approval import CreateApprovalPayload
    from leave_management.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest
    from leave_management.schemas.leave_type import CreateLeaveTypeRequest, UpdateLeaveTypeRequest
    from leave_management.schemas.manager import CreateManagerRequest, UpdateManagerRequest
    from leave_management.schemas.request import CreateLeaveRequestPayload, UpdateLeaveRequestPayload

logger = logging.getLogger(__name__)

EMP_ID_MAX_LENGTH = 10
PERSON_NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
LEAVE_TYPE_CODE_MAX_LENGTH = 15
LEAVE_TYPE_NAME_MAX_LENGTH = 40


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _required_text(value: str | None, label: str, max_length: int) -> str:
    """Trim a required text field and enforce its maximum length."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required")
    if len(text) > max_length:
        raise ValidationError(f"{label} must be {max_length} characters or less")
    return text


def _normalize_email(value: str | None) -> str:
    """Trim, lower-case and format-check an email address."""
    email = _required_text(value, "Email", EMAIL_MAX_LENGTH).lower()
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Please enter a valid email address") from None
    return email


def normalize_leave_type_code(value: str | None) -> str:
    """Leave type codes are stored trimmed and upper-cased."""
    return _required_text(value, "Leave type code", LEAVE_TYPE_CODE_MAX_LENGTH).upper()


def _non_negative_balance(value: int) -> int:
    if value < 0:
        raise ValidationError("Leave balance must be a non-negative integer")
    return value


def _positive_max_days(value: int | None) -> int:
    if value is None:
        raise ValidationError("Max days is required")
    if value <= 0:
        raise ValidationError("Max days must be greater than 0")
    return value


async def _resolve_manager_id(repos: Repositories, value: str | None) -> uuid.UUID | None:
    """Empty means no manager. Anything else must name an existing manager."""
    raw = (value or "").strip()
    if not raw:
        return None
    try:
        manager_id = uuid.UUID(raw)
    except ValueError:
        manager_id = None
    if manager_id is None or await repos.managers.get(manager_id) is None:
        raise NotFoundError(f"Manager {raw} not found")
    return manager_id


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


async def validate_employee_create(
    repos: Repositories,
    payload: CreateEmployeeRequest,
    default_balance: int,
) -> Employee:
    emp_id = _required_text(payload.emp_id, "Employee ID", EMP_ID_MAX_LENGTH)
    name = _required_text(payload.name, "Name", PERSON_NAME_MAX_LENGTH)
    email = _normalize_email(payload.email)
    balance = _non_negative_balance(payload.leave_balance if payload.leave_balance is not None else default_balance)

    if await repos.employees.get(emp_id) is not None:
        raise DuplicateError(f"Employee {emp_id} already exists")

    manager_id = await _resolve_manager_id(repos, payload.manager_id)

    return Employee(emp_id=emp_id, name=name, email=email, leave_balance=balance, manager_id=manager_id)


async def validate_employee_update(
    repos: Repositories,
    payload: UpdateEmployeeRequest,
) -> dict[str, Any]:
    """Return the normalized changes for the fields present in the payload."""
    changes: dict[str, Any] = {}
    fields = payload.model_fields_set

    if "name" in fields:
        changes["name"] = _required_text(payload.name, "Name", PERSON_NAME_MAX_LENGTH)
    if "email" in fields:
        changes["email"] = _normalize_email(payload.email)
    if "leave_balance" in fields:
        if payload.leave_balance is None:
            raise ValidationError("Leave balance must be a non-negative integer")
        changes["leave_balance"] = _non_negative_balance(payload.leave_balance)
    if "manager_id" in fields:
        changes["manager_id"] = await _resolve_manager_id(repos, payload.manager_id)
    return changes


# ---------------------------------------------------------------------------
# Leave types
# ---------------------------------------------------------------------------


async def validate_leave_type_create(repos: Repositories, payload: CreateLeaveTypeRequest) -> LeaveType:
    code = normalize_leave_type_code(payload.code)
    name = _required_text(payload.name, "Leave type name", LEAVE_TYPE_NAME_MAX_LENGTH)
    max_days = _positive_max_days(payload.max_days)

    if await repos.leave_types.get(code) is not None:
        raise DuplicateError(f"Leave type {code} already exists")

    return LeaveType(code=code, name=name, max_days=max_days)


def validate_leave_type_update(payload: UpdateLeaveTypeRequest) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    fields = payload.model_fields_set
    if "name" in fields:
        changes["name"] = _required_text(payload.name, "Leave type name", LEAVE_TYPE_NAME_MAX_LENGTH)
    if "max_days" in fields:
        changes["max_days"] = _positive_max_days(payload.max_days)
    return changes


# ---------------------------------------------------------------------------
# Managers
# ---------------------------------------------------------------------------


async def _ensure_manager_email_free(
    repos: Repositories,
    email: str,
    exclude_id: uuid.UUID | None = None,
) -> None:
    existing = await repos.managers.get_by_email(email)
    if existing is not None and existing.id != exclude_id:
        raise DuplicateError(f"A manager with email {email} already exists")


async def validate_manager_create(repos: Repositories, payload: CreateManagerRequest) -> Manager:
    name = _required_text(payload.name, "Name", PERSON_NAME_MAX_LENGTH)
    email = _normalize_email(payload.email)
    await _ensure_manager_email_free(repos, email)
    return Manager(name=name, email=email)


async def validate_manager_update(
    repos: Repositories,
    manager: Manager,
    payload: UpdateManagerRequest,
) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    fields = payload.model_fields_set
    if "name" in fields:
        changes["name"] = _required_text(payload.name, "Name", PERSON_NAME_MAX_LENGTH)
    if "email" in fields:
        email = _normalize_email(payload.email)
        await _ensure_manager_email_free(repos, email, exclude_id=manager.id)
        changes["email"] = email
    return changes


# ---------------------------------------------------------------------------
# Leave requests
# ---------------------------------------------------------------------------


async def validate_leave_request_create(
    repos: Repositories,
    payload: CreateLeaveRequestPayload,
) -> LeaveRequest:
    """Check dates, references, the leave type limit and the employee balance.

    Order matters: the first violated rule is the one reported.
    """
    employee_id = (payload.employee_id or "").strip()
    if not employee_id:
        raise ValidationError("Employee ID is required")
    if not (payload.leave_type_code or "").strip():
        raise ValidationError("Leave type code is required")
    if payload.start_date is None or payload.end_date is None:
        raise ValidationError("Start date and end date are required")

    if payload.start_date > payload.end_date:
        raise DateRangeError("Start date must be before end date")

    employee = await repos.employees.get(employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")

    code = normalize_leave_type_code(payload.leave_type_code)
    leave_type = await repos.leave_types.get(code)
    if leave_type is None:
        raise NotFoundError(f"Leave type {code} not found")

    days = inclusive_day_count(payload.start_date, payload.end_date)

    if days > leave_type.max_days:
        raise PolicyViolation(f"Cannot request more than {leave_type.max_days} days for {leave_type.name}")
    if days > employee.leave_balance:
        raise InsufficientBalance("Not enough leave balance")

    if payload.status is not None and payload.status != RequestStatus.PENDING.value:
        logger.info("Ignoring client status %r on new leave request for %s", payload.status, employee_id)

    return LeaveRequest(
        employee_id=employee_id,
        leave_type_code=code,
        start_date=payload.start_date,
        end_date=payload.end_date,
        days=days,
        reason=payload.reason,
        status=RequestStatus.PENDING.value,
    )


def validate_leave_request_update(payload: UpdateLeaveRequestPayload) -> dict[str, Any]:
    """Only the reason is editable; status moves through approvals alone."""
    if "status" in payload.model_fields_set:
        raise ValidationError("Leave request status can only be changed by an approval")
    changes: dict[str, Any] = {}
    if "reason" in payload.model_fields_set:
        changes["reason"] = payload.reason
    return changes


# ---------------------------------------------------------------------------
# Approvals
# ---------------------------------------------------------------------------


async def validate_approval_create(repos: Repositories, payload: CreateApprovalPayload) -> Approval:
    """Check the decision, the manager and the target request's state.

    The returned approval carries the employee_id copied from the request.
    """
    if payload.request_id is None:
        raise ValidationError("Leave request ID is required")

    if payload.decision not in (Decision.APPROVED.value, Decision.REJECTED.value):
        raise ValidationError("Decision must be Approved or Rejected")

    manager_name = (payload.manager_name or "").strip()
    if not manager_name:
        raise ValidationError("Manager name is required")

    if await repos.managers.get_by_name(manager_name) is None:
        raise NotFoundError(f"Manager {manager_name} not found")

    leave_request = await repos.requests.get(payload.request_id)
    if leave_request is None:
        raise NotFoundError("Leave request not found")

    if leave_request.status != RequestStatus.PENDING.value:
        raise ConflictError(f"This request has already been {str(leave_request.status).lower()}")

    comments = (payload.comments or "").strip()
    if payload.decision == Decision.REJECTED.value and not comments:
        raise ValidationError("Comments are required when rejecting a request")

    return Approval(
        request_id=leave_request.id,
        employee_id=leave_request.employee_id,
        manager_name=manager_name,
        decision=payload.decision,
        comments=comments or None,
    )
