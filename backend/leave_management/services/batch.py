"""Batch change sets: several entity operations committed as one unit.

Each operation goes through the same use case, and therefore the same
validation, as its single-call counterpart. The first failure rolls back
everything applied so far.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

import pydantic

from leave_management.exceptions import AppError, ValidationError
from leave_management.schemas.approval import CreateApprovalPayload
from leave_management.schemas.batch import BatchResponse
from leave_management.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest
from leave_management.schemas.leave_type import CreateLeaveTypeRequest, UpdateLeaveTypeRequest
from leave_management.schemas.manager import CreateManagerRequest, UpdateManagerRequest
from leave_management.schemas.request import CreateLeaveRequestPayload, UpdateLeaveRequestPayload
from leave_management.services import approval as approval_service
from leave_management.services import employee as employee_service
from leave_management.services import leave_type as leave_type_service
from leave_management.services import manager as manager_service
from leave_management.services import request as request_service

if TYPE_CHECKING:
    from pydantic import BaseModel

    from leave_management.repositories import Repositories
    from leave_management.schemas.batch import BatchOperation, BatchRequest

logger = logging.getLogger(__name__)


def _parse_fields(model: type[BaseModel], fields: dict[str, Any]) -> Any:
    try:
        return model.model_validate(fields)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"{location}: {first['msg']}") from None


def _require_key(operation: BatchOperation) -> str:
    if not operation.key:
        raise ValidationError(f"A key is required to {operation.method} {operation.entity}")
    return operation.key


def _uuid_key(operation: BatchOperation) -> uuid.UUID:
    key = _require_key(operation)
    try:
        return uuid.UUID(key)
    except ValueError:
        raise ValidationError(f"Invalid key {key!r} for {operation.entity}") from None


async def _apply_operation(repos: Repositories, operation: BatchOperation) -> BaseModel | None:
    """Dispatch one operation to its use case."""
    method, entity, fields = operation.method, operation.entity, operation.fields

    if entity == "Employees":
        if method == "create":
            return await employee_service.create_employee(repos, _parse_fields(CreateEmployeeRequest, fields))
        if method == "update":
            payload = _parse_fields(UpdateEmployeeRequest, fields)
            return await employee_service.update_employee(repos, _require_key(operation), payload)
        await employee_service.delete_employee(repos, _require_key(operation))
        return None

    if entity == "LeaveTypes":
        if method == "create":
            return await leave_type_service.create_leave_type(repos, _parse_fields(CreateLeaveTypeRequest, fields))
        if method == "update":
            payload = _parse_fields(UpdateLeaveTypeRequest, fields)
            return await leave_type_service.update_leave_type(repos, _require_key(operation), payload)
        await leave_type_service.delete_leave_type(repos, _require_key(operation))
        return None

    if entity == "Managers":
        if method == "create":
            return await manager_service.create_manager(repos, _parse_fields(CreateManagerRequest, fields))
        if method == "update":
            payload = _parse_fields(UpdateManagerRequest, fields)
            return await manager_service.update_manager(repos, _uuid_key(operation), payload)
        await manager_service.delete_manager(repos, _uuid_key(operation))
        return None

    if entity == "LeaveRequests":
        if method == "create":
            payload = _parse_fields(CreateLeaveRequestPayload, fields)
            return await request_service.create_leave_request(repos, payload)
        if method == "update":
            payload = _parse_fields(UpdateLeaveRequestPayload, fields)
            return await request_service.update_leave_request(repos, _uuid_key(operation), payload)
        await request_service.delete_leave_request(repos, _uuid_key(operation))
        return None

    # Approvals are immutable once recorded.
    if method != "create":
        raise ValidationError(f"Approvals cannot be {'updated' if method == 'update' else 'deleted'}")
    return await approval_service.create_approval(repos, _parse_fields(CreateApprovalPayload, fields))


async def submit_batch(repos: Repositories, batch: BatchRequest) -> BatchResponse:
    """Apply every operation in order inside one transaction."""
    results: list[dict[str, Any] | None] = []
    async with repos.batch():
        for index, operation in enumerate(batch.operations):
            try:
                record = await _apply_operation(repos, operation)
            except AppError as exc:
                logger.warning(
                    "Batch operation %d (%s %s) failed, rolling back: %s",
                    index,
                    operation.method,
                    operation.entity,
                    exc.message,
                )
                raise
            results.append(record.model_dump(mode="json") if record is not None else None)
    return BatchResponse(results=results)
