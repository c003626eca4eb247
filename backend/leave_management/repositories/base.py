# ruff: noqa: TC003
"""Repository interfaces for the entity store.

Each entity type gets one explicit repository. The Validation Gate and the
Approval Workflow Engine only ever see these interfaces, bundled into a
``Repositories`` unit of work.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from leave_management.models import Approval, Employee, LeaveRequest, LeaveType, Manager
    from leave_management.models.enums import RequestStatus


@runtime_checkable
class EmployeeRepository(Protocol):
    """Store for Employee records keyed by emp_id."""

    async def get(self, emp_id: str) -> Employee | None: ...

    async def list(self, *, search: str | None = None, manager_id: uuid.UUID | None = None) -> list[Employee]: ...

    async def add(self, employee: Employee) -> Employee: ...

    async def delete(self, employee: Employee) -> None: ...

    async def decrement_balance(self, emp_id: str, days: int) -> int:
        """Relative update ``leave_balance -= days``. Returns the number of rows touched."""
        ...

    async def count_for_manager(self, manager_id: uuid.UUID) -> int: ...


@runtime_checkable
class LeaveTypeRepository(Protocol):
    """Store for LeaveType records keyed by code."""

    async def get(self, code: str) -> LeaveType | None: ...

    async def list(self, *, search: str | None = None) -> list[LeaveType]: ...

    async def add(self, leave_type: LeaveType) -> LeaveType: ...

    async def delete(self, leave_type: LeaveType) -> None: ...


@runtime_checkable
class ManagerRepository(Protocol):
    """Store for Manager records."""

    async def get(self, manager_id: uuid.UUID) -> Manager | None: ...

    async def get_by_name(self, name: str) -> Manager | None: ...

    async def get_by_email(self, email: str) -> Manager | None: ...

    async def list(self, *, search: str | None = None) -> list[Manager]: ...

    async def add(self, manager: Manager) -> Manager: ...

    async def delete(self, manager: Manager) -> None: ...


@runtime_checkable
class LeaveRequestRepository(Protocol):
    """Store for LeaveRequest records."""

    async def get(self, request_id: uuid.UUID) -> LeaveRequest | None: ...

    async def list(
        self,
        *,
        status: str | None = None,
        employee_id: str | None = None,
        leave_type_code: str | None = None,
    ) -> list[LeaveRequest]: ...

    async def add(self, leave_request: LeaveRequest) -> LeaveRequest: ...

    async def delete(self, leave_request: LeaveRequest) -> None: ...

    async def transition_status(
        self,
        request_id: uuid.UUID,
        from_status: RequestStatus,
        to_status: RequestStatus,
    ) -> bool:
        """Atomically set ``status = to_status`` only where it is ``from_status``.

        Returns True when a row was transitioned.
        """
        ...

    async def count_for_employee(self, emp_id: str) -> int: ...

    async def count_for_leave_type(self, code: str) -> int: ...


@runtime_checkable
class ApprovalRepository(Protocol):
    """Append-only store for Approval records."""

    async def get(self, approval_id: uuid.UUID) -> Approval | None: ...

    async def list(
        self,
        *,
        request_id: uuid.UUID | None = None,
        employee_id: str | None = None,
        manager_name: str | None = None,
        decision: str | None = None,
    ) -> list[Approval]: ...

    async def add(self, approval: Approval) -> Approval: ...

    async def count_for_request(self, request_id: uuid.UUID) -> int: ...


class Repositories:
    """Unit of work bundling one repository per entity type.

    ``commit()`` inside a ``batch()`` block only flushes; the batch commits
    once at the end or rolls back on the first error.
    """

    employees: EmployeeRepository
    leave_types: LeaveTypeRepository
    managers: ManagerRepository
    requests: LeaveRequestRepository
    approvals: ApprovalRepository

    def __init__(self) -> None:
        self._batch_depth = 0

    @property
    def in_batch(self) -> bool:
        return self._batch_depth > 0

    async def flush(self) -> None:
        """Push pending changes to the store without ending the transaction."""

    async def _commit(self) -> None:
        raise NotImplementedError

    async def rollback(self) -> None:
        raise NotImplementedError

    async def commit(self) -> None:
        if self.in_batch:
            await self.flush()
            return
        await self._commit()

    @asynccontextmanager
    async def batch(self) -> AsyncIterator[Repositories]:
        self._batch_depth += 1
        try:
            yield self
        except BaseException:
            self._batch_depth -= 1
            await self.rollback()
            raise
        self._batch_depth -= 1
        await self.commit()
