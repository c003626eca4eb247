# ruff: noqa: TC003
"""In-memory repositories for development and tests.

Records are held as model instances; updates mutate them in place. There are
no transactions: ``rollback()`` is a no-op.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from leave_management.repositories.base import Repositories

if TYPE_CHECKING:
    from leave_management.models import Approval, Employee, LeaveRequest, LeaveType, Manager
    from leave_management.models.enums import RequestStatus


def _matches(search: str, *values: str) -> bool:
    needle = search.lower()
    return any(needle in value.lower() for value in values)


class InMemoryEmployeeRepository:
    def __init__(self) -> None:
        self._employees: dict[str, Employee] = {}

    async def get(self, emp_id: str) -> Employee | None:
        return self._employees.get(emp_id)

    async def list(self, *, search: str | None = None, manager_id: uuid.UUID | None = None) -> list[Employee]:
        items = sorted(self._employees.values(), key=lambda e: e.emp_id)
        if search:
            items = [e for e in items if _matches(search, e.emp_id, e.name, e.email)]
        if manager_id is not None:
            items = [e for e in items if e.manager_id == manager_id]
        return items

    async def add(self, employee: Employee) -> Employee:
        self._employees[employee.emp_id] = employee
        return employee

    async def delete(self, employee: Employee) -> None:
        self._employees.pop(employee.emp_id, None)

    async def decrement_balance(self, emp_id: str, days: int) -> int:
        employee = self._employees.get(emp_id)
        if employee is None:
            return 0
        employee.leave_balance -= days
        return 1

    async def count_for_manager(self, manager_id: uuid.UUID) -> int:
        return sum(1 for e in self._employees.values() if e.manager_id == manager_id)


class InMemoryLeaveTypeRepository:
    def __init__(self) -> None:
        self._leave_types: dict[str, LeaveType] = {}

    async def get(self, code: str) -> LeaveType | None:
        return self._leave_types.get(code)

    async def list(self, *, search: str | None = None) -> list[LeaveType]:
        items = sorted(self._leave_types.values(), key=lambda t: t.code)
        if search:
            items = [t for t in items if _matches(search, t.code, t.name)]
        return items

    async def add(self, leave_type: LeaveType) -> LeaveType:
        self._leave_types[leave_type.code] = leave_type
        return leave_type

    async def delete(self, leave_type: LeaveType) -> None:
        self._leave_types.pop(leave_type.code, None)


class InMemoryManagerRepository:
    def __init__(self) -> None:
        self._managers: dict[uuid.UUID, Manager] = {}

    async def get(self, manager_id: uuid.UUID) -> Manager | None:
        return self._managers.get(manager_id)

    async def get_by_name(self, name: str) -> Manager | None:
        return next((m for m in self._managers.values() if m.name == name), None)

    async def get_by_email(self, email: str) -> Manager | None:
        return next((m for m in self._managers.values() if m.email == email), None)

    async def list(self, *, search: str | None = None) -> list[Manager]:
        items = sorted(self._managers.values(), key=lambda m: (m.name, m.email))
        if search:
            items = [m for m in items if _matches(search, m.name, m.email)]
        return items

    async def add(self, manager: Manager) -> Manager:
        self._managers[manager.id] = manager
        return manager

    async def delete(self, manager: Manager) -> None:
        self._managers.pop(manager.id, None)


class InMemoryLeaveRequestRepository:
    def __init__(self) -> None:
        self._requests: dict[uuid.UUID, LeaveRequest] = {}

    async def get(self, request_id: uuid.UUID) -> LeaveRequest | None:
        return self._requests.get(request_id)

    async def list(
        self,
        *,
        status: str | None = None,
        employee_id: str | None = None,
        leave_type_code: str | None = None,
    ) -> list[LeaveRequest]:
        items = sorted(self._requests.values(), key=lambda r: r.created_at, reverse=True)
        if status is not None:
            items = [r for r in items if r.status == status]
        if employee_id is not None:
            items = [r for r in items if r.employee_id == employee_id]
        if leave_type_code is not None:
            items = [r for r in items if r.leave_type_code == leave_type_code]
        return items

    async def add(self, leave_request: LeaveRequest) -> LeaveRequest:
        self._requests[leave_request.id] = leave_request
        return leave_request

    async def delete(self, leave_request: LeaveRequest) -> None:
        self._requests.pop(leave_request.id, None)

    async def transition_status(
        self,
        request_id: uuid.UUID,
        from_status: RequestStatus,
        to_status: RequestStatus,
    ) -> bool:
        leave_request = self._requests.get(request_id)
        if leave_request is None or leave_request.status != from_status.value:
            return False
        leave_request.status = to_status.value
        return True

    async def count_for_employee(self, emp_id: str) -> int:
        return sum(1 for r in self._requests.values() if r.employee_id == emp_id)

    async def count_for_leave_type(self, code: str) -> int:
        return sum(1 for r in self._requests.values() if r.leave_type_code == code)


class InMemoryApprovalRepository:
    def __init__(self) -> None:
        self._approvals: dict[uuid.UUID, Approval] = {}

    async def get(self, approval_id: uuid.UUID) -> Approval | None:
        return self._approvals.get(approval_id)

    async def list(
        self,
        *,
        request_id: uuid.UUID | None = None,
        employee_id: str | None = None,
        manager_name: str | None = None,
        decision: str | None = None,
    ) -> list[Approval]:
        items = sorted(self._approvals.values(), key=lambda a: a.created_at, reverse=True)
        if request_id is not None:
            items = [a for a in items if a.request_id == request_id]
        if employee_id is not None:
            items = [a for a in items if a.employee_id == employee_id]
        if manager_name is not None:
            items = [a for a in items if a.manager_name == manager_name]
        if decision is not None:
            items = [a for a in items if a.decision == decision]
        return items

    async def add(self, approval: Approval) -> Approval:
        self._approvals[approval.id] = approval
        return approval

    async def count_for_request(self, request_id: uuid.UUID) -> int:
        return sum(1 for a in self._approvals.values() if a.request_id == request_id)


class InMemoryRepositories(Repositories):
    """Repositories backed by plain dictionaries."""

    def __init__(self) -> None:
        super().__init__()
        self.employees = InMemoryEmployeeRepository()
        self.leave_types = InMemoryLeaveTypeRepository()
        self.managers = InMemoryManagerRepository()
        self.requests = InMemoryLeaveRequestRepository()
        self.approvals = InMemoryApprovalRepository()

    async def _commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None
