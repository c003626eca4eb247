# ruff: noqa: TC003
"""SQL implementations of the repositories over an AsyncSession."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select, update
from sqlmodel import col

from leave_management.models import Approval, Employee, LeaveRequest, LeaveType, Manager
from leave_management.repositories.base import Repositories

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_management.models.enums import RequestStatus


def _contains(value: str) -> str:
    return f"%{value.lower()}%"


class SqlEmployeeRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, emp_id: str) -> Employee | None:
        return await self._session.get(Employee, emp_id)

    async def list(self, *, search: str | None = None, manager_id: uuid.UUID | None = None) -> list[Employee]:
        query = select(Employee)
        if search:
            pattern = _contains(search)
            query = query.where(
                or_(
                    func.lower(col(Employee.emp_id)).like(pattern),
                    func.lower(col(Employee.name)).like(pattern),
                    func.lower(col(Employee.email)).like(pattern),
                )
            )
        if manager_id is not None:
            query = query.where(col(Employee.manager_id) == manager_id)
        result = await self._session.execute(query.order_by(col(Employee.emp_id)))
        return list(result.scalars().all())

    async def add(self, employee: Employee) -> Employee:
        self._session.add(employee)
        await self._session.flush()
        return employee

    async def delete(self, employee: Employee) -> None:
        await self._session.delete(employee)
        await self._session.flush()

    async def decrement_balance(self, emp_id: str, days: int) -> int:
        result = await self._session.execute(
            update(Employee)
            .where(col(Employee.emp_id) == emp_id)
            .values(leave_balance=col(Employee.leave_balance) - days)
        )
        return result.rowcount  # type: ignore[attr-defined]

    async def count_for_manager(self, manager_id: uuid.UUID) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(Employee).where(col(Employee.manager_id) == manager_id)
        )
        return result.scalar_one()


class SqlLeaveTypeRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, code: str) -> LeaveType | None:
        return await self._session.get(LeaveType, code)

    async def list(self, *, search: str | None = None) -> list[LeaveType]:
        query = select(LeaveType)
        if search:
            pattern = _contains(search)
            query = query.where(
                or_(
                    func.lower(col(LeaveType.code)).like(pattern),
                    func.lower(col(LeaveType.name)).like(pattern),
                )
            )
        result = await self._session.execute(query.order_by(col(LeaveType.code)))
        return list(result.scalars().all())

    async def add(self, leave_type: LeaveType) -> LeaveType:
        self._session.add(leave_type)
        await self._session.flush()
        return leave_type

    async def delete(self, leave_type: LeaveType) -> None:
        await self._session.delete(leave_type)
        await self._session.flush()


class SqlManagerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, manager_id: uuid.UUID) -> Manager | None:
        return await self._session.get(Manager, manager_id)

    async def get_by_name(self, name: str) -> Manager | None:
        result = await self._session.execute(select(Manager).where(col(Manager.name) == name).limit(1))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Manager | None:
        result = await self._session.execute(select(Manager).where(col(Manager.email) == email))
        return result.scalar_one_or_none()

    async def list(self, *, search: str | None = None) -> list[Manager]:
        query = select(Manager)
        if search:
            pattern = _contains(search)
            query = query.where(
                or_(
                    func.lower(col(Manager.name)).like(pattern),
                    func.lower(col(Manager.email)).like(pattern),
                )
            )
        result = await self._session.execute(query.order_by(col(Manager.name), col(Manager.email)))
        return list(result.scalars().all())

    async def add(self, manager: Manager) -> Manager:
        self._session.add(manager)
        await self._session.flush()
        return manager

    async def delete(self, manager: Manager) -> None:
        await self._session.delete(manager)
        await self._session.flush()


class SqlLeaveRequestRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, request_id: uuid.UUID) -> LeaveRequest | None:
        return await self._session.get(LeaveRequest, request_id)

    async def list(
        self,
        *,
        status: str | None = None,
        employee_id: str | None = None,
        leave_type_code: str | None = None,
    ) -> list[LeaveRequest]:
        query = select(LeaveRequest)
        if status is not None:
            query = query.where(col(LeaveRequest.status) == status)
        if employee_id is not None:
            query = query.where(col(LeaveRequest.employee_id) == employee_id)
        if leave_type_code is not None:
            query = query.where(col(LeaveRequest.leave_type_code) == leave_type_code)
        result = await self._session.execute(
            query.order_by(col(LeaveRequest.created_at).desc(), col(LeaveRequest.id))
        )
        return list(result.scalars().all())

    async def add(self, leave_request: LeaveRequest) -> LeaveRequest:
        self._session.add(leave_request)
        await self._session.flush()
        return leave_request

    async def delete(self, leave_request: LeaveRequest) -> None:
        await self._session.delete(leave_request)
        await self._session.flush()

    async def transition_status(
        self,
        request_id: uuid.UUID,
        from_status: RequestStatus,
        to_status: RequestStatus,
    ) -> bool:
        result = await self._session.execute(
            update(LeaveRequest)
            .where(
                col(LeaveRequest.id) == request_id,
                col(LeaveRequest.status) == from_status.value,
            )
            .values(status=to_status.value)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def count_for_employee(self, emp_id: str) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(LeaveRequest).where(col(LeaveRequest.employee_id) == emp_id)
        )
        return result.scalar_one()

    async def count_for_leave_type(self, code: str) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(LeaveRequest).where(col(LeaveRequest.leave_type_code) == code)
        )
        return result.scalar_one()


class SqlApprovalRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, approval_id: uuid.UUID) -> Approval | None:
        return await self._session.get(Approval, approval_id)

    async def list(
        self,
        *,
        request_id: uuid.UUID | None = None,
        employee_id: str | None = None,
        manager_name: str | None = None,
        decision: str | None = None,
    ) -> list[Approval]:
        query = select(Approval)
        if request_id is not None:
            query = query.where(col(Approval.request_id) == request_id)
        if employee_id is not None:
            query = query.where(col(Approval.employee_id) == employee_id)
        if manager_name is not None:
            query = query.where(col(Approval.manager_name) == manager_name)
        if decision is not None:
            query = query.where(col(Approval.decision) == decision)
        result = await self._session.execute(query.order_by(col(Approval.created_at).desc(), col(Approval.id)))
        return list(result.scalars().all())

    async def add(self, approval: Approval) -> Approval:
        self._session.add(approval)
        await self._session.flush()
        return approval

    async def count_for_request(self, request_id: uuid.UUID) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(Approval).where(col(Approval.request_id) == request_id)
        )
        return result.scalar_one()


class SqlRepositories(Repositories):
    """Repositories sharing one AsyncSession, and therefore one transaction."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__()
        self.session = session
        self.employees = SqlEmployeeRepository(session)
        self.leave_types = SqlLeaveTypeRepository(session)
        self.managers = SqlManagerRepository(session)
        self.requests = SqlLeaveRequestRepository(session)
        self.approvals = SqlApprovalRepository(session)

    async def flush(self) -> None:
        await self.session.flush()

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
