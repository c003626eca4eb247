from __future__ import annotations

from typing import TYPE_CHECKING

from leave_management.config import get_settings
from leave_management.exceptions import ConflictError, NotFoundError
from leave_management.schemas.employee import EmployeeListResponse, EmployeeResponse
from leave_management.services.validation import validate_employee_create, validate_employee_update

if TYPE_CHECKING:
    import uuid

    from leave_management.models import Employee
    from leave_management.repositories import Repositories
    from leave_management.schemas.employee import CreateEmployeeRequest, UpdateEmployeeRequest


def build_employee_response(employee: Employee) -> EmployeeResponse:
    """Map an employee model to its response schema."""
    return EmployeeResponse(
        emp_id=employee.emp_id,
        name=employee.name,
        email=employee.email,
        leave_balance=employee.leave_balance,
        manager_id=employee.manager_id,
        created_at=employee.created_at,
    )


async def _get_employee_or_404(repos: Repositories, emp_id: str) -> Employee:
    employee = await repos.employees.get(emp_id)
    if employee is None:
        raise NotFoundError(f"Employee {emp_id} not found")
    return employee


async def create_employee(repos: Repositories, payload: CreateEmployeeRequest) -> EmployeeResponse:
    """Create an employee. The balance defaults to the configured allowance."""
    employee = await validate_employee_create(repos, payload, get_settings().default_leave_balance)
    await repos.employees.add(employee)
    await repos.commit()
    return build_employee_response(employee)


async def update_employee(
    repos: Repositories,
    emp_id: str,
    payload: UpdateEmployeeRequest,
) -> EmployeeResponse:
    """Apply a partial update. Setting leave_balance here is a manual adjustment."""
    employee = await _get_employee_or_404(repos, emp_id)
    changes = await validate_employee_update(repos, payload)
    for field, value in changes.items():
        setattr(employee, field, value)
    await repos.commit()
    return build_employee_response(employee)


async def delete_employee(repos: Repositories, emp_id: str) -> None:
    """Delete an employee that owns no leave requests."""
    employee = await _get_employee_or_404(repos, emp_id)
    if await repos.requests.count_for_employee(emp_id) > 0:
        raise ConflictError(f"Employee {emp_id} has leave requests and cannot be deleted")
    await repos.employees.delete(employee)
    await repos.commit()


async def get_employee(repos: Repositories, emp_id: str) -> EmployeeResponse:
    return build_employee_response(await _get_employee_or_404(repos, emp_id))


async def list_employees(
    repos: Repositories,
    search: str | None = None,
    manager_id: uuid.UUID | None = None,
) -> EmployeeListResponse:
    """List employees ordered by emp_id, optionally filtered."""
    employees = await repos.employees.list(search=search, manager_id=manager_id)
    return EmployeeListResponse(items=[build_employee_response(e) for e in employees], total=len(employees))
