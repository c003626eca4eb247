# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from leave_management.api.deps import RepositoriesDep
from leave_management.schemas.employee import (
    CreateEmployeeRequest,
    EmployeeListResponse,
    EmployeeResponse,
    UpdateEmployeeRequest,
)
from leave_management.services import employee as employee_service

employees_router = APIRouter(prefix="/employees", tags=["employees"])


@employees_router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(payload: CreateEmployeeRequest, repos: RepositoriesDep) -> EmployeeResponse:
    """Create an employee."""
    return await employee_service.create_employee(repos, payload)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    repos: RepositoriesDep,
    search: str | None = Query(default=None),
    manager_id: uuid.UUID | None = Query(default=None),
) -> EmployeeListResponse:
    """List employees with optional search and manager filters."""
    return await employee_service.list_employees(repos, search, manager_id)


@employees_router.get("/{emp_id}", response_model=EmployeeResponse)
async def get_employee(emp_id: str, repos: RepositoriesDep) -> EmployeeResponse:
    """Get a single employee."""
    return await employee_service.get_employee(repos, emp_id)


@employees_router.patch("/{emp_id}", response_model=EmployeeResponse)
async def update_employee(emp_id: str, payload: UpdateEmployeeRequest, repos: RepositoriesDep) -> EmployeeResponse:
    """Update an employee's details or adjust their balance."""
    return await employee_service.update_employee(repos, emp_id, payload)


@employees_router.delete("/{emp_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(emp_id: str, repos: RepositoriesDep) -> None:
    """Delete an employee without leave requests."""
    await employee_service.delete_employee(repos, emp_id)
