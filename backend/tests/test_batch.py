from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

import pytest

from leave_management.exceptions import ConflictError
from leave_management.models import Employee, LeaveRequest, LeaveType, Manager
from leave_management.schemas.batch import BatchRequest
from leave_management.services.batch import submit_batch

if TYPE_CHECKING:
    from httpx import AsyncClient

    from leave_management.repositories import InMemoryRepositories



def _op(method: str, entity: str, key: str | None = None, **fields: object) -> dict:
    operation: dict[str, object] = {"method": method, "entity": entity, "fields": fields}
    if key is not None:
        operation["key"] = key
    return operation


async def test_batch_creates_in_order(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/batch",
        json={
            "operations": [
                _op("create", "LeaveTypes", code="sick", name="Sick Leave", max_days=10),
                _op("create", "Employees", emp_id="E001", name="Alice", email="alice@acme-corp.com"),
                _op(
                    "create",
                    "LeaveRequests",
                    employee_id="E001",
                    leave_type_code="SICK",
                    start_date="2024-03-04",
                    end_date="2024-03-05",
                ),
            ]
        },
    )
    assert resp.status_code == 200, resp.text
    results = resp.json()["results"]
    assert results[0]["code"] == "SICK"
    assert results[1]["emp_id"] == "E001"
    assert results[2]["days"] == 2
    assert results[2]["status"] == "Pending"


async def test_batch_rolls_back_on_first_failure(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/batch",
        json={
            "operations": [
                _op("create", "Employees", emp_id="E001", name="Alice", email="alice@acme-corp.com"),
                _op("create", "Employees", emp_id="E002", name="Bob", email="not-an-email"),
            ]
        },
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please enter a valid email address"

    assert (await async_client.get("/employees/E001")).status_code == 404
    assert (await async_client.get("/employees")).json()["total"] == 0


async def test_batch_update_and_delete(async_client: AsyncClient) -> None:
    await async_client.post("/leave-types", json={"code": "ANNUAL", "name": "Annual Leave", "max_days": 15})
    await async_client.post("/leave-types", json={"code": "CASUAL", "name": "Casual Leave", "max_days": 3})

    resp = await async_client.post(
        "/batch",
        json={
            "operations": [
                _op("update", "LeaveTypes", "ANNUAL", max_days=20),
                _op("delete", "LeaveTypes", "CASUAL"),
            ]
        },
    )
    assert resp.status_code == 200
    results = resp.json()["results"]
    assert results[0]["max_days"] == 20
    assert results[1] is None
    assert (await async_client.get("/leave-types/CASUAL")).status_code == 404


async def test_batch_approval_runs_workflow(async_client: AsyncClient) -> None:
    await async_client.post("/managers", json={"name": "Priya Raman", "email": "priya.raman@acme-corp.com"})
    await async_client.post("/leave-types", json={"code": "ANNUAL", "name": "Annual Leave", "max_days": 15})
    await async_client.post(
        "/employees", json={"emp_id": "E001", "name": "Alice", "email": "alice@acme-corp.com", "leave_balance": 10}
    )
    created = await async_client.post(
        "/leave-requests",
        json={
            "employee_id": "E001",
            "leave_type_code": "ANNUAL",
            "start_date": "2024-01-01",
            "end_date": "2024-01-03",
        },
    )
    request_id = created.json()["id"]

    resp = await async_client.post(
        "/batch",
        json={
            "operations": [
                _op("create", "Approvals", request_id=request_id, decision="Approved", manager_name="Priya Raman"),
            ]
        },
    )
    assert resp.status_code == 200
    assert (await async_client.get("/employees/E001")).json()["leave_balance"] == 7


async def test_batch_rejects_approval_delete(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/batch",
        json={"operations": [_op("delete", "Approvals", "00000000-0000-0000-0000-000000000001")]},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Approvals cannot be deleted"


async def test_batch_update_requires_key(async_client: AsyncClient) -> None:
    resp = await async_client.post("/batch", json={"operations": [_op("update", "Employees", name="Alice")]})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "A key is required to update Employees"


async def test_batch_bad_field_type(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/batch",
        json={"operations": [_op("create", "LeaveTypes", code="X", name="X", max_days="many")]},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("max_days:")


async def test_batch_empty_is_422(async_client: AsyncClient) -> None:
    resp = await async_client.post("/batch", json={"operations": []})
    assert resp.status_code == 422


async def test_batch_unknown_entity_is_422(async_client: AsyncClient) -> None:
    resp = await async_client.post("/batch", json={"operations": [_op("create", "Departments", name="HR")]})
    assert resp.status_code == 422


async def test_batch_approval_failure_logged_once(
    repos: InMemoryRepositories,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    await repos.managers.add(Manager(name="Priya Raman", email="priya.raman@acme-corp.com"))
    await repos.leave_types.add(LeaveType(code="ANNUAL", name="Annual Leave", max_days=15))
    await repos.employees.add(Employee(emp_id="E001", name="Alice", email="alice@acme-corp.com", leave_balance=10))
    leave_request = await repos.requests.add(
        LeaveRequest(
            employee_id="E001",
            leave_type_code="ANNUAL",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 3),
            days=3,
        )
    )

    async def _already_decided(*_args: object) -> None:
        raise ConflictError("This request has already been rejected")

    monkeypatch.setattr("leave_management.services.approval.apply_approval", _already_decided)
    batch = BatchRequest.model_validate(
        {
            "operations": [
                _op(
                    "create",
                    "Approvals",
                    request_id=str(leave_request.id),
                    decision="Approved",
                    manager_name="Priya Raman",
                )
            ]
        }
    )

    with caplog.at_level(logging.DEBUG, logger="leave_management"), pytest.raises(ConflictError):
        await submit_batch(repos, batch)

    failures = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(failures) == 1
    assert failures[0].name == "leave_management.services.batch"
    assert failures[0].exc_info is None
