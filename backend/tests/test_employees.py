from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _create_manager(client: AsyncClient, name: str = "Priya Raman") -> str:
    email = name.lower().replace(" ", ".") + "@acme-corp.com"
    resp = await client.post("/managers", json={"name": name, "email": email})
    assert resp.status_code == 201
    return resp.json()["id"]


async def _create_employee(client: AsyncClient, emp_id: str = "E001", **overrides: object) -> dict:
    payload: dict[str, object] = {
        "emp_id": emp_id,
        "name": "Alice Johnson",
        "email": f"{emp_id.lower()}@acme-corp.com",
    }
    payload.update(overrides)
    resp = await client.post("/employees", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


async def test_create_employee_defaults_balance(async_client: AsyncClient) -> None:
    data = await _create_employee(async_client)
    assert data["emp_id"] == "E001"
    assert data["leave_balance"] == 20
    assert data["manager_id"] is None


async def test_create_employee_with_manager(async_client: AsyncClient) -> None:
    manager_id = await _create_manager(async_client)
    data = await _create_employee(async_client, manager_id=manager_id, leave_balance=12)
    assert data["manager_id"] == manager_id
    assert data["leave_balance"] == 12


async def test_create_employee_normalizes_email(async_client: AsyncClient) -> None:
    data = await _create_employee(async_client, email="  Alice.Johnson@ACME-corp.com ")
    assert data["email"] == "alice.johnson@acme-corp.com"


async def test_create_employee_duplicate(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    resp = await async_client.post(
        "/employees", json={"emp_id": "E001", "name": "Someone Else", "email": "else@acme-corp.com"}
    )
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "DuplicateError"
    assert body["detail"] == "Employee E001 already exists"


async def test_create_employee_invalid_email(async_client: AsyncClient) -> None:
    resp = await async_client.post("/employees", json={"emp_id": "E001", "name": "Alice", "email": "alice@"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please enter a valid email address"


async def test_create_employee_negative_balance(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/employees",
        json={"emp_id": "E001", "name": "Alice", "email": "alice@acme-corp.com", "leave_balance": -2},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"


async def test_create_employee_unknown_manager(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/employees",
        json={
            "emp_id": "E001",
            "name": "Alice",
            "email": "alice@acme-corp.com",
            "manager_id": "7a0c4a55-7a4e-4a3e-9d54-9bb0f2f2b001",
        },
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "NotFoundError"


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


async def test_get_employee(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    resp = await async_client.get("/employees/E001")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice Johnson"


async def test_get_employee_not_found(async_client: AsyncClient) -> None:
    resp = await async_client.get("/employees/E404")
    assert resp.status_code == 404


async def test_list_employees_search(async_client: AsyncClient) -> None:
    await _create_employee(async_client, "E001", name="Alice Johnson")
    await _create_employee(async_client, "E002", name="Bob Smith")

    resp = await async_client.get("/employees", params={"search": "bob"})
    data = resp.json()
    assert data["total"] == 1
    assert data["items"][0]["emp_id"] == "E002"


async def test_list_employees_by_manager(async_client: AsyncClient) -> None:
    manager_id = await _create_manager(async_client)
    await _create_employee(async_client, "E001", manager_id=manager_id)
    await _create_employee(async_client, "E002")

    resp = await async_client.get("/employees", params={"manager_id": manager_id})
    assert [e["emp_id"] for e in resp.json()["items"]] == ["E001"]


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------


async def test_update_employee_partial(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    resp = await async_client.patch("/employees/E001", json={"leave_balance": 8})
    assert resp.status_code == 200
    data = resp.json()
    assert data["leave_balance"] == 8
    assert data["name"] == "Alice Johnson"


async def test_update_employee_clears_manager(async_client: AsyncClient) -> None:
    manager_id = await _create_manager(async_client)
    await _create_employee(async_client, manager_id=manager_id)

    resp = await async_client.patch("/employees/E001", json={"manager_id": None})
    assert resp.status_code == 200
    assert resp.json()["manager_id"] is None


async def test_update_employee_unknown_manager(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    resp = await async_client.patch(
        "/employees/E001", json={"manager_id": "00000000-0000-0000-0000-000000000001"}
    )
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "NotFoundError"
    assert body["detail"] == "Manager 00000000-0000-0000-0000-000000000001 not found"

    assert (await async_client.get("/employees/E001")).json()["manager_id"] is None


async def test_update_employee_rejects_blank_name(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    resp = await async_client.patch("/employees/E001", json={"name": "  "})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Name is required"


async def test_delete_employee(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    resp = await async_client.delete("/employees/E001")
    assert resp.status_code == 204
    assert (await async_client.get("/employees/E001")).status_code == 404


async def test_delete_employee_with_requests_conflicts(async_client: AsyncClient) -> None:
    await _create_employee(async_client)
    await async_client.post("/leave-types", json={"code": "ANNUAL", "name": "Annual Leave", "max_days": 15})
    resp = await async_client.post(
        "/leave-requests",
        json={
            "employee_id": "E001",
            "leave_type_code": "ANNUAL",
            "start_date": "2024-01-01",
            "end_date": "2024-01-02",
        },
    )
    assert resp.status_code == 201

    resp = await async_client.delete("/employees/E001")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Employee E001 has leave requests and cannot be deleted"
