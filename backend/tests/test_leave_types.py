from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpx import AsyncClient


async def _create_leave_type(client: AsyncClient, code: str = "ANNUAL", **overrides: object) -> dict:
    payload: dict[str, object] = {"code": code, "name": "Annual Leave", "max_days": 15}
    payload.update(overrides)
    resp = await client.post("/leave-types", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_leave_type(async_client: AsyncClient) -> None:
    data = await _create_leave_type(async_client, code=" annual ")
    assert data["code"] == "ANNUAL"
    assert data["max_days"] == 15


async def test_create_leave_type_duplicate(async_client: AsyncClient) -> None:
    await _create_leave_type(async_client)
    resp = await async_client.post("/leave-types", json={"code": "Annual", "name": "Again", "max_days": 3})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Leave type ANNUAL already exists"


async def test_create_leave_type_zero_max_days(async_client: AsyncClient) -> None:
    resp = await async_client.post("/leave-types", json={"code": "SICK", "name": "Sick Leave", "max_days": 0})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Max days must be greater than 0"


async def test_create_leave_type_name_too_long(async_client: AsyncClient) -> None:
    resp = await async_client.post("/leave-types", json={"code": "SICK", "name": "x" * 41, "max_days": 5})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Leave type name must be 40 characters or less"


async def test_get_leave_type_case_insensitive(async_client: AsyncClient) -> None:
    await _create_leave_type(async_client)
    resp = await async_client.get("/leave-types/annual")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Annual Leave"


async def test_list_leave_types_search(async_client: AsyncClient) -> None:
    await _create_leave_type(async_client, "ANNUAL")
    await _create_leave_type(async_client, "SICK", name="Sick Leave", max_days=10)

    resp = await async_client.get("/leave-types", params={"search": "sick"})
    data = resp.json()
    assert data["total"] == 1
    assert data["items"][0]["code"] == "SICK"


async def test_update_leave_type(async_client: AsyncClient) -> None:
    await _create_leave_type(async_client)
    resp = await async_client.patch("/leave-types/ANNUAL", json={"max_days": 20})
    assert resp.status_code == 200
    assert resp.json()["max_days"] == 20


async def test_update_leave_type_not_found(async_client: AsyncClient) -> None:
    resp = await async_client.patch("/leave-types/STUDY", json={"max_days": 2})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Leave type STUDY not found"


async def test_delete_leave_type(async_client: AsyncClient) -> None:
    await _create_leave_type(async_client)
    assert (await async_client.delete("/leave-types/ANNUAL")).status_code == 204
    assert (await async_client.get("/leave-types/ANNUAL")).status_code == 404


async def test_delete_leave_type_in_use_conflicts(async_client: AsyncClient) -> None:
    await _create_leave_type(async_client)
    await async_client.post("/employees", json={"emp_id": "E001", "name": "Alice", "email": "alice@acme-corp.com"})
    await async_client.post(
        "/leave-requests",
        json={
            "employee_id": "E001",
            "leave_type_code": "ANNUAL",
            "start_date": "2024-01-01",
            "end_date": "2024-01-01",
        },
    )

    resp = await async_client.delete("/leave-types/ANNUAL")
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Leave type ANNUAL is used by leave requests and cannot be deleted"
