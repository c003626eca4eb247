from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING

import pytest

from leave_management.models.enums import BalanceState
from leave_management.services.report import _percent, balance_state

if TYPE_CHECKING:
    from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _seed(client: AsyncClient) -> None:
    """Two employees under one manager; one approved, one rejected, one pending request."""
    manager = await client.post("/managers", json={"name": "Priya Raman", "email": "priya.raman@acme-corp.com"})
    manager_id = manager.json()["id"]
    await client.post("/leave-types", json={"code": "ANNUAL", "name": "Annual Leave", "max_days": 15})
    await client.post("/leave-types", json={"code": "SICK", "name": "Sick Leave", "max_days": 10})
    for emp_id, name, balance in (("E001", "Alice Johnson", 10), ("E002", "Bob Smith", 4)):
        await client.post(
            "/employees",
            json={
                "emp_id": emp_id,
                "name": name,
                "email": f"{emp_id.lower()}@acme-corp.com",
                "leave_balance": balance,
                "manager_id": manager_id,
            },
        )

    plans = [
        ("E001", "ANNUAL", "2024-01-01", "2024-01-05", "Approved", None),
        ("E001", "SICK", "2024-02-01", "2024-02-01", "Rejected", "Not enough coverage"),
        ("E002", "SICK", "2024-03-01", "2024-03-02", None, None),
    ]
    for emp_id, code, start, end, decision, comments in plans:
        resp = await client.post(
            "/leave-requests",
            json={"employee_id": emp_id, "leave_type_code": code, "start_date": start, "end_date": end},
        )
        assert resp.status_code == 201, resp.text
        if decision is not None:
            resp = await client.post(
                "/approvals",
                json={
                    "request_id": resp.json()["id"],
                    "decision": decision,
                    "manager_name": "Priya Raman",
                    "comments": comments,
                },
            )
            assert resp.status_code == 201, resp.text


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("part", "total", "expected"),
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (3, 3, 100)],
)
def test_percent_rounds_half_up(part: int, total: int, expected: int) -> None:
    assert _percent(part, total) == expected


@pytest.mark.parametrize(
    ("balance", "state"),
    [
        (-1, BalanceState.LOW),
        (4, BalanceState.LOW),
        (5, BalanceState.WARNING),
        (9, BalanceState.WARNING),
        (10, BalanceState.OK),
    ],
)
def test_balance_state_thresholds(balance: int, state: BalanceState) -> None:
    assert balance_state(balance) is state


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


async def test_report_empty_store(async_client: AsyncClient) -> None:
    resp = await async_client.get("/reports")
    assert resp.status_code == 200
    data = resp.json()
    assert data["metrics"] == {"total_employees": 0, "total_requests": 0, "approval_rate": 0, "pending_requests": 0}
    assert data["summary"]["most_used_leave_type"] == "N/A"
    assert data["audit_trail"] == []


async def test_report_metrics(async_client: AsyncClient) -> None:
    await _seed(async_client)
    data = (await async_client.get("/reports")).json()

    assert data["metrics"] == {"total_employees": 2, "total_requests": 3, "approval_rate": 33, "pending_requests": 1}
    assert {s["status"]: s["count"] for s in data["status_summary"]} == {"Approved": 1, "Pending": 1, "Rejected": 1}


async def test_report_leave_type_utilization(async_client: AsyncClient) -> None:
    await _seed(async_client)
    data = (await async_client.get("/reports")).json()

    utilization = data["leave_type_utilization"]
    assert utilization[0]["leave_type_code"] == "SICK"
    assert utilization[0]["request_count"] == 2
    assert utilization[0]["total_days"] == 3
    assert utilization[0]["percentage"] == 67


async def test_report_employee_balances(async_client: AsyncClient) -> None:
    await _seed(async_client)
    balances = (await async_client.get("/reports")).json()["employee_balances"]

    # Sorted ascending by balance: Bob (4) then Alice (10 - 5 = 5).
    assert [(b["emp_id"], b["leave_balance"], b["balance_state"]) for b in balances] == [
        ("E002", 4, "LOW"),
        ("E001", 5, "WARNING"),
    ]


async def test_report_manager_summary(async_client: AsyncClient) -> None:
    await _seed(async_client)
    (summary,) = (await async_client.get("/reports")).json()["manager_summary"]

    assert summary["manager_name"] == "Priya Raman"
    assert summary["total_processed"] == 2
    assert summary["approved"] == 1
    assert summary["rejected"] == 1
    assert summary["pending"] == 1
    assert summary["approval_rate"] == 50


async def test_report_summary_and_audit_trail(async_client: AsyncClient) -> None:
    await _seed(async_client)
    data = (await async_client.get("/reports")).json()

    assert data["summary"]["total_days_taken"] == 5
    assert data["summary"]["low_balance_count"] == 1
    assert data["summary"]["most_used_leave_type"] == "Sick Leave"

    actions = [entry["action"] for entry in data["audit_trail"]]
    assert actions.count("Request Submitted") == 3
    assert "Request Approved" in actions
    assert "Request Rejected" in actions
    assert sum(trend["total_requests"] for trend in data["monthly_trend"]) == 3


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------


async def test_export_employee_balances(async_client: AsyncClient) -> None:
    await _seed(async_client)
    resp = await async_client.get("/reports/export/employee-balances")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == 'attachment; filename="employee-balances.csv"'
    rows = _rows(resp.text)
    assert rows[0] == ["Employee ID", "Name", "Leave Balance", "Request Count", "Status"]
    assert rows[1] == ["E002", "Bob Smith", "4", "1", "LOW"]


async def test_export_leave_types(async_client: AsyncClient) -> None:
    await _seed(async_client)
    rows = _rows((await async_client.get("/reports/export/leave-types")).text)
    assert rows[0] == ["Leave Type", "Request Count", "Total Days Used", "Percentage"]
    assert rows[1] == ["Sick Leave", "2", "3", "67%"]


async def test_export_audit_trail_header(async_client: AsyncClient) -> None:
    await _seed(async_client)
    rows = _rows((await async_client.get("/reports/export/audit-trail")).text)
    assert rows[0] == ["Date", "Employee", "Leave Type", "Days", "Action", "Processed By", "Status"]
    assert len(rows) == 6


async def test_export_unknown_report(async_client: AsyncClient) -> None:
    resp = await async_client.get("/reports/export/payroll")
    assert resp.status_code == 404
