"""Seed script for development data.

Run with:  python -m leave_management.seed [BASE_URL]
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"
HEADERS = {"Content-Type": "application/json"}

MANAGERS = [
    {"name": "Priya Raman", "email": "priya.raman@acme-corp.com"},
    {"name": "Marcus Webb", "email": "marcus.webb@acme-corp.com"},
]

LEAVE_TYPES = [
    {"code": "ANNUAL", "name": "Annual Leave", "max_days": 15},
    {"code": "SICK", "name": "Sick Leave", "max_days": 10},
    {"code": "CASUAL", "name": "Casual Leave", "max_days": 3},
]

# (emp_id, name, email, balance, manager name)
EMPLOYEES = [
    ("E001", "Alice Johnson", "alice.johnson@acme-corp.com", 20, "Priya Raman"),
    ("E002", "Bob Smith", "bob.smith@acme-corp.com", 12, "Priya Raman"),
    ("E003", "Carol Williams", "carol.williams@acme-corp.com", 8, "Marcus Webb"),
    ("E004", "Dave Brown", "dave.brown@acme-corp.com", 3, None),
]


async def _safe_post(client: httpx.AsyncClient, url: str, json: dict, label: str) -> dict | None:
    """POST with 409-conflict tolerance so the script can be re-run."""
    resp = await client.post(url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} ({resp.json().get('detail')})")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_managers(client: httpx.AsyncClient, base_url: str) -> dict[str, str]:
    """Create managers and return their IDs keyed by name."""
    print("\n--- Seeding managers ---")
    for manager in MANAGERS:
        await _safe_post(client, f"{base_url}/managers", manager, f"Manager: {manager['name']}")
    resp = await client.get(f"{base_url}/managers")
    resp.raise_for_status()
    return {m["name"]: m["id"] for m in resp.json()["items"]}


async def seed_leave_types(client: httpx.AsyncClient, base_url: str) -> None:
    print("\n--- Seeding leave types ---")
    for leave_type in LEAVE_TYPES:
        await _safe_post(client, f"{base_url}/leave-types", leave_type, f"Leave type: {leave_type['code']}")


async def seed_employees(client: httpx.AsyncClient, base_url: str, manager_ids: dict[str, str]) -> None:
    print("\n--- Seeding employees ---")
    for emp_id, name, email, balance, manager_name in EMPLOYEES:
        await _safe_post(
            client,
            f"{base_url}/employees",
            {
                "emp_id": emp_id,
                "name": name,
                "email": email,
                "leave_balance": balance,
                "manager_id": manager_ids.get(manager_name) if manager_name else None,
            },
            f"Employee: {emp_id} {name}",
        )


async def seed_requests(client: httpx.AsyncClient, base_url: str) -> None:
    """Create a few requests and decide two of them.

    Requests are only seeded when the employee has none yet, so re-runs do not
    keep deducting balance.
    """
    print("\n--- Seeding leave requests ---")
    start = date.today() + timedelta(days=14)

    plans = [
        ("E001", "ANNUAL", start, start + timedelta(days=4), "Family trip", "Approved", None),
        ("E002", "SICK", start, start + timedelta(days=1), "Medical appointment", "Rejected", "Not enough coverage"),
        ("E003", "CASUAL", start + timedelta(days=7), start + timedelta(days=7), "Personal errand", None, None),
    ]

    for emp_id, code, start_date, end_date, reason, decision, comments in plans:
        existing = await client.get(f"{base_url}/leave-requests", params={"employee_id": emp_id})
        if existing.status_code == 200 and existing.json()["total"] > 0:
            print(f"  [SKIP] Request for {emp_id} (already has requests)")
            continue

        created = await _safe_post(
            client,
            f"{base_url}/leave-requests",
            {
                "employee_id": emp_id,
                "leave_type_code": code,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "reason": reason,
            },
            f"Request: {emp_id} {code} {start_date}..{end_date}",
        )
        if created is None or decision is None:
            continue

        await _safe_post(
            client,
            f"{base_url}/approvals",
            {
                "request_id": created["id"],
                "decision": decision,
                "manager_name": MANAGERS[0]["name"],
                "comments": comments,
            },
            f"Approval: {emp_id} {decision}",
        )


async def main(base_url: str = BASE_URL) -> None:
    print("=" * 60)
    print("  Leave Management — Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{base_url}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", base_url)
            sys.exit(1)

        manager_ids = await seed_managers(client, base_url)
        await seed_leave_types(client, base_url)
        await seed_employees(client, base_url, manager_ids)
        await seed_requests(client, base_url)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else BASE_URL))
