"""Reporting service: dashboard aggregations and CSV exports.

Everything here is a read-only view over already validated records.
"""

from __future__ import annotations

import csv
import io
import math
from collections import Counter
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from leave_management.config import get_settings
from leave_management.exceptions import NotFoundError
from leave_management.models.enums import BalanceState, Decision, RequestStatus
from leave_management.schemas.report import (
    AuditTrailEntry,
    EmployeeBalance,
    LeaveTypeUtilization,
    ManagerSummary,
    Metrics,
    MonthlyTrend,
    ReportResponse,
    StatusSummaryItem,
    Summary,
)

if TYPE_CHECKING:
    from leave_management.models import Approval, Employee, LeaveRequest, LeaveType, Manager
    from leave_management.repositories import Repositories

TREND_MONTHS = 6
AUDIT_TRAIL_LIMIT = 50


def _percent(part: int, total: int) -> int:
    """Whole-number percentage, rounding halves up."""
    if total <= 0:
        return 0
    return math.floor(part * 100 / total + 0.5)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


def balance_state(balance: int) -> BalanceState:
    settings = get_settings()
    if balance < settings.low_balance_threshold:
        return BalanceState.LOW
    if balance < settings.warning_balance_threshold:
        return BalanceState.WARNING
    return BalanceState.OK


# ---------------------------------------------------------------------------
# Individual reports
# ---------------------------------------------------------------------------


def compute_metrics(employees: list[Employee], requests: list[LeaveRequest]) -> Metrics:
    statuses = Counter(str(r.status) for r in requests)
    return Metrics(
        total_employees=len(employees),
        total_requests=len(requests),
        approval_rate=_percent(statuses[RequestStatus.APPROVED.value], len(requests)),
        pending_requests=statuses[RequestStatus.PENDING.value],
    )


def compute_status_summary(requests: list[LeaveRequest]) -> list[StatusSummaryItem]:
    statuses = Counter(str(r.status) for r in requests)
    return [
        StatusSummaryItem(
            status=status.value,
            count=statuses[status.value],
            percentage=_percent(statuses[status.value], len(requests)),
        )
        for status in (RequestStatus.APPROVED, RequestStatus.PENDING, RequestStatus.REJECTED)
    ]


def compute_leave_type_utilization(
    requests: list[LeaveRequest],
    leave_types: list[LeaveType],
) -> list[LeaveTypeUtilization]:
    names = {t.code: t.name for t in leave_types}
    counts: Counter[str] = Counter()
    days: Counter[str] = Counter()
    for r in requests:
        counts[r.leave_type_code] += 1
        days[r.leave_type_code] += r.days

    items = [
        LeaveTypeUtilization(
            leave_type_code=code,
            leave_type_name=names.get(code, "Unknown"),
            request_count=count,
            total_days=days[code],
            percentage=_percent(count, len(requests)),
        )
        for code, count in counts.items()
    ]
    return sorted(items, key=lambda item: item.request_count, reverse=True)


def compute_employee_balances(employees: list[Employee], requests: list[LeaveRequest]) -> list[EmployeeBalance]:
    request_counts = Counter(r.employee_id for r in requests)
    items = [
        EmployeeBalance(
            emp_id=e.emp_id,
            name=e.name,
            leave_balance=e.leave_balance,
            request_count=request_counts[e.emp_id],
            balance_state=balance_state(e.leave_balance),
        )
        for e in employees
    ]
    return sorted(items, key=lambda item: item.leave_balance)


def compute_manager_summary(
    managers: list[Manager],
    employees: list[Employee],
    requests: list[LeaveRequest],
    approvals: list[Approval],
) -> list[ManagerSummary]:
    manager_of = {e.emp_id: e.manager_id for e in employees}
    items = []
    for manager in managers:
        decisions = Counter(str(a.decision) for a in approvals if a.manager_name == manager.name)
        processed = sum(decisions.values())
        pending = sum(
            1
            for r in requests
            if r.status == RequestStatus.PENDING.value and manager_of.get(r.employee_id) == manager.id
        )
        items.append(
            ManagerSummary(
                manager_name=manager.name,
                total_processed=processed,
                approved=decisions[Decision.APPROVED.value],
                rejected=decisions[Decision.REJECTED.value],
                pending=pending,
                approval_rate=_percent(decisions[Decision.APPROVED.value], processed),
            )
        )
    return sorted(items, key=lambda item: item.total_processed, reverse=True)


def compute_monthly_trend(requests: list[LeaveRequest]) -> list[MonthlyTrend]:
    """Requests grouped by creation month, last six months with activity."""
    months: dict[str, Counter[str]] = {}
    for r in requests:
        key = _as_utc(r.created_at).strftime("%Y-%m")
        months.setdefault(key, Counter())[str(r.status)] += 1

    trend = []
    for key in sorted(months)[-TREND_MONTHS:]:
        statuses = months[key]
        total = sum(statuses.values())
        trend.append(
            MonthlyTrend(
                month=key,
                total_requests=total,
                approved=statuses[RequestStatus.APPROVED.value],
                rejected=statuses[RequestStatus.REJECTED.value],
                pending=statuses[RequestStatus.PENDING.value],
                approval_rate=_percent(statuses[RequestStatus.APPROVED.value], total),
            )
        )
    return trend


def build_audit_trail(
    employees: list[Employee],
    leave_types: list[LeaveType],
    requests: list[LeaveRequest],
    approvals: list[Approval],
) -> list[AuditTrailEntry]:
    """Submissions and decisions, newest first."""
    employee_names = {e.emp_id: e.name for e in employees}
    type_names = {t.code: t.name for t in leave_types}
    requests_by_id = {r.id: r for r in requests}

    trail = [
        AuditTrailEntry(
            timestamp=_as_utc(r.created_at),
            employee_name=employee_names.get(r.employee_id, "Unknown"),
            leave_type=type_names.get(r.leave_type_code, "Unknown"),
            days=r.days,
            action="Request Submitted",
            processed_by="Employee",
            status=str(r.status),
        )
        for r in requests
    ]
    for a in approvals:
        request = requests_by_id.get(a.request_id)
        trail.append(
            AuditTrailEntry(
                timestamp=_as_utc(a.created_at),
                employee_name=employee_names.get(a.employee_id, "Unknown"),
                leave_type=type_names.get(request.leave_type_code, "Unknown") if request else "Unknown",
                days=request.days if request else 0,
                action="Request Approved" if a.decision == Decision.APPROVED.value else "Request Rejected",
                processed_by=a.manager_name,
                status=str(a.decision),
            )
        )
    trail.sort(key=lambda entry: entry.timestamp, reverse=True)
    return trail[:AUDIT_TRAIL_LIMIT]


def compute_summary(
    employees: list[Employee],
    requests: list[LeaveRequest],
    leave_types: list[LeaveType],
) -> Summary:
    settings = get_settings()
    total_balance = sum(e.leave_balance for e in employees)

    usage = Counter(r.leave_type_code for r in requests)
    most_used = "N/A"
    if usage:
        code = usage.most_common(1)[0][0]
        most_used = next((t.name for t in leave_types if t.code == code), code)

    return Summary(
        total_days_taken=sum(r.days for r in requests if r.status == RequestStatus.APPROVED.value),
        avg_leave_balance=math.floor(total_balance / len(employees) + 0.5) if employees else 0,
        low_balance_count=sum(1 for e in employees if e.leave_balance < settings.low_balance_threshold),
        most_used_leave_type=most_used,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def get_report(repos: Repositories) -> ReportResponse:
    """Build the full reporting dashboard."""
    employees = await repos.employees.list()
    leave_types = await repos.leave_types.list()
    managers = await repos.managers.list()
    requests = await repos.requests.list()
    approvals = await repos.approvals.list()

    return ReportResponse(
        metrics=compute_metrics(employees, requests),
        status_summary=compute_status_summary(requests),
        leave_type_utilization=compute_leave_type_utilization(requests, leave_types),
        employee_balances=compute_employee_balances(employees, requests),
        manager_summary=compute_manager_summary(managers, employees, requests, approvals),
        monthly_trend=compute_monthly_trend(requests),
        audit_trail=build_audit_trail(employees, leave_types, requests, approvals),
        summary=compute_summary(employees, requests, leave_types),
    )


EXPORTABLE_REPORTS = ("leave-types", "employee-balances", "managers", "audit-trail")


def _to_csv(header: list[str], rows: list[list[object]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


async def export_report_csv(repos: Repositories, report_name: str) -> str:
    """Render one dashboard section as CSV text."""
    if report_name not in EXPORTABLE_REPORTS:
        raise NotFoundError(f"Unknown report {report_name}; available: {', '.join(EXPORTABLE_REPORTS)}")

    report = await get_report(repos)

    if report_name == "leave-types":
        return _to_csv(
            ["Leave Type", "Request Count", "Total Days Used", "Percentage"],
            [
                [u.leave_type_name, u.request_count, u.total_days, f"{u.percentage}%"]
                for u in report.leave_type_utilization
            ],
        )
    if report_name == "employee-balances":
        return _to_csv(
            ["Employee ID", "Name", "Leave Balance", "Request Count", "Status"],
            [[b.emp_id, b.name, b.leave_balance, b.request_count, b.balance_state.value] for b in report.employee_balances],
        )
    if report_name == "managers":
        return _to_csv(
            ["Manager", "Total Processed", "Approved", "Rejected", "Pending", "Approval Rate"],
            [
                [m.manager_name, m.total_processed, m.approved, m.rejected, m.pending, f"{m.approval_rate}%"]
                for m in report.manager_summary
            ],
        )
    return _to_csv(
        ["Date", "Employee", "Leave Type", "Days", "Action", "Processed By", "Status"],
        [
            [e.timestamp.date().isoformat(), e.employee_name, e.leave_type, e.days, e.action, e.processed_by, e.status]
            for e in report.audit_trail
        ],
    )
