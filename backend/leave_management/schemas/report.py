from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from leave_management.models.enums import BalanceState


class Metrics(BaseModel):
    """Headline numbers for the dashboard."""

    total_employees: int
    total_requests: int
    approval_rate: int
    pending_requests: int


class StatusSummaryItem(BaseModel):
    """Request count and share for one status."""

    status: str
    count: int
    percentage: int


class LeaveTypeUtilization(BaseModel):
    """Request volume for one leave type."""

    leave_type_code: str
    leave_type_name: str
    request_count: int
    total_days: int
    percentage: int


class EmployeeBalance(BaseModel):
    """Remaining balance for one employee."""

    emp_id: str
    name: str
    leave_balance: int
    request_count: int
    balance_state: BalanceState


class ManagerSummary(BaseModel):
    """Decisions recorded by one manager."""

    manager_name: str
    total_processed: int
    approved: int
    rejected: int
    pending: int
    approval_rate: int


class MonthlyTrend(BaseModel):
    """Requests created in one calendar month."""

    month: str
    total_requests: int
    approved: int
    rejected: int
    pending: int
    approval_rate: int


class AuditTrailEntry(BaseModel):
    """One submission or decision event."""

    timestamp: datetime
    employee_name: str
    leave_type: str
    days: int
    action: str
    processed_by: str
    status: str


class Summary(BaseModel):
    """Aggregate balance and usage figures."""

    total_days_taken: int
    avg_leave_balance: int
    low_balance_count: int
    most_used_leave_type: str


class ReportResponse(BaseModel):
    """Full reporting dashboard."""

    metrics: Metrics
    status_summary: list[StatusSummaryItem]
    leave_type_utilization: list[LeaveTypeUtilization]
    employee_balances: list[EmployeeBalance]
    manager_summary: list[ManagerSummary]
    monthly_trend: list[MonthlyTrend]
    audit_trail: list[AuditTrailEntry]
    summary: Summary
