from sqlmodel import SQLModel

from leave_management.models.approval import Approval
from leave_management.models.base import TimestampMixin, UUIDBase
from leave_management.models.employee import Employee
from leave_management.models.enums import BalanceState, Decision, RequestStatus
from leave_management.models.leave_type import LeaveType
from leave_management.models.manager import Manager
from leave_management.models.request import LeaveRequest

__all__ = [
    "Approval",
    "BalanceState",
    "Decision",
    "Employee",
    "LeaveRequest",
    "LeaveType",
    "Manager",
    "RequestStatus",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
