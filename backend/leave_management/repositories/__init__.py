from leave_management.repositories.base import (
    ApprovalRepository,
    EmployeeRepository,
    LeaveRequestRepository,
    LeaveTypeRepository,
    ManagerRepository,
    Repositories,
)
from leave_management.repositories.memory import InMemoryRepositories
from leave_management.repositories.sql import SqlRepositories

__all__ = [
    "ApprovalRepository",
    "EmployeeRepository",
    "InMemoryRepositories",
    "LeaveRequestRepository",
    "LeaveTypeRepository",
    "ManagerRepository",
    "Repositories",
    "SqlRepositories",
]
