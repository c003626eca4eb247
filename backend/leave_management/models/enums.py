from __future__ import annotations

import enum


class RequestStatus(enum.StrEnum):
    """Lifecycle of a leave request. Pending is initial, the others are terminal."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Decision(enum.StrEnum):
    """A manager's decision recorded on an approval."""

    APPROVED = "Approved"
    REJECTED = "Rejected"


class BalanceState(enum.StrEnum):
    """Reporting bucket for an employee's remaining balance."""

    LOW = "LOW"
    WARNING = "WARNING"
    OK = "OK"
