from __future__ import annotations

from datetime import date


def inclusive_day_count(start_date: date, end_date: date) -> int:
    """Number of calendar days from start_date to end_date, both included.

    Weekends and holidays count. Returns 0 or less when end_date precedes
    start_date; callers reject that range before using the count.
    """
    return (end_date - start_date).days + 1
