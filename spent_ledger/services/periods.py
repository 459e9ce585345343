"""
Calendar helpers for month-based reports.

Months are written "YYYY-MM". A month covers its first instant
through its last microsecond, both inclusive.
"""

import calendar
from datetime import datetime, timedelta

from spent_ledger.errors import InvalidPeriodError

MONTH_FORMAT = "%Y-%m"


def month_range(month: str) -> tuple[datetime, datetime]:
    """
    Return (start, end) for a "YYYY-MM" month.

    >>> month_range("2024-02")
    (datetime.datetime(2024, 2, 1, 0, 0), datetime.datetime(2024, 2, 29, 23, 59, 59, 999999))
    """
    parts = str(month).strip().split("-")
    if len(parts) != 2:
        raise InvalidPeriodError(f"Invalid month format '{month}' (expected YYYY-MM)")
    try:
        year, month_num = int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidPeriodError(f"Invalid month '{month}'") from None
    if not (1 <= month_num <= 12) or not (1 <= year <= 9999):
        raise InvalidPeriodError(f"Invalid month '{month}'")

    last_day = calendar.monthrange(year, month_num)[1]
    start = datetime(year, month_num, 1)
    end = datetime(year, month_num, last_day) + timedelta(days=1, microseconds=-1)
    return start, end


def month_key(moment: datetime) -> str:
    return moment.strftime(MONTH_FORMAT)


def as_naive_local(moment: datetime) -> datetime:
    """Dates are stored naive in local time."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment
