"""
Small calendar arithmetic interface used by the recurrence scheduler.

The month/day helpers work on plain (year, month, day) integers so the
clamping logic can be exercised without constructing dates or touching a
timezone. The month-window helpers at the bottom back the analytics queries.
"""
import calendar
from datetime import date as Date
from typing import List, Tuple

from dateutil.relativedelta import relativedelta


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(year: int, month: int, n: int) -> Tuple[int, int]:
    """Return the (year, month) reached by adding n months to the first of (year, month)."""
    target = Date(year, month, 1) + relativedelta(months=n)
    return target.year, target.month


def add_years(year: int, month: int, n: int) -> Tuple[int, int]:
    """Return the (year, month) reached by adding n years to the first of (year, month)."""
    target = Date(year, month, 1) + relativedelta(years=n)
    return target.year, target.month


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp day to the valid range for the given year/month."""
    return min(day, days_in_month(year, month))


# ---------- Month windows ----------

def month_start(d: Date) -> Date:
    return d.replace(day=1)


def month_bounds(d: Date) -> Tuple[Date, Date]:
    """Half-open [first of month, first of next month) window containing d."""
    start = month_start(d)
    return start, start + relativedelta(months=1)


def month_starts_back(now: Date, months_back: int) -> List[Date]:
    """The last `months_back` month starts ending with now's month, oldest first."""
    current = month_start(now)
    return [current - relativedelta(months=offset) for offset in range(months_back - 1, -1, -1)]
