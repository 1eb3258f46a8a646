import re
from datetime import date as Date, datetime, timedelta
from typing import Optional, Union

from dateutil.tz import gettz

from ghostbill import conf
from ghostbill.core import calendar_math
from ghostbill.domain.models.enums.frequency import Frequency

DATE_ONLY_FORMAT = "%Y-%m-%d"
# ASCII digits only; strptime would also take other Unicode digits
_DATE_ONLY_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

_DAY_STEPS = {
    Frequency.daily: 1,
    Frequency.weekly: 7,
    Frequency.biweekly: 14,
}


def today(tz_name: str = conf.CALENDAR_TZ) -> Date:
    """Current calendar day in the fixed scheduling calendar (UTC by default)."""
    tz = gettz(tz_name) or gettz("UTC")
    return datetime.now(tz).date()


def parse_date_only(text: Optional[str]) -> Optional[Date]:
    """Parse a canonical YYYY-MM-DD string, returning None on failure."""
    if not text or not _DATE_ONLY_RE.match(text.strip()):
        return None
    try:
        return datetime.strptime(text.strip(), DATE_ONLY_FORMAT).date()
    except ValueError:
        return None


def format_date_only(d: Date) -> str:
    return d.strftime(DATE_ONLY_FORMAT)


def _advance_months(d: Date, months: int) -> Date:
    year, month = calendar_math.add_months(d.year, d.month, months)
    return Date(year, month, calendar_math.clamp_day(year, month, d.day))


def _advance_years(d: Date, years: int) -> Date:
    year, _ = calendar_math.add_years(d.year, d.month, years)
    # Target month is always the original month
    month = d.month
    return Date(year, month, calendar_math.clamp_day(year, month, d.day))


def advance(d: Date, frequency: Union[Frequency, str, None]) -> Date:
    """
    Compute the occurrence that follows `d`.

    Daily, weekly and biweekly are exact day counts. Monthly and yearly add
    the calendar unit to the first of the month and then cap the original
    day-of-month to the target month's length, so Jan 31 + 1 month lands on
    Feb 28/29 and Feb 29 + 1 year lands on Feb 28 in a non-leap year.
    """
    if not isinstance(frequency, Frequency):
        frequency = Frequency.parse(frequency)

    if frequency in _DAY_STEPS:
        return d + timedelta(days=_DAY_STEPS[frequency])
    if frequency is Frequency.yearly:
        return _advance_years(d, 1)
    return _advance_months(d, 1)


def next_occurrence(current_date_text: Optional[str], frequency_text: Optional[str]) -> Optional[str]:
    """
    Advance a stored YYYY-MM-DD date by one occurrence.

    Returns None when the stored date cannot be parsed; callers treat that as
    "cannot schedule next occurrence".
    """
    current = parse_date_only(current_date_text)
    if current is None:
        return None
    return format_date_only(advance(current, Frequency.parse(frequency_text)))


def roll_forward(current: Date, frequency: Union[Frequency, str, None], as_of: Date) -> Date:
    """Advance `current` until it is on or after `as_of`."""
    while current < as_of:
        current = advance(current, frequency)
    return current
