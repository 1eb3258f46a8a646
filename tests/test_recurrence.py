"""Recurrence scheduler: next-occurrence date arithmetic."""

from datetime import date, timedelta

import pytest

from ghostbill.core import calendar_math
from ghostbill.core.recurrence import (
    advance,
    format_date_only,
    next_occurrence,
    parse_date_only,
    roll_forward,
)
from ghostbill.domain.models.enums.frequency import Frequency


# =============================================================================
# advance()
# =============================================================================


@pytest.mark.parametrize(
    ("start", "frequency", "expected"),
    [
        (date(2024, 3, 10), Frequency.daily, date(2024, 3, 11)),
        (date(2024, 3, 10), Frequency.weekly, date(2024, 3, 17)),
        (date(2024, 3, 10), Frequency.biweekly, date(2024, 3, 24)),
        (date(2024, 12, 31), Frequency.daily, date(2025, 1, 1)),
        (date(2024, 1, 31), Frequency.monthly, date(2024, 2, 29)),
        (date(2023, 1, 31), Frequency.monthly, date(2023, 2, 28)),
        (date(2024, 3, 31), Frequency.monthly, date(2024, 4, 30)),
        (date(2024, 12, 15), Frequency.monthly, date(2025, 1, 15)),
        (date(2024, 2, 29), Frequency.yearly, date(2025, 2, 28)),
        (date(2023, 2, 28), Frequency.yearly, date(2024, 2, 28)),
        (date(2024, 7, 4), Frequency.yearly, date(2025, 7, 4)),
    ],
)
def test_advance(start, frequency, expected):
    assert advance(start, frequency) == expected


def test_advance_accepts_raw_tokens():
    assert advance(date(2024, 3, 10), "WEEKLY") == date(2024, 3, 17)
    assert advance(date(2024, 3, 10), " biweekly ") == date(2024, 3, 24)


@pytest.mark.parametrize("token", ["bogus", "", None, "fortnightly", 5, True, 7.5])
def test_unknown_frequency_defaults_to_monthly(token):
    # Lenient default: bad tokens are treated as monthly, never rejected
    assert advance(date(2024, 1, 31), token) == date(2024, 2, 29)


def test_frequency_parse_masks_non_string_tokens():
    assert Frequency.parse(5) is Frequency.monthly
    assert Frequency.parse(True) is Frequency.monthly
    assert Frequency.parse(["weekly"]) is Frequency.monthly
    assert Frequency.parse(Frequency.weekly) is Frequency.weekly


def test_advance_is_always_strictly_later():
    day = date(2023, 1, 1)
    while day <= date(2024, 12, 31):
        for frequency in Frequency:
            assert advance(day, frequency) > day, (day, frequency)
        day += timedelta(days=1)


def test_monthly_and_yearly_stay_in_target_month():
    for month in range(1, 13):
        start = date(2024, month, calendar_math.days_in_month(2024, month))
        nxt = advance(start, Frequency.monthly)
        assert (nxt.year, nxt.month) == calendar_math.add_months(2024, month, 1)
        assert advance(start, Frequency.yearly).month == month


# =============================================================================
# next_occurrence()
# =============================================================================


def test_next_occurrence_round_trips_text():
    assert next_occurrence("2024-01-31", "monthly") == "2024-02-29"
    assert next_occurrence("2024-02-29", "yearly") == "2025-02-28"
    assert next_occurrence("2024-03-10", "weekly") == "2024-03-17"


@pytest.mark.parametrize("text", [
    "not-a-date", "", None, "2024-02-30", "2024/01/05", "2024-1-5", "20240105",
    "\u0662\u0660\u0662\u0664-\u0660\u0661-\u0663\u0661",  # Arabic-Indic digits
    "\uff12\uff10\uff12\uff14-\uff10\uff11-\uff13\uff11",  # fullwidth digits
])
def test_next_occurrence_unparsable_date_is_none(text):
    assert next_occurrence(text, "monthly") is None


def test_parse_and_format_are_lossless():
    d = date(2024, 2, 29)
    assert parse_date_only(format_date_only(d)) == d
    assert format_date_only(parse_date_only("2023-12-05")) == "2023-12-05"


def test_roll_forward_stops_on_or_after_as_of():
    assert roll_forward(date(2024, 1, 10), Frequency.weekly, date(2024, 2, 1)) == date(2024, 2, 7)
    assert roll_forward(date(2024, 2, 1), Frequency.weekly, date(2024, 2, 1)) == date(2024, 2, 1)


# =============================================================================
# calendar_math
# =============================================================================


def test_calendar_math_helpers():
    assert calendar_math.days_in_month(2024, 2) == 29
    assert calendar_math.days_in_month(2023, 2) == 28
    assert calendar_math.add_months(2024, 12, 1) == (2025, 1)
    assert calendar_math.add_years(2024, 2, 1) == (2025, 2)
    assert calendar_math.clamp_day(2023, 2, 31) == 28
    assert calendar_math.clamp_day(2023, 3, 15) == 15


def test_month_windows():
    assert calendar_math.month_bounds(date(2024, 12, 9)) == (date(2024, 12, 1), date(2025, 1, 1))
    assert calendar_math.month_starts_back(date(2024, 2, 20), 3) == [
        date(2023, 12, 1),
        date(2024, 1, 1),
        date(2024, 2, 1),
    ]
