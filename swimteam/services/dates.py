# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Date-window arithmetic shared by the rotation and recurrence engines.
Pure functions over datetime.date, no I/O.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator


def parse_date(value) -> date:
    """Coerce a date, datetime or ISO 'YYYY-MM-DD' string into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"Invalid date '{value}'. Expected YYYY-MM-DD")
    raise ValueError(f"Cannot interpret {value!r} as a date")


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def add_months(d: date, months: int) -> date:
    """Step whole calendar months, clamping the day to the target month's length."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def one_year_after(d: date) -> date:
    return add_months(d, 12)


def js_weekday(d: date) -> int:
    """Weekday numbered 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def week_start(d: date) -> date:
    """The Sunday on or before d."""
    return d - timedelta(days=js_weekday(d))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}; expected 1-12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def windows_intersect(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Closed-interval overlap test."""
    return a_start <= b_end and b_start <= a_end


def iter_windows(start: date, length_days: int, horizon_end: date) -> Iterator[tuple[date, date]]:
    """
    Yield contiguous (window_start, window_end) pairs tiling [start, horizon_end].
    The last window is truncated so it never runs past horizon_end.
    """
    if length_days < 1:
        raise ValueError("Window length must be at least 1 day")
    cursor = start
    while cursor <= horizon_end:
        window_end = min(add_days(cursor, length_days - 1), horizon_end)
        yield cursor, window_end
        cursor = add_days(cursor, length_days)
