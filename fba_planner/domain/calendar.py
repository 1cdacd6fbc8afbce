"""
Calendar utilities for replenishment planning.

This module handles:
- Whole-day differences between calendar dates
- Date shifting with proper month/year rollover
- Calendar month tokens ("YYYY-MM") used by the factory plan
- Parsing/formatting of the YYYY-MM-DD wire format

All dates are calendar dates (no time-of-day). datetime values passed in
are truncated to their date first, so results never depend on the clock.

Usage Examples:
    from datetime import date
    from fba_planner.domain.calendar import days_between, add_days, month_key

    days_between(date(2026, 1, 16), date(2026, 2, 20))   # 35
    add_days(date(2026, 1, 16), 35)                      # date(2026, 2, 20)
    month_key(date(2026, 2, 20))                         # "2026-02"
"""
from datetime import date as Date, datetime, timedelta
from typing import Optional, Tuple, Union

DateLike = Union[Date, datetime]


def _as_date(value: DateLike) -> Date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(a: DateLike, b: DateLike) -> int:
    """
    Number of whole days from date a to date b.

    Positive when b is after a, negative when b is before a.

    Examples:
        >>> days_between(date(2026, 3, 1), date(2026, 3, 1))
        0
        >>> days_between(date(2026, 3, 10), date(2026, 3, 1))
        -9
    """
    return (_as_date(b) - _as_date(a)).days


def add_days(value: DateLike, n: int) -> Date:
    """Return a new date shifted by n days (n may be negative)."""
    return _as_date(value) + timedelta(days=n)


def parse_date(value: Optional[Union[str, Date]]) -> Optional[Date]:
    """
    Parse a YYYY-MM-DD string into a date.

    Empty strings and None map to None; date objects pass through.
    A full ISO timestamp ("2026-02-20T00:00:00.000Z") keeps its date part.

    Raises:
        ValueError: If the string is not a valid date
    """
    if value is None:
        return None
    if isinstance(value, (Date, datetime)):
        return _as_date(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return Date.fromisoformat(text[:10])
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def format_date(value: Optional[Date]) -> Optional[str]:
    """Format a date as YYYY-MM-DD (None passes through)."""
    if value is None:
        return None
    return _as_date(value).isoformat()


# ============ Month tokens ============

def month_key(value: DateLike) -> str:
    """Calendar month token (YYYY-MM) containing the given date."""
    d = _as_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def parse_month(token: str) -> Tuple[int, int]:
    """
    Parse a YYYY-MM token into (year, month).

    Raises:
        ValueError: If the token is malformed or the month is out of range
    """
    try:
        year_str, month_str = token.strip().split("-")
        year, month = int(year_str), int(month_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid month '{token}', expected YYYY-MM") from None
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{token}': month must be 1-12")
    return year, month


def months_from_now(target_month: str, today: DateLike) -> int:
    """
    Signed number of calendar months between today's month and target_month.

    0 = current month, 1 = next month, -1 = last month.
    """
    year, month = parse_month(target_month)
    d = _as_date(today)
    return (year * 12 + month) - (d.year * 12 + d.month)


def month_bounds(token: str) -> Tuple[Date, Date]:
    """First and last day (both inclusive) of a YYYY-MM month."""
    year, month = parse_month(token)
    first = Date(year, month, 1)
    if month == 12:
        next_first = Date(year + 1, 1, 1)
    else:
        next_first = Date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def shift_month(token: str, offset: int) -> str:
    """Month token offset by a number of months (may be negative)."""
    year, month = parse_month(token)
    index = year * 12 + (month - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"
