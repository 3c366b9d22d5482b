"""
Calendar arithmetic for sprint charts.

Working days are Monday to Friday; there is no holiday awareness here.
Every function is total: unusable input yields None or an empty list.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, List, Optional

_DURATION_PATTERN = re.compile(r"^(?:(\d+)w)?\s*(?:(\d+)d)?$")

WORKING_DAYS_PER_WEEK = 5


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a calendar date from a stored value.

    Accepts ``date``/``datetime`` objects and ISO strings (date-only or full
    timestamps, trailing ``Z`` allowed). Returns None for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_working_day(day: date) -> bool:
    """True for Monday through Friday."""
    return day.weekday() < 5


def enumerate_days(start: Any, end: Any) -> List[date]:
    """
    All calendar days from ``start`` to ``end``, both inclusive.

    Empty when either date is invalid or ``start`` is after ``end``.
    """
    first = parse_date(start)
    last = parse_date(end)
    if first is None or last is None or first > last:
        return []
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def working_days(days: List[date]) -> List[date]:
    return [day for day in days if is_working_day(day)]


def parse_estimated_time_to_days(text: Optional[str]) -> Optional[int]:
    """
    Convert an effort string such as ``"2d"``, ``"1w 3d"`` or ``"4"`` to working days.

    A week counts as five working days. Returns None when the string cannot
    be read or amounts to zero days.
    """
    if not text:
        return None
    text = text.strip().lower()
    if text.isdigit():
        days = int(text)
        return days if days > 0 else None

    match = _DURATION_PATTERN.match(text)
    if not match or (match.group(1) is None and match.group(2) is None):
        return None

    weeks = int(match.group(1) or 0)
    days = int(match.group(2) or 0)
    total = weeks * WORKING_DAYS_PER_WEEK + days
    return total if total > 0 else None


def add_working_days(start: date, count: int) -> date:
    """
    Date of the ``count``-th working day counting from ``start``.

    ``start`` itself is the first working day when it falls on a weekday.
    A non-positive count returns ``start`` unchanged.
    """
    if count <= 0:
        return start
    current = start
    counted = 1 if is_working_day(current) else 0
    while counted < count or not is_working_day(current):
        current += timedelta(days=1)
        if is_working_day(current):
            counted += 1
    return current
