"""
Week and calendar-date helpers for the schedule and focus views.

Weeks start on Monday. Values may be ``date`` or naive local ``datetime``;
the result keeps the input's type.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class WeekRange:
    start: DateLike
    end: DateLike
    days: list = field(default_factory=list)


def start_of_week(d: DateLike) -> DateLike:
    """Monday 00:00 of the week containing ``d`` (Sunday belongs to the week before)."""
    monday = d - timedelta(days=d.weekday())
    if isinstance(monday, datetime):
        monday = monday.replace(hour=0, minute=0, second=0, microsecond=0)
    return monday


def add_days(d: DateLike, days: int) -> DateLike:
    return d + timedelta(days=days)


def to_iso_date(d: DateLike) -> str:
    """YYYY-MM-DD from the local calendar components (no UTC conversion)."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def build_week(d: DateLike) -> WeekRange:
    start = start_of_week(d)
    end = add_days(start, 7)
    days = [add_days(start, i) for i in range(7)]
    return WeekRange(start=start, end=end, days=days)


def fmt_day(d: DateLike) -> str:
    """Short day label, e.g. ``Mon, Jan 8``."""
    return f"{d.strftime('%a')}, {d.strftime('%b')} {d.day}"


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (a trailing time component is ignored)."""
    return date.fromisoformat(value.strip()[:10])


def as_date(value) -> date:
    """Coerce a date, datetime or ISO string to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value))
