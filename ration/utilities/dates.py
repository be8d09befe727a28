"""Calendar helpers for booking weeks.

All values are plain calendar days (``datetime.date``) without a time zone.
"""
from datetime import date, datetime, timedelta
from typing import List, Optional

from ration.utilities.constants import ISO_DATE_FORMAT, WEEKDAYS_PER_BOOKING


def from_iso(iso: str) -> date:
    """Parse a ``YYYY-MM-DD`` string. Raises ValueError on anything else."""
    return datetime.strptime(iso.strip(), ISO_DATE_FORMAT).date()


def to_iso(d: date) -> str:
    return d.strftime(ISO_DATE_FORMAT)


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def start_of_week_monday(d: Optional[date] = None) -> date:
    """Monday at or before ``d`` (Sunday maps back six days)."""
    if d is None:
        d = date.today()
    if isinstance(d, datetime):
        d = d.date()
    return d - timedelta(days=d.isoweekday() - 1)


def normalize_week_start_iso(week_start_iso: str) -> str:
    return to_iso(start_of_week_monday(from_iso(week_start_iso)))


def mon_fri(week_start_iso: str) -> List[str]:
    """The five consecutive ISO dates starting at ``week_start_iso``."""
    monday = from_iso(week_start_iso)
    return [to_iso(add_days(monday, i)) for i in range(WEEKDAYS_PER_BOOKING)]


def next_week_start_iso(week_start_iso: str, delta_weeks: int) -> str:
    moved = add_days(from_iso(week_start_iso), delta_weeks * 7)
    return to_iso(start_of_week_monday(moved))


def format_day_label(date_iso: str) -> str:
    """Short label such as ``Tue 17 Jun``."""
    return from_iso(date_iso).strftime("%a %d %b")
