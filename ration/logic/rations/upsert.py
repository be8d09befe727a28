"""Write a submitted week into the bookings sheet, one row per weekday.

Rows are keyed by (week_start, date, name). A key that already exists is
rewritten in place; only unseen keys are appended, so resubmitting a week never
duplicates rows.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from ration.domain.Booking import BookingRow, BookingStatus
from ration.domain.Plan import DayPlan, WeekPlan
from ration.logic.rations.errors import RationValidationError
from ration.utilities.constants import MEAL_KEYS
from ration.utilities.dates import mon_fri, normalize_week_start_iso

logger = logging.getLogger(__name__)


@dataclass
class UpsertResult:
    week_start: str
    name: str
    ration_type: str
    updated: int
    appended: int

    @property
    def total_written(self) -> int:
        return self.updated + self.appended


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with milliseconds and a ``Z`` suffix, e.g. 2025-06-02T08:30:00.000Z."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _plan_days(plan: Any) -> Optional[Dict[str, DayPlan]]:
    if isinstance(plan, WeekPlan):
        return plan.days
    if isinstance(plan, dict) and isinstance(plan.get("days"), dict):
        return {str(k): DayPlan.from_dict(v) for k, v in plan["days"].items()}
    return None


def validate_submission(name: Any, ration_type: Any, week_start: Any, plan: Any) -> Tuple[str, str, str, Dict[str, DayPlan]]:
    name, ration_type, week_input = _clean(name), _clean(ration_type), _clean(week_start)
    if not name:
        raise RationValidationError.missing("name")
    if not ration_type:
        raise RationValidationError.missing("rationType")
    if not week_input:
        raise RationValidationError.missing("weekStart")
    days = _plan_days(plan)
    if days is None:
        raise RationValidationError.missing("plan.days")
    try:
        normalized = normalize_week_start_iso(week_input)
    except ValueError:
        raise RationValidationError("Invalid weekStart") from None
    return name, ration_type, normalized, days


def build_week_rows(name: str, ration_type: str, week_start: str,
                    days: Dict[str, DayPlan], stamp: str) -> List[BookingRow]:
    """Desired rows for Mon-Fri of ``week_start``; keys outside those five dates are ignored."""
    rows = []
    for date_iso in mon_fri(week_start):
        day = days.get(date_iso) or DayPlan()
        flags = [1 if day.enabled and day.meals[k] else 0 for k in MEAL_KEYS]
        # an enabled day with nothing ticked is recorded as a cancellation
        status = BookingStatus.ACTIVE if any(flags) else BookingStatus.CANCELLED
        rows.append(BookingRow(
            week_start, date_iso, name, ration_type,
            flags[0], flags[1], flags[2],
            status.value, submitted_at=stamp, updated_at=stamp,
        ))
    return rows


def upsert_week(repo, name: Any, ration_type: Any, week_start: Any, plan: Any,
                now: Optional[Callable[[], datetime]] = None) -> UpsertResult:
    """Validate, then update-or-append the five weekday rows of a submission.

    ``submitted_at`` is set when a key is first created and carried over on
    later rewrites; ``updated_at`` is refreshed on every write. Store failures
    propagate as StoreError and nothing is retried.
    """
    name, ration_type, week_start, days = validate_submission(name, ration_type, week_start, plan)
    stamp = utc_timestamp(now() if now else None)
    desired = build_week_rows(name, ration_type, week_start, days, stamp)

    existing: Dict[Tuple[str, str, str], Tuple[int, BookingRow]] = {}
    for row_number, row in repo.read_rows():
        if not row.week_start or not row.date or not row.name:
            continue
        existing[row.key] = (row_number, row)

    updates: List[Tuple[int, BookingRow]] = []
    appends: List[BookingRow] = []
    for row in desired:
        match = existing.get(row.key)
        if match is None:
            appends.append(row)
            continue
        row_number, current = match
        if current.submitted_at:
            row.submitted_at = current.submitted_at
        updates.append((row_number, row))

    if updates:
        repo.update_rows(updates)
    if appends:
        repo.append_rows(appends)

    logger.info("Ration upsert name=%s week=%s updated=%s appended=%s",
                name, week_start, len(updates), len(appends))
    return UpsertResult(week_start, name, ration_type, len(updates), len(appends))
