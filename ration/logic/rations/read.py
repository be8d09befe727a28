"""Rebuild one person's week plan from the rows in the bookings sheet."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ration.domain.Booking import BookingStatus
from ration.domain.Plan import DayPlan, WeekPlan
from ration.logic.planner.drafts import build_default_week
from ration.logic.rations.errors import RationValidationError
from ration.utilities.constants import MEAL_KEYS
from ration.utilities.dates import normalize_week_start_iso

# Cell encodings a sheet may hand back for a ticked meal. Everything else is false.
TRUTHY_CELL_VALUES = (1, "1", True, "TRUE")


@dataclass
class ReadResult:
    name: str
    week_start: str
    ration_type: Optional[str]
    plan: WeekPlan


def to_bool01(value: Any) -> bool:
    """True only for the numeric 1, the string "1", True, or the string "TRUE".

    Matching is exact: "true", " 1" and "yes" are false.
    """
    return value in TRUTHY_CELL_VALUES


def read_week(repo, name: Any, week_start: Any) -> ReadResult:
    name = name.strip() if isinstance(name, str) else ""
    week_input = week_start.strip() if isinstance(week_start, str) else ""
    if not name:
        raise RationValidationError.missing("name")
    if not week_input:
        raise RationValidationError.missing("weekStart")
    try:
        week_start = normalize_week_start_iso(week_input)
    except ValueError:
        raise RationValidationError("Invalid weekStart") from None

    plan = build_default_week(week_start)
    ration_type: Optional[str] = None

    for _, row in repo.read_rows():
        if not row.week_start or not row.date or not row.name:
            continue
        if row.week_start != week_start or row.name != name:
            continue
        # only Mon-Fri of this week
        if row.date not in plan.days:
            continue

        active = row.status != BookingStatus.CANCELLED.value
        flags = {
            k: active and to_bool01(v)
            for k, v in zip(MEAL_KEYS, (row.meal_b, row.meal_l, row.meal_d))
        }
        # later rows for the same date replace earlier ones
        plan.days[row.date] = DayPlan(any(flags.values()), flags)
        if row.ration_type:
            ration_type = row.ration_type

    return ReadResult(name, week_start, ration_type, plan)
