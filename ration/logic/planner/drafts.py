"""Weekly plan rules shared by the planner: default weeks, draft recovery, locks, dirty tracking."""
import json
from datetime import date
from typing import Optional

from ration.domain.Plan import DayPlan, WeekPlan
from ration.utilities import config
from ration.utilities.dates import (
    add_days, from_iso, mon_fri, normalize_week_start_iso, start_of_week_monday, to_iso,
)


def build_default_week(week_start_iso: str) -> WeekPlan:
    """Mon-Fri of the week containing ``week_start_iso``, every day off."""
    week_start = normalize_week_start_iso(week_start_iso)
    return WeekPlan(week_start, {d: DayPlan() for d in mon_fri(week_start)})


def normalize_or_rebuild_draft(raw: Optional[str], week_start_iso: str) -> WeekPlan:
    """Recover a stored draft, or fall back to the default week.

    The draft survives only if it parses and carries exactly the five weekday
    keys of the expected week; anything else (absent value, bad JSON, an old
    schema, weekend keys) yields the default week.
    """
    expected = build_default_week(week_start_iso)
    if not raw:
        return expected
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return expected
    if not isinstance(parsed, dict) or not isinstance(parsed.get("days"), dict):
        return expected
    if sorted(parsed["days"].keys()) != sorted(expected.days.keys()):
        return expected
    days = {k: DayPlan.from_dict(v) for k, v in parsed["days"].items()}
    return WeekPlan(expected.week_start, days)


def is_past_date_locked(date_iso: str, today: Optional[date] = None) -> bool:
    return from_iso(date_iso) < (today or date.today())


def get_min_bookable_week_start_iso(today: Optional[date] = None,
                                    lead_days: int = config.BOOKING_LEAD_DAYS) -> str:
    lead = add_days(today or date.today(), lead_days)
    return to_iso(start_of_week_monday(lead))


def is_read_only_week(week_start_iso: str, today: Optional[date] = None,
                      lead_days: int = config.BOOKING_LEAD_DAYS) -> bool:
    # ISO strings compare in calendar order
    return week_start_iso < get_min_bookable_week_start_iso(today, lead_days)


def plan_fingerprint(plan: WeekPlan) -> str:
    return json.dumps(plan.to_dict(), sort_keys=True, separators=(",", ":"))


def is_dirty(plan: WeekPlan, submitted_fingerprint: Optional[str]) -> bool:
    if not submitted_fingerprint:
        return plan.any_selection()
    try:
        baseline = json.loads(submitted_fingerprint)
    except (TypeError, ValueError):
        return True
    # dict equality ignores key order
    return plan.to_dict() != baseline


def selected_meal_count(plan: WeekPlan, today: Optional[date] = None) -> int:
    """Ticked meals on enabled days that are not already in the past."""
    count = 0
    for date_iso, day in plan.days.items():
        if not day.enabled or is_past_date_locked(date_iso, today):
            continue
        count += sum(1 for ticked in day.meals.values() if ticked)
    return count
