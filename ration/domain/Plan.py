"""Plan domain entities: a booking week (Mon-Fri) and the meals claimed on each day."""
import copy
from typing import Dict, Optional

from ration.utilities.constants import MEAL_KEYS


def _empty_meals() -> Dict[str, bool]:
    return {k: False for k in MEAL_KEYS}


class DayPlan:
    def __init__(self, enabled: bool = False, meals: Optional[Dict[str, bool]] = None):
        self.enabled = bool(enabled)
        self.meals = _empty_meals()
        if self.enabled and meals:
            for k in MEAL_KEYS:
                self.meals[k] = bool(meals.get(k, False))

    def has_any_meal(self) -> bool:
        return any(self.meals[k] for k in MEAL_KEYS)

    def set_enabled(self, enabled: bool):
        '''Disabling a day always drops its meal selections.'''
        self.enabled = bool(enabled)
        if not self.enabled:
            self.meals = _empty_meals()

    def __eq__(self, other):
        if not isinstance(other, DayPlan):
            return NotImplemented
        return self.enabled == other.enabled and self.meals == other.meals

    def __repr__(self) -> str:
        ticked = "".join(k for k in MEAL_KEYS if self.meals[k]) or "-"
        return f"DayPlan({'on' if self.enabled else 'off'}, {ticked})"

    @staticmethod
    def from_dict(data) -> "DayPlan":
        '''Creates a DayPlan from a dictionary. Unknown keys and meal codes are ignored.'''
        d = data if isinstance(data, dict) else {}
        meals = d.get("meals")
        return DayPlan(bool(d.get("enabled", False)), meals if isinstance(meals, dict) else None)

    def to_dict(self) -> dict:
        return {"enabled": self.enabled, "meals": dict(self.meals)}


class WeekPlan:
    def __init__(self, week_start: str, days: Dict[str, DayPlan]):
        self.week_start = week_start
        self.days = days

    def copy(self) -> "WeekPlan":
        return copy.deepcopy(self)

    def any_selection(self) -> bool:
        return any(day.enabled or day.has_any_meal() for day in self.days.values())

    def __eq__(self, other):
        if not isinstance(other, WeekPlan):
            return NotImplemented
        return self.week_start == other.week_start and self.days == other.days

    def __repr__(self) -> str:
        return f"WeekPlan({self.week_start}, {self.days})"

    @staticmethod
    def from_dict(data) -> "WeekPlan":
        d = data if isinstance(data, dict) else {}
        raw_days = d.get("days") if isinstance(d.get("days"), dict) else {}
        days = {str(k): DayPlan.from_dict(v) for k, v in raw_days.items()}
        return WeekPlan(str(d.get("weekStart", "")), days)

    def to_dict(self) -> dict:
        '''JSON shape shared with the HTTP API and the local draft store.'''
        return {
            "weekStart": self.week_start,
            "days": {k: day.to_dict() for k, day in sorted(self.days.items())},
        }
