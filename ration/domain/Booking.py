"""Booking domain entity: one persisted row per (week_start, date, name)."""
from enum import Enum
from typing import List, Optional, Tuple

from ration.utilities.constants import STATUS_ACTIVE, STATUS_CANCELLED


def _cell_text(value) -> str:
    return "" if value is None else str(value).strip()


class RationType(str, Enum):
    NON_MUSLIM = "nm"
    MUSLIM = "m"
    NON_MUSLIM_SPECIAL_DIET = "nmsd"
    VEGETARIAN_INDIAN = "vi"
    VEGETARIAN_CHINESE = "vc"

    @classmethod
    def is_valid(cls, value) -> bool:
        return value in {r.value for r in cls}


class Meal(str, Enum):
    BREAKFAST = "B"
    LUNCH = "L"
    DINNER = "D"


class BookingStatus(str, Enum):
    ACTIVE = STATUS_ACTIVE
    CANCELLED = STATUS_CANCELLED


class BookingRow:
    def __init__(self, week_start: str, date: str, name: str, ration_type: str,
                 meal_b: int = 0, meal_l: int = 0, meal_d: int = 0,
                 status: str = STATUS_CANCELLED, submitted_at: str = "", updated_at: str = ""):
        self.week_start = week_start
        self.date = date
        self.name = name
        self.ration_type = ration_type
        self.meal_b = meal_b
        self.meal_l = meal_l
        self.meal_d = meal_d
        self.status = status
        self.submitted_at = submitted_at
        self.updated_at = updated_at

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.week_start, self.date, self.name)

    def __repr__(self) -> str:
        return (f"BookingRow({self.week_start} {self.date} {self.name} {self.ration_type} "
                f"{self.meal_b}{self.meal_l}{self.meal_d} {self.status})")

    @staticmethod
    def from_cells(cells: Optional[list]) -> "BookingRow":
        '''Builds a row from the B..K cell values of one sheet row; short rows are padded.'''
        c = list(cells or []) + [""] * 10
        text = _cell_text
        return BookingRow(
            week_start=text(c[0]), date=text(c[1]), name=text(c[2]), ration_type=text(c[3]),
            meal_b=c[4], meal_l=c[5], meal_d=c[6],
            status=text(c[7]).upper(), submitted_at=text(c[8]), updated_at=text(c[9]),
        )

    def to_cells(self) -> List:
        return [
            self.week_start, self.date, self.name, self.ration_type,
            self.meal_b, self.meal_l, self.meal_d,
            self.status, self.submitted_at, self.updated_at,
        ]
