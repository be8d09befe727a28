from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"
WEEKDAYS_PER_BOOKING: Final[int] = 5

MEAL_KEYS: Final[tuple[str, ...]] = ("B", "L", "D")
RATION_OPTIONS: Final[list[dict[str, str]]] = [
    {"value": "nm", "label": "Non-Muslim"},
    {"value": "m", "label": "Muslim"},
    {"value": "nmsd", "label": "Non-Muslim Special Diet"},
    {"value": "vi", "label": "Vegetarian Indian"},
    {"value": "vc", "label": "Vegetarian Chinese"},
]

STATUS_ACTIVE: Final[str] = "ACTIVE"
STATUS_CANCELLED: Final[str] = "CANCELLED"

# Bookings sheet: column A is an externally computed id, B..K are ours.
WRITE_COLS_START: Final[str] = "B"
WRITE_COLS_END: Final[str] = "K"
FIRST_DATA_ROW: Final[int] = 2
BOOKING_COLUMNS: Final[list[str]] = [
    "week_start", "date", "name", "ration_type",
    "mealB", "mealL", "mealD",
    "status", "submitted_at", "updated_at",
]

NAMELIST_RANGE: Final[str] = "A2:A"

STORE_SCOPE: Final[str] = "rationDetails"
