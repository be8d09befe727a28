import unittest

from ration.infra.Booking_Repository import BookingRepository
from ration.logic.rations.errors import RationValidationError
from ration.logic.rations.read import read_week, to_bool01
from ration.logic.rations.upsert import upsert_week
from ration.tests.fakes import FakeSheetsGateway
from ration.utilities.constants import BOOKING_COLUMNS

SHEET = "Rations"
HEADER = ["booking_id"] + BOOKING_COLUMNS


def row(date, name="Alice", b=0, l=0, d=0, status="ACTIVE", ration="vi", week="2025-06-16"):
    return ["=ROW()", week, date, name, ration, b, l, d, status, "t0", "t0"]


class TestToBool01(unittest.TestCase):

    def test_accepted_encodings(self):
        for value in (1, "1", True, "TRUE"):
            self.assertTrue(to_bool01(value), value)

    def test_everything_else_is_false(self):
        for value in (0, "0", False, "FALSE", "true", "yes", " 1", "", None, 2, [1]):
            self.assertFalse(to_bool01(value), value)


class TestRationRead(unittest.TestCase):

    def setUp(self):
        self.gateway = FakeSheetsGateway({SHEET: [HEADER]})
        self.repo = BookingRepository(self.gateway, SHEET)

    def test_empty_sheet_gives_default_week(self):
        result = read_week(self.repo, "Alice", "2025-06-18")
        self.assertEqual(result.week_start, "2025-06-16")
        self.assertIsNone(result.ration_type)
        self.assertEqual(len(result.plan.days), 5)
        self.assertFalse(any(d.enabled for d in result.plan.days.values()))

    def test_submit_then_read_back(self):
        plan = {"days": {
            "2025-06-17": {"enabled": True, "meals": {"B": False, "L": True, "D": False}},
            "2025-06-18": {"enabled": True, "meals": {"B": False, "L": False, "D": False}},
        }}
        upsert_week(self.repo, "Alice", "vi", "2025-06-16", plan)
        result = read_week(self.repo, "Alice", "2025-06-16")

        self.assertEqual(result.ration_type, "vi")
        tue = result.plan.days["2025-06-17"]
        self.assertTrue(tue.enabled)
        self.assertEqual(tue.meals, {"B": False, "L": True, "D": False})
        # an enabled day with nothing ticked comes back switched off
        self.assertFalse(result.plan.days["2025-06-18"].enabled)

    def test_cancelled_row_clears_meals(self):
        self.gateway.sheets[SHEET].append(row("2025-06-16", b=1, l=1, d=1, status="cancelled"))
        day = read_week(self.repo, "Alice", "2025-06-16").plan.days["2025-06-16"]
        self.assertFalse(day.enabled)
        self.assertEqual(day.meals, {"B": False, "L": False, "D": False})

    def test_blank_status_counts_as_active(self):
        self.gateway.sheets[SHEET].append(row("2025-06-16", d="TRUE", status=""))
        day = read_week(self.repo, "Alice", "2025-06-16").plan.days["2025-06-16"]
        self.assertTrue(day.enabled)
        self.assertTrue(day.meals["D"])

    def test_rows_of_other_names_weeks_and_weekends_are_ignored(self):
        self.gateway.sheets[SHEET].extend([
            row("2025-06-16", name="Bob", b=1),
            row("2025-06-09", week="2025-06-09", b=1),
            row("2025-06-21", b=1),
            row("2025-06-20", b=1, ration="m"),
        ])
        result = read_week(self.repo, "Alice", "2025-06-16")
        enabled = [d for d, day in result.plan.days.items() if day.enabled]
        self.assertEqual(enabled, ["2025-06-20"])
        self.assertEqual(result.ration_type, "m")

    def test_last_duplicate_row_wins(self):
        self.gateway.sheets[SHEET].extend([
            row("2025-06-17", b=1, ration="nm"),
            row("2025-06-17", l=1, ration="vc"),
        ])
        result = read_week(self.repo, "Alice", "2025-06-16")
        self.assertEqual(result.plan.days["2025-06-17"].meals, {"B": False, "L": True, "D": False})
        self.assertEqual(result.ration_type, "vc")

    def test_validation(self):
        with self.assertRaises(RationValidationError) as ctx:
            read_week(self.repo, "", "2025-06-16")
        self.assertEqual(ctx.exception.message, "Missing name")
        with self.assertRaises(RationValidationError) as ctx:
            read_week(self.repo, "Alice", " ")
        self.assertEqual(ctx.exception.message, "Missing weekStart")
        with self.assertRaises(RationValidationError) as ctx:
            read_week(self.repo, "Alice", "16/06/2025")
        self.assertEqual(ctx.exception.message, "Invalid weekStart")


if __name__ == '__main__':
    unittest.main()
