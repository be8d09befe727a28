import unittest
from fastapi.testclient import TestClient

from ration.api.api_run import app
from ration.api.dependencies import get_booking_repository, get_namelist_service
from ration.infra.Booking_Repository import BookingRepository
from ration.infra.Namelist_Repository import NamelistRepository
from ration.logic.namelist.cache import NamelistService, TTLCache
from ration.logic.rations.errors import StoreError
from ration.tests.fakes import FakeSheetsGateway
from ration.utilities.constants import BOOKING_COLUMNS

HEADER = ["booking_id"] + BOOKING_COLUMNS


def body(**overrides):
    payload = {
        "name": "Alice",
        "rationType": "vi",
        "weekStart": "2025-06-16",
        "plan": {
            "weekStart": "2025-06-16",
            "days": {
                "2025-06-16": {"enabled": True, "meals": {"B": True, "L": False, "D": True}},
                "2025-06-17": {"enabled": False, "meals": {"B": False, "L": False, "D": False}},
            },
        },
    }
    payload.update(overrides)
    return payload


class TestRationsAPI(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.gateway = FakeSheetsGateway({"Rations": [HEADER], "Namelist": [["name"], ["Alice"], ["Bob"]]})
        self.names = NamelistService(NamelistRepository(self.gateway, "Namelist"), TTLCache(ttl_seconds=60))
        app.dependency_overrides[get_booking_repository] = lambda: BookingRepository(self.gateway, "Rations")
        app.dependency_overrides[get_namelist_service] = lambda: self.names

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_add_ration_then_get_it_back(self):
        resp = self.client.post('/api/addRation', json=body())
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data, {
            "ok": True, "weekStart": "2025-06-16", "name": "Alice", "rationType": "vi",
            "updated": 0, "appended": 5, "totalWritten": 5,
        })

        resp = self.client.get('/api/getRation', params={"name": "Alice", "weekStart": "2025-06-18"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["weekStart"], "2025-06-16")
        self.assertEqual(data["rationType"], "vi")
        self.assertEqual(data["plan"]["weekStart"], "2025-06-16")
        self.assertEqual(sorted(data["plan"]["days"]),
                         ["2025-06-16", "2025-06-17", "2025-06-18", "2025-06-19", "2025-06-20"])
        self.assertEqual(data["plan"]["days"]["2025-06-16"],
                         {"enabled": True, "meals": {"B": True, "L": False, "D": True}})
        self.assertFalse(data["plan"]["days"]["2025-06-17"]["enabled"])

    def test_resubmission_reports_updates(self):
        self.client.post('/api/addRation', json=body())
        resp = self.client.post('/api/addRation', json=body())
        data = resp.json()
        self.assertEqual((data["updated"], data["appended"], data["totalWritten"]), (5, 0, 5))
        self.assertEqual(len(self.gateway.data_rows("Rations")), 5)

    def test_add_ration_validation_errors(self):
        cases = [
            (body(name="  "), "Missing name"),
            (body(rationType=None), "Missing rationType"),
            (body(weekStart=""), "Missing weekStart"),
            (body(plan=None), "Missing plan.days"),
            (body(plan={"weekStart": "2025-06-16"}), "Missing plan.days"),
            (body(weekStart="soon"), "Invalid weekStart"),
        ]
        for payload, message in cases:
            resp = self.client.post('/api/addRation', json=payload)
            self.assertEqual(resp.status_code, 400, message)
            self.assertEqual(resp.json(), {"error": message})
        self.assertEqual(self.gateway.writes, [])

    def test_null_day_and_null_meal_read_as_unticked(self):
        plan = {"days": {
            "2025-06-16": None,
            "2025-06-17": {"enabled": True, "meals": {"B": None, "L": True, "D": None}},
            "2025-06-18": {"enabled": True, "meals": None},
        }}
        resp = self.client.post('/api/addRation', json=body(plan=plan))
        self.assertEqual(resp.status_code, 200)
        rows = {r[2]: r[5:9] for r in self.gateway.data_rows("Rations")}
        self.assertEqual(rows["2025-06-16"], [0, 0, 0, "CANCELLED"])
        self.assertEqual(rows["2025-06-17"], [0, 1, 0, "ACTIVE"])
        self.assertEqual(rows["2025-06-18"], [0, 0, 0, "CANCELLED"])

    def test_plan_that_is_not_an_object_is_missing_days(self):
        for plan in ("x", 42, ["2025-06-16"], {"days": "all"}):
            resp = self.client.post('/api/addRation', json=body(plan=plan))
            self.assertEqual(resp.status_code, 400, plan)
            self.assertEqual(resp.json(), {"error": "Missing plan.days"})

    def test_non_string_fields_count_as_missing(self):
        resp = self.client.post('/api/addRation', json=body(name=123))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Missing name"})
        resp = self.client.post('/api/addRation', json=body(rationType={"code": "vi"}))
        self.assertEqual(resp.json(), {"error": "Missing rationType"})

    def test_unusable_body_is_a_400_error(self):
        resp = self.client.post('/api/addRation', json=["Alice", "vi"])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid request body"})

        resp = self.client.post('/api/addRation', content=b"{not json",
                                headers={"Content-Type": "application/json"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())
        self.assertEqual(self.gateway.writes, [])

    def test_add_ration_without_body(self):
        resp = self.client.post('/api/addRation')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Missing name")

    def test_add_ration_store_failure(self):
        self.gateway.fail_with = StoreError("sheet unreachable")
        resp = self.client.post('/api/addRation', json=body())
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Failed to add ration"})

    def test_get_ration_validation_and_failure(self):
        resp = self.client.get('/api/getRation', params={"weekStart": "2025-06-16"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Missing name"})

        resp = self.client.get('/api/getRation', params={"name": "Alice"})
        self.assertEqual(resp.json(), {"error": "Missing weekStart"})

        self.gateway.fail_with = StoreError("sheet unreachable")
        resp = self.client.get('/api/getRation', params={"name": "Alice", "weekStart": "2025-06-16"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Failed to fetch rations"})

    def test_get_ration_for_unknown_name_is_empty_week(self):
        self.client.post('/api/addRation', json=body())
        resp = self.client.get('/api/getRation', params={"name": "Bob", "weekStart": "2025-06-16"})
        data = resp.json()
        self.assertIsNone(data["rationType"])
        self.assertFalse(any(d["enabled"] for d in data["plan"]["days"].values()))

    def test_get_users_sources(self):
        first = self.client.get('/api/getUsers').json()
        self.assertEqual(first, {"source": "api", "rows": [["Alice"], ["Bob"]]})

        self.gateway.sheets["Namelist"].append(["Carol"])
        self.assertEqual(self.client.get('/api/getUsers').json()["source"], "cache")

        forced = self.client.get('/api/getUsers', params={"reload": "true"}).json()
        self.assertEqual(forced["source"], "api_forced")
        self.assertEqual(forced["rows"][-1], ["Carol"])

        # only the exact string "true" forces a reload
        self.assertEqual(self.client.get('/api/getUsers', params={"reload": "1"}).json()["source"], "cache")

    def test_get_users_failure(self):
        self.gateway.fail_with = StoreError("sheet unreachable")
        resp = self.client.get('/api/getUsers')
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Failed to fetch namelist"})

    def test_health(self):
        resp = self.client.get('/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")


if __name__ == '__main__':
    unittest.main()
