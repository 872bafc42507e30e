import unittest

from suvidhaa_api.app.core.security import issue_token
from suvidhaa_api.tests import helpers


class DashboardStatsTests(helpers.ApiTestCase):
    def setUp(self):
        super().setUp()
        self.provider = self.make_provider()
        self.customer = self.signup(email="meera@example.com", full_name="Meera Iyer")

    def stats(self, token):
        response = self.client.get("/api/dashboard/stats", headers=self.auth(token))
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def test_provider_stats(self):
        provider_id = self.provider["provider"]["_id"]
        completed = self.book(self.customer["token"], provider_id, amount=500).json()["booking"]
        self.book(self.customer["token"], provider_id, amount=300)
        self.client.patch(
            f"/api/bookings/{completed['_id']}/status",
            json={"status": "completed"},
            headers=self.auth(self.provider["token"]),
        )

        stats = self.stats(self.provider["token"])
        self.assertEqual(stats["totalBookings"], 2)
        self.assertEqual(stats["pendingBookings"], 1)
        self.assertEqual(stats["completedBookings"], 1)
        self.assertEqual(stats["totalRevenue"], 500)
        self.assertEqual(stats["averageRating"], 0)

    def test_provider_without_bookings(self):
        stats = self.stats(self.provider["token"])
        self.assertEqual(
            stats,
            {
                "totalBookings": 0,
                "pendingBookings": 0,
                "completedBookings": 0,
                "totalRevenue": 0,
                "averageRating": 0,
            },
        )

    def test_customer_stats(self):
        provider_id = self.provider["provider"]["_id"]
        first = self.book(self.customer["token"], provider_id).json()["booking"]
        self.book(self.customer["token"], provider_id)
        self.client.patch(
            f"/api/bookings/{first['_id']}/status",
            json={"status": "confirmed"},
            headers=self.auth(self.provider["token"]),
        )

        self.assertEqual(self.stats(self.customer["token"]), {"totalBookings": 2, "pendingBookings": 1})

    def test_provider_role_without_profile(self):
        token = issue_token(self.customer["user"]["id"], "provider")
        response = self.client.get("/api/dashboard/stats", headers=self.auth(token))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Provider profile not found"})

    def test_requires_token(self):
        self.assertEqual(self.client.get("/api/dashboard/stats").status_code, 401)


if __name__ == "__main__":
    unittest.main()
