import unittest

from suvidhaa_api.app.core.db import PROVIDERS, new_id
from suvidhaa_api.tests import helpers


class RegisterProviderTests(helpers.ApiTestCase):
    def test_registration_flips_role_and_returns_fresh_token(self):
        user = self.signup(email="ravi@example.com")
        response = self.client.post(
            "/api/providers/register",
            json={"services": ["Plumbing"], "experience": 3, "location": "Pune", "availability": "Weekends"},
            headers=self.auth(user["token"]),
        )
        self.assertEqual(response.status_code, 201, response.text)
        payload = response.json()
        self.assertEqual(payload["message"], "Provider registration successful")
        provider = payload["provider"]
        self.assertEqual(provider["userId"], user["user"]["id"])
        self.assertEqual(provider["services"], ["Plumbing"])
        self.assertEqual(provider["rating"], 0)
        self.assertEqual(provider["totalReviews"], 0)
        self.assertFalse(provider["verified"])

        me = self.client.get("/api/auth/me", headers=self.auth(user["token"])).json()
        self.assertEqual(me["role"], "provider")

        stats = self.client.get("/api/dashboard/stats", headers=self.auth(payload["token"]))
        self.assertEqual(stats.status_code, 200)
        self.assertIn("completedBookings", stats.json())

    def test_second_registration_is_rejected(self):
        provider = self.make_provider()
        response = self.client.post(
            "/api/providers/register",
            json={"services": ["Carpentry"]},
            headers=self.auth(provider["token"]),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Already registered as provider"})
        self.assertEqual(self.store.count(PROVIDERS), 1)

    def test_requires_token(self):
        response = self.client.post("/api/providers/register", json={"services": ["Plumbing"]})
        self.assertEqual(response.status_code, 401)


class ProviderDirectoryTests(helpers.ApiTestCase):
    def setUp(self):
        super().setUp()
        self.mumbai = self.make_provider(email="ravi@example.com", services=["Plumbing", "Electrical"])
        self.delhi = self.make_provider(email="sunil@example.com", services=["Cleaning"], location="New Delhi")
        self.hidden = self.make_provider(email="kiran@example.com", location="Mumbai", verified=False)

    def listed(self, **params):
        response = self.client.get("/api/providers", params=params)
        self.assertEqual(response.status_code, 200, response.text)
        return {provider["_id"] for provider in response.json()}

    def test_only_verified_providers_are_listed(self):
        self.assertEqual(self.listed(), {self.mumbai["provider"]["_id"], self.delhi["provider"]["_id"]})

    def test_location_is_case_insensitive_substring(self):
        self.assertEqual(self.listed(location="mum"), {self.mumbai["provider"]["_id"]})
        self.assertEqual(self.listed(location="DELHI"), {self.delhi["provider"]["_id"]})
        self.assertEqual(self.listed(location="Chennai"), set())

    def test_location_is_not_a_pattern(self):
        self.assertEqual(self.listed(location=".*"), set())

    def test_service_is_exact_match(self):
        self.assertEqual(self.listed(service="Electrical"), {self.mumbai["provider"]["_id"]})
        self.assertEqual(self.listed(service="Electric"), set())
        self.assertEqual(self.listed(service="Cleaning", location="mum"), set())

    def test_listing_includes_owner_contact_card(self):
        providers = self.client.get("/api/providers", params={"location": "mum"}).json()
        user = providers[0]["user"]
        self.assertEqual(user["email"], "ravi@example.com")
        self.assertEqual(user["fullName"], "Ravi Kumar")
        self.assertNotIn("password", user)

    def test_get_provider(self):
        response = self.client.get(f"/api/providers/{self.hidden['provider']['_id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["email"], "kiran@example.com")

    def test_unknown_provider(self):
        for provider_id in (new_id(), "not-an-object-id"):
            response = self.client.get(f"/api/providers/{provider_id}")
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json(), {"message": "Provider not found"})


if __name__ == "__main__":
    unittest.main()
