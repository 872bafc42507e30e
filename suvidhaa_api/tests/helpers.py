import unittest
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from suvidhaa_api.app.core.config import Settings
from suvidhaa_api.app.core.db import PROVIDERS, InMemoryDocumentStore
from suvidhaa_api.app.main import create_app


class ApiTestCase(unittest.TestCase):
    """Runs the API against a fresh in-memory store for every test."""

    strict_booking_policy = False

    def setUp(self):
        self.store = InMemoryDocumentStore()
        settings = Settings(strict_booking_policy=self.strict_booking_policy)
        self.app = create_app(settings=settings, store=self.store)
        self.client = TestClient(self.app)

    @staticmethod
    def auth(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def signup(
        self,
        email: str = "asha@example.com",
        password: str = "password123",
        full_name: str = "Asha Patel",
        **overrides: Any,
    ) -> Dict[str, Any]:
        body = {
            "fullName": full_name,
            "email": email,
            "phone": "9820000000",
            "gender": "female",
            "password": password,
        }
        body.update(overrides)
        response = self.client.post("/api/auth/signup", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def make_provider(
        self,
        email: str = "ravi@example.com",
        services: Optional[list] = None,
        location: str = "Mumbai",
        verified: bool = True,
    ) -> Dict[str, Any]:
        """Sign up a user, register them as provider and return token + profile."""
        user = self.signup(email=email, full_name="Ravi Kumar", gender="male")
        response = self.client.post(
            "/api/providers/register",
            json={
                "services": services or ["Plumbing"],
                "experience": 4,
                "location": location,
                "availability": "Weekdays",
            },
            headers=self.auth(user["token"]),
        )
        self.assertEqual(response.status_code, 201, response.text)
        payload = response.json()
        provider = payload["provider"]
        if verified:
            self.store.update_one(PROVIDERS, {"_id": provider["_id"]}, {"verified": True})
        return {"token": payload["token"], "provider": provider, "user": user["user"]}

    def book(self, token: str, provider_id: str, amount: float = 500, **overrides: Any):
        body = {
            "providerId": provider_id,
            "service": "Plumbing",
            "date": "2025-09-01",
            "time": "10:00 AM",
            "location": "Andheri West, Mumbai",
            "amount": amount,
        }
        body.update(overrides)
        return self.client.post("/api/bookings", json=body, headers=self.auth(token))
