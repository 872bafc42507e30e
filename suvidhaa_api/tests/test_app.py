import unittest

from fastapi import APIRouter
from fastapi.testclient import TestClient

from suvidhaa_api.app.core.config import Settings
from suvidhaa_api.app.core.db import InMemoryDocumentStore, StoreError
from suvidhaa_api.app.main import create_app
from suvidhaa_api.tests import helpers


class BrokenStore(InMemoryDocumentStore):
    """Store whose reads fail the way an unreachable database does."""

    def ping(self):
        raise StoreError("connection refused")

    def find(self, collection, query=None, sort=None):
        raise StoreError("connection refused")

    def find_one(self, collection, query):
        raise StoreError("connection refused")


class ApplicationTests(helpers.ApiTestCase):
    def test_health(self):
        response = self.client.get("/api")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Suvidhaa API is running successfully!"})

    def test_unknown_api_path(self):
        response = self.client.get("/api/does-not-exist")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "API endpoint not found"})

    def test_malformed_json_is_a_client_error(self):
        response = self.client.post(
            "/api/contact", content="{not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("message", response.json())


class StoreFailureTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app(settings=Settings(), store=BrokenStore())

    def test_startup_survives_unreachable_store(self):
        with TestClient(self.app) as client:
            self.assertEqual(client.get("/api").status_code, 200)

    def test_store_errors_are_reported_as_server_errors(self):
        client = TestClient(self.app)
        response = client.get("/api/providers")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Server error", "error": "connection refused"})

        response = client.post(
            "/api/auth/login", json={"email": "asha@example.com", "password": "password123"}
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "connection refused")

    def test_unexpected_errors_are_reported_as_server_errors(self):
        router = APIRouter()

        @router.get("/api/explode")
        async def explode():
            raise RuntimeError("boom")

        self.app.include_router(router)
        client = TestClient(self.app, raise_server_exceptions=False)
        response = client.get("/api/explode")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Server error", "error": "boom"})


if __name__ == "__main__":
    unittest.main()
