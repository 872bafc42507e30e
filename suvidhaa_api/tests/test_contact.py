import unittest

from suvidhaa_api.app.core.db import CONTACTS
from suvidhaa_api.tests import helpers


class ContactTests(helpers.ApiTestCase):
    def submit(self, **overrides):
        body = {
            "name": "Rahul Verma",
            "email": "rahul@example.com",
            "subject": "Rescheduling",
            "message": "Can I move my booking to Friday?",
        }
        body.update(overrides)
        return self.client.post("/api/contact", json=body)

    def test_submit_without_sign_in(self):
        response = self.submit(phone="9987000000")
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["message"], "Thank you for contacting us! We will get back to you soon.")
        self.assertEqual(payload["contact"]["status"], "new")
        self.assertEqual(payload["contact"]["phone"], "9987000000")

    def test_phone_is_optional(self):
        response = self.submit()
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()["contact"]["phone"])

    def test_required_fields(self):
        for field in ("name", "email", "subject", "message"):
            response = self.submit(**{field: None})
            self.assertEqual(response.status_code, 400, field)
            self.assertEqual(response.json(), {"message": "Required fields missing"})
        self.assertEqual(self.store.count(CONTACTS), 0)

    def test_listing_requires_token_and_is_newest_first(self):
        first = self.submit(subject="First").json()["contact"]
        second = self.submit(subject="Second").json()["contact"]

        self.assertEqual(self.client.get("/api/contact").status_code, 401)

        user = self.signup()
        response = self.client.get("/api/contact", headers=self.auth(user["token"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c["_id"] for c in response.json()], [second["_id"], first["_id"]])


if __name__ == "__main__":
    unittest.main()
