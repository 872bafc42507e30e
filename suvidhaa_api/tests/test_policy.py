import unittest

from suvidhaa_api.app.core import policy


class PolicyTests(unittest.TestCase):
    def test_booking_list_scope(self):
        self.assertIs(policy.booking_list_scope("u1", "provider"), policy.Scope.OWN)
        self.assertIs(policy.booking_list_scope("u1", "customer"), policy.Scope.ALL)

    def test_stats_scope(self):
        self.assertIs(policy.stats_scope("u1", "provider"), policy.Scope.OWN)
        self.assertIs(policy.stats_scope("u1", "customer"), policy.Scope.ALL)

    def test_status_updates_are_open_by_default(self):
        booking = {"customerId": "someone-else", "providerId": "p1"}
        self.assertTrue(policy.can_update_booking_status("u1", "customer", booking))

    def test_strict_status_updates_require_ownership(self):
        booking = {"customerId": "c1", "providerId": "p1"}
        provider = {"_id": "p1", "userId": "u-provider"}
        self.assertTrue(policy.can_update_booking_status("c1", "customer", booking, provider, strict=True))
        self.assertTrue(policy.can_update_booking_status("u-provider", "provider", booking, provider, strict=True))
        self.assertFalse(policy.can_update_booking_status("u1", "customer", booking, provider, strict=True))
        self.assertFalse(policy.can_update_booking_status("u1", "provider", booking, None, strict=True))

    def test_transition_table(self):
        self.assertTrue(policy.is_allowed_transition("pending", "confirmed"))
        self.assertTrue(policy.is_allowed_transition("pending", "cancelled"))
        self.assertTrue(policy.is_allowed_transition("confirmed", "completed"))
        self.assertTrue(policy.is_allowed_transition("completed", "completed"))
        self.assertFalse(policy.is_allowed_transition("pending", "completed"))
        self.assertFalse(policy.is_allowed_transition("cancelled", "pending"))

    def test_contacts_are_readable_by_any_caller(self):
        self.assertTrue(policy.can_read_contacts("u1", "customer"))
        self.assertTrue(policy.can_read_contacts("u1", "provider"))


if __name__ == "__main__":
    unittest.main()
