"""
Service layer for dashboard statistics.

Providers get figures about the bookings made with them, customers get
figures about the bookings they made.  The average rating reported to a
provider is the rating stored on the profile; it is not recomputed here.
"""

from __future__ import annotations

from typing import Any, Dict

from suvidhaa_api.app.core import policy
from suvidhaa_api.app.core.db import DocumentStore
from suvidhaa_api.app.core.exceptions import NotFoundError
from suvidhaa_api.app.services.booking_service import BookingService
from suvidhaa_api.app.services.provider_service import ProviderService


class StatisticsService:
    """Service providing per-caller dashboard figures."""

    def __init__(self, store: DocumentStore) -> None:
        self.bookings = BookingService(store)
        self.providers = ProviderService(store)

    async def for_caller(self, caller_id: str, caller_role: str) -> Dict[str, Any]:
        """Return the dashboard statistics of the caller.

        For providers: ``totalBookings``, ``pendingBookings``,
        ``completedBookings``, ``totalRevenue`` (sum over completed
        bookings) and ``averageRating``.  Raises ``NotFoundError`` if the
        provider has no profile.

        For everyone else: ``totalBookings`` and ``pendingBookings`` over the
        caller's own bookings.
        """
        if policy.stats_scope(caller_id, caller_role) is policy.Scope.OWN:
            provider = await self.providers.find_by_user(caller_id)
            if provider is None:
                raise NotFoundError("Provider profile not found")
            provider_id = provider["_id"]
            return {
                "totalBookings": await self.bookings.count({"providerId": provider_id}),
                "pendingBookings": await self.bookings.count({"providerId": provider_id, "status": "pending"}),
                "completedBookings": await self.bookings.count({"providerId": provider_id, "status": "completed"}),
                "totalRevenue": await self.bookings.completed_revenue(provider_id),
                "averageRating": provider.get("rating", 0),
            }
        return {
            "totalBookings": await self.bookings.count({"customerId": caller_id}),
            "pendingBookings": await self.bookings.count({"customerId": caller_id, "status": "pending"}),
        }
