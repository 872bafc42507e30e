"""
Business logic for bookings.

``BookingService`` creates bookings for the signed-in customer, lists them
for customers and providers, and changes their status.  Which bookings a
caller may list and who may change a status is decided by
``core.policy``; this module only applies the decision.

Booking numbers have the form ``BK`` followed by the last six digits of the
millisecond clock.  Two bookings created within the same millisecond (or
exactly 1000 seconds apart) would collide, so the number is backed by a
unique index and the next suffix is tried when an insert hits it.
"""

import datetime as dt
import logging
import time
from typing import Any, Dict, List, Optional, Union

from suvidhaa_api.app.core import policy
from suvidhaa_api.app.core.db import BOOKINGS, DocumentStore, DuplicateKeyError, StoreError
from suvidhaa_api.app.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from suvidhaa_api.app.schemas.booking import BookingCreate
from suvidhaa_api.app.services.provider_service import ProviderService
from suvidhaa_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

BOOKING_ID_PREFIX = "BK"
BOOKING_ID_ATTEMPTS = 5


def generate_booking_id(now_ms: Optional[int] = None, offset: int = 0) -> str:
    """Return ``BK`` + the last six digits of the millisecond clock.

    ``offset`` shifts the suffix, wrapping within six digits; it is used to
    pick the next candidate after a collision.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{BOOKING_ID_PREFIX}{(now_ms + offset) % 1_000_000:06d}"


def as_utc_datetime(value: Union[dt.datetime, dt.date]) -> dt.datetime:
    """Return ``value`` as an aware UTC datetime.

    Plain dates become midnight UTC; naive datetimes are taken to be UTC.
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value.astimezone(dt.timezone.utc)
    return dt.datetime.combine(value, dt.time.min, tzinfo=dt.timezone.utc)


class BookingService:
    """Service for the booking ledger."""

    def __init__(self, store: DocumentStore, strict: bool = False) -> None:
        self.store = store
        self.strict = strict
        self.users = UserService(store)
        self.providers = ProviderService(store)

    async def create_booking(self, customer_id: str, data: BookingCreate) -> Dict[str, Any]:
        """Create a pending booking of ``customer_id`` with a provider.

        Raises ``NotFoundError`` if the provider does not exist.
        """
        if await self.providers.find(data.provider_id) is None:
            raise NotFoundError("Provider not found")
        document = {
            "customerId": customer_id,
            "providerId": data.provider_id,
            "service": data.service,
            "date": as_utc_datetime(data.date),
            "time": data.time,
            "location": data.location,
            "amount": data.amount,
            "status": "pending",
            "createdAt": dt.datetime.now(dt.timezone.utc),
        }
        now_ms = int(time.time() * 1000)
        for attempt in range(BOOKING_ID_ATTEMPTS):
            document["bookingId"] = generate_booking_id(now_ms, attempt)
            try:
                booking = self.store.insert_one(BOOKINGS, document)
            except DuplicateKeyError:
                logger.warning("Booking id %s already taken, trying the next one", document["bookingId"])
                continue
            logger.info(
                "Booking %s created by %s with provider %s",
                booking["bookingId"],
                customer_id,
                data.provider_id,
            )
            return booking
        raise StoreError("Could not allocate a unique booking id")

    async def list_my_bookings(self, customer_id: str) -> List[Dict[str, Any]]:
        """Bookings made by ``customer_id``, newest first, with provider details."""
        bookings = self.store.find(BOOKINGS, {"customerId": customer_id}, sort=[("createdAt", -1)])
        providers: Dict[str, Optional[Dict[str, Any]]] = {}
        for booking in bookings:
            booking["provider"] = await self._cached(providers, booking["providerId"], self.providers.find)
        return bookings

    async def list_bookings(self, caller_id: str, caller_role: str) -> List[Dict[str, Any]]:
        """Bookings visible to the caller, newest first.

        Each booking carries the customer's contact card and the provider
        profile.
        """
        query: Dict[str, Any] = {}
        if policy.booking_list_scope(caller_id, caller_role) is policy.Scope.OWN:
            provider = await self.providers.find_by_user(caller_id)
            if provider is None:
                return []
            query["providerId"] = provider["_id"]
        bookings = self.store.find(BOOKINGS, query, sort=[("createdAt", -1)])
        customers: Dict[str, Optional[Dict[str, Any]]] = {}
        providers: Dict[str, Optional[Dict[str, Any]]] = {}
        for booking in bookings:
            booking["customer"] = await self._cached(customers, booking["customerId"], self.users.contact_card)
            booking["provider"] = await self._cached(providers, booking["providerId"], self.providers.find)
        return bookings

    async def update_status(
        self, caller_id: str, caller_role: str, booking_ref: str, new_status: Optional[str]
    ) -> Dict[str, Any]:
        """Set the status of a booking.

        ``booking_ref`` may be the document id or the ``BK…`` booking
        number.  Raises ``ValidationError`` for an unknown status,
        ``NotFoundError`` for an unknown booking and, in strict mode,
        ``PermissionDeniedError`` or ``ValidationError`` when the caller or
        the transition is not allowed.
        """
        if new_status not in policy.BOOKING_STATUSES:
            raise ValidationError("Status must be one of: " + ", ".join(policy.BOOKING_STATUSES))
        booking = await self.find(booking_ref)
        if booking is None:
            raise NotFoundError("Booking not found")

        provider = await self.providers.find(booking["providerId"]) if self.strict else None
        if not policy.can_update_booking_status(caller_id, caller_role, booking, provider, strict=self.strict):
            raise PermissionDeniedError("You are not allowed to update this booking")
        if self.strict and not policy.is_allowed_transition(booking["status"], new_status):
            raise ValidationError(f"Cannot change booking status from {booking['status']} to {new_status}")

        updated = self.store.update_one(BOOKINGS, {"_id": booking["_id"]}, {"status": new_status})
        if updated is None:
            raise NotFoundError("Booking not found")
        logger.info(
            "Booking %s status %s -> %s by %s", updated["bookingId"], booking["status"], new_status, caller_id
        )
        return updated

    async def find(self, booking_ref: str) -> Optional[Dict[str, Any]]:
        if booking_ref.startswith(BOOKING_ID_PREFIX):
            booking = self.store.find_one(BOOKINGS, {"bookingId": booking_ref})
            if booking is not None:
                return booking
        return self.store.find_one(BOOKINGS, {"_id": booking_ref})

    async def count(self, query: Dict[str, Any]) -> int:
        return self.store.count(BOOKINGS, query)

    async def completed_revenue(self, provider_id: str) -> float:
        """Sum of ``amount`` over the provider's completed bookings."""
        completed = self.store.find(BOOKINGS, {"providerId": provider_id, "status": "completed"})
        return sum(booking.get("amount") or 0 for booking in completed)

    @staticmethod
    async def _cached(cache: Dict[str, Any], key: str, loader) -> Any:
        if key not in cache:
            cache[key] = await loader(key)
        return cache[key]
