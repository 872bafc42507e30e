"""
Authorization policy.

Each guarded route that needs more than "the caller is signed in" asks one
of the functions below.  They receive the caller's id and role together
with the resource in question and answer with a decision; the service
applies it.  Keeping the rules here means role branching does not leak
into handlers.

The defaults reproduce the marketplace's established behavior: providers
only see bookings made with them, everyone else sees every booking, and
any signed-in user may change a booking's status or read contact
inquiries.  With ``strict`` enabled a status change must follow
``ALLOWED_TRANSITIONS`` and come from the booking's customer or provider.
"""

from enum import Enum
from typing import Any, Dict, Optional

CUSTOMER = "customer"
PROVIDER = "provider"

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")

ALLOWED_TRANSITIONS: Dict[str, frozenset] = {
    "pending": frozenset({"confirmed", "cancelled"}),
    "confirmed": frozenset({"completed", "cancelled"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}


class Scope(str, Enum):
    """How much of a collection a caller may see."""

    OWN = "own"
    ALL = "all"


def booking_list_scope(caller_id: str, caller_role: str) -> Scope:
    """``GET /api/bookings``: providers are limited to their own bookings."""
    if caller_role == PROVIDER:
        return Scope.OWN
    return Scope.ALL


def stats_scope(caller_id: str, caller_role: str) -> Scope:
    """``GET /api/dashboard/stats``: provider figures or customer figures.

    ``OWN`` means provider-side statistics over the caller's provider
    profile; ``ALL`` means the caller's bookings as a customer.
    """
    if caller_role == PROVIDER:
        return Scope.OWN
    return Scope.ALL


def is_allowed_transition(current: str, new: str) -> bool:
    if current == new:
        return True
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


def can_update_booking_status(
    caller_id: str,
    caller_role: str,
    booking: Dict[str, Any],
    provider: Optional[Dict[str, Any]] = None,
    strict: bool = False,
) -> bool:
    """``PATCH /api/bookings/{id}/status``.

    ``provider`` is the provider document the booking refers to; it is only
    consulted in strict mode, where the caller has to be either the
    booking's customer or the user owning that provider profile.
    """
    if not strict:
        return True
    if booking.get("customerId") == caller_id:
        return True
    return provider is not None and provider.get("userId") == caller_id


def can_read_contacts(caller_id: str, caller_role: str) -> bool:
    """``GET /api/contact``: open to every signed-in user."""
    return True
