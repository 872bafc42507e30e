"""
Dependency wiring for the API routes.

The document store is created once in ``create_app`` and kept on
``app.state``; the providers below hand each request a service bound to
it.  ``server_error`` turns store failures into the HTTP 500 body clients
expect.
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from suvidhaa_api.app.core.db import DocumentStore
from suvidhaa_api.app.services.booking_service import BookingService
from suvidhaa_api.app.services.contact_service import ContactService
from suvidhaa_api.app.services.provider_service import ProviderService
from suvidhaa_api.app.services.statistics_service import StatisticsService
from suvidhaa_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_provider_service(store: DocumentStore = Depends(get_store)) -> ProviderService:
    return ProviderService(store)


def get_booking_service(request: Request, store: DocumentStore = Depends(get_store)) -> BookingService:
    return BookingService(store, strict=request.app.state.settings.strict_booking_policy)


def get_contact_service(store: DocumentStore = Depends(get_store)) -> ContactService:
    return ContactService(store)


def get_statistics_service(store: DocumentStore = Depends(get_store)) -> StatisticsService:
    return StatisticsService(store)


def server_error(exc: Exception) -> HTTPException:
    """Log ``exc`` and wrap it in a 500 response carrying its message."""
    logger.error("Unhandled store error: %s", exc, exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": "Server error", "error": str(exc)},
    )
