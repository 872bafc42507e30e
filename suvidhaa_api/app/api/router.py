"""
Top‑level API router.

Aggregates the domain routers under their prefixes.  The application
mounts this router under ``/api``.  When a new domain is added, include
its router here.
"""

from fastapi import APIRouter

from .endpoints import auth, bookings, contact, dashboard, providers

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(providers.router, prefix="/providers", tags=["providers"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
