"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (auth, bookings, providers, contact, dashboard)
has a service in ``services`` and a router in ``api/endpoints``; shared
infrastructure (configuration, logging, security, the document store and
the authorization policy) lives in ``core``.
"""

from .main import app  # noqa: F401
