"""
Top‑level package for the Suvidhaa API.

All functionality lives in submodules under ``app``; the ASGI application
is ``suvidhaa_api.app.main:app``.
"""

__all__ = []
