"""
Pydantic schema definitions for API payloads.

Each domain (users, bookings, providers, contact) defines its own Pydantic
models for request bodies.  Stored documents are returned as dictionaries,
so schemas describe what clients send rather than what the store holds.
"""
