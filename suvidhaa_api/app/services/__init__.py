"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services are
constructed with the document store they work on, so API handlers and
tests decide which store backs them.
"""
