"""
API package containing the HTTP routes.

``router`` aggregates the domain routers in ``endpoints``; ``deps`` wires
services to the document store held by the application.
"""
