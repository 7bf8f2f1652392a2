"""HTTP middleware for the Movie Catalog API.

The module includes:
- RequestIdMiddleware: assigns a request id to every request and binds it
  into the structlog context for correlated log entries
"""
