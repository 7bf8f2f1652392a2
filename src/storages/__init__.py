"""Storages module for the Movie Catalog API.

This module provides persistence of credentials for the authentication
subsystem.

The module includes:
- CredentialStoreInterface: Abstract interface for user and session storage
- CredentialStore: SQLAlchemy implementation working on the request session

The session manager depends only on the interface, so its stage ordering
can be tested against a mocked store.
"""
