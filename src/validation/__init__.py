"""Validation module for the Movie Catalog API.

This module provides request-level validation helpers shared by the
routers and the configuration layer:

- Document identifier validation (24 hexadecimal characters)
- Pagination query parameter validation for list endpoints
- Signing secret strength validation for production settings

Validation failures are reported as API errors carrying a 400 status, or
as ValueError where pydantic performs the validation.
"""
