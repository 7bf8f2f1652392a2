"""Security module for the Movie Catalog API.

This module provides the authentication building blocks of the application:

- TokenKind and JWTManagerInterface: the token codec contract
- JWTManager: signs and verifies access and refresh tokens with separate secrets
- SessionManager: login, registration, logout, refresh and account deletion
- Cookie helpers that set and clear the ``token`` and ``refreshToken`` cookies
- Password hashing and verification utilities based on bcrypt
"""
