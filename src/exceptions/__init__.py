"""Custom exceptions module for the Movie Catalog API.

This module contains all custom exception classes used throughout the application.
These exceptions provide specific error handling for different domains:

- Security exceptions for JWT encoding and decoding errors
- API exceptions carrying the HTTP status and message returned to clients
- Exception handlers that render every error as a JSON envelope

Each exception class includes an appropriate default message and can be used
for proper error handling and user feedback throughout the application.
"""
