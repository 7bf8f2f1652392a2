"""Configuration module for the Movie Catalog API.

This module contains all configuration settings and dependency injection
functions for the application. It provides:

- Application settings management with environment variable support
- Dependency injection functions for FastAPI
- JWT token management configuration
- Logging configuration based on structlog

The module uses Pydantic settings for type-safe configuration management
and automatic environment variable loading.
"""
