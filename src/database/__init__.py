"""Database module for the Movie Catalog API.

This module provides database configuration and session management for the
application. The backend depends on the ENVIRONMENT variable:

- testing: SQLite through aiosqlite
- anything else: PostgreSQL through asyncpg

The module exports:
- get_db: Dependency injection function for database sessions
- AsyncSessionLocal: Session factory for async database operations
- create_tables / reset_database: schema helpers used at startup and in tests
- All database models
"""
import os

from database.models.base import Base
from database.models.accounts import UserModel, SessionModel
from database.models.movies import MovieModel, CommentModel, TheaterModel

environment = os.getenv("ENVIRONMENT", "developing")

if environment == "testing":
    from database.session_sqlite import (
        get_sqlite_db as get_db,
        AsyncSQLiteSessionLocal as AsyncSessionLocal,
        get_sqlite_db_contextmanager as get_db_contextmanager,
        create_sqlite_tables as create_tables,
        reset_sqlite_database as reset_database,
        sqlite_engine as engine
    )
else:
    from database.session_postgresql import (
        get_postgresql_db as get_db,
        AsyncPostgresqlSessionLocal as AsyncSessionLocal,
        get_postgresql_db_contextmanager as get_db_contextmanager,
        create_postgresql_tables as create_tables,
        reset_postgresql_database as reset_database,
        postgresql_engine as engine
    )
