from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI

from config.logs import configure_logging
from config.settings import get_settings
from database import create_tables
from exceptions.handlers import register_exception_handlers
from middleware.request_id import RequestIdMiddleware
from routers import accounts, users, movies, comments, theaters

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create missing tables once when the server starts."""
    await create_tables()
    logger.info("app.started")
    yield
    logger.info("app.stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Loading the settings here makes missing or weak signing secrets fail
    the start of the process.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Movie Catalog API",
        description="""
        # Movie Catalog API Documentation

        ## Overview
        CRUD operations over a movie catalog: movies, theaters and the
        comments left on each movie.

        ## Authentication
        Login and registration store a short-lived access token (`token`)
        and a long-lived refresh token (`refreshToken`) in http-only,
        same-site strict cookies. `GET /auth/refresh-token` mints a new
        access token from the refresh token.

        ## Error Handling
        Every response carries a `status` field mirroring the HTTP status.
        Errors carry an `error` message, or an `errors` list when several
        validation problems are reported at once.
        """,
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    app.include_router(accounts.router, prefix="/auth", tags=["auth"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(movies.router, prefix="/movies", tags=["movies"])
    app.include_router(comments.router, prefix="/movies", tags=["comments"])
    app.include_router(theaters.router, prefix="/theaters", tags=["theaters"])

    @app.get(
        "/health",
        tags=["system"],
        summary="Health Check",
        description="Check if the API is running",
        responses={
            200: {
                "description": "API is healthy and operational",
                "content": {
                    "application/json": {
                        "example": {"status": "healthy", "version": "1.0.0"}
                    }
                }
            }
        }
    )
    async def health_check():
        return {"status": "healthy", "version": app.version}

    return app


app = create_app()
