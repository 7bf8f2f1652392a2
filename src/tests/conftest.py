import os

os.environ["ENVIRONMENT"] = "testing"

from typing import AsyncGenerator, Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import get_settings, BaseAppSettings
from database import get_db_contextmanager, reset_database
from database.models.accounts import UserModel
from database.models.movies import MovieModel, TheaterModel
from main import create_app
from security.interfaces import JWTManagerInterface, TokenKind
from security.manager import JWTManager

TEST_BASE_URL = "https://test"


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Session-scoped fixture to create and return a FastAPI app instance for testing.
    """
    return create_app()


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, Any]:
    """
    Function-scoped fixture to provide a database session for each test function.
    Yields an asynchronous SQLAlchemy session.
    """
    async with get_db_contextmanager() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def reset_db():
    """
    Fixture to reset the database to a clean state before each test function.
    """
    await reset_database()
    yield


@pytest.fixture(scope="session")
def settings() -> BaseAppSettings:
    """
    Session-scoped fixture to provide application settings.
    """
    return get_settings()


@pytest.fixture(scope="function")
def jwt_manager(settings: BaseAppSettings) -> JWTManagerInterface:
    """
    Function-scoped fixture to provide a JWT manager for creating and verifying tokens.
    Uses settings from BaseAppSettings.
    """
    return JWTManager(
        access_secret_key=settings.SECRET_KEY_ACCESS,
        refresh_secret_key=settings.SECRET_KEY_REFRESH,
        access_expires_delta=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_expires_delta=settings.REFRESH_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_SIGNING_ALGORITHM
    )


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provide an asynchronous HTTP client for testing.
    The https base URL lets the client store the secure token cookies.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=TEST_BASE_URL
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def registered_user(client: AsyncClient) -> dict[str, Any]:
    """
    Register a user through the API and return its data and tokens.
    The client keeps the token cookies of the new session.
    """
    user_data = {
        "name": "Neo",
        "email": "neo@matrix.com",
        "password": "RedPill1999!"
    }
    response = await client.post("/auth/register", json=user_data)
    assert response.status_code == 201, response.text

    access_token = client.cookies.get("token")
    refresh_token = client.cookies.get("refreshToken")

    return {
        **user_data,
        "access_token": access_token,
        "refresh_token": refresh_token
    }


@pytest_asyncio.fixture(scope="function")
async def registered_user_id(
    registered_user: dict[str, Any],
    jwt_manager: JWTManagerInterface
) -> str:
    """Return the id of the registered user, read from its access token."""
    claims = jwt_manager.verify(
        TokenKind.ACCESS, registered_user["access_token"]
    )
    return claims["user_id"]


@pytest_asyncio.fixture(scope="function")
async def another_user(db_session: AsyncSession) -> UserModel:
    """Create another user directly in the database."""
    user = UserModel.create(
        name="Trinity",
        email="trinity@matrix.com",
        raw_password="WhiteRabbit42!"
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def seed_movies(db_session: AsyncSession) -> list[MovieModel]:
    """Seed a handful of movies into the database."""
    movies = [
        MovieModel(
            title="The Matrix",
            year=1999,
            genres=["Action", "Sci-Fi"],
            runtime=136,
            directors=["Lana Wachowski", "Lilly Wachowski"],
            imdb={"rating": 8.7, "votes": 1500000, "id": 133093}
        ),
        MovieModel(title="The Matrix Reloaded", year=2003, runtime=138),
        MovieModel(title="The Matrix Revolutions", year=2003, runtime=129),
    ]
    db_session.add_all(movies)
    await db_session.commit()
    for movie in movies:
        await db_session.refresh(movie)
    return movies


@pytest_asyncio.fixture(scope="function")
async def seed_theaters(db_session: AsyncSession) -> list[TheaterModel]:
    """Seed two theaters with consecutive theater numbers."""
    theaters = [
        TheaterModel(
            theater_id=1,
            location={
                "address": {
                    "street1": "340 W Market",
                    "city": "Bloomington",
                    "state": "MN",
                    "zipcode": "55425"
                },
                "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]}
            }
        ),
        TheaterModel(
            theater_id=2,
            location={
                "address": {
                    "street1": "5000 W 147th St",
                    "city": "Hawthorne",
                    "state": "CA",
                    "zipcode": "90250"
                }
            }
        ),
    ]
    db_session.add_all(theaters)
    await db_session.commit()
    for theater in theaters:
        await db_session.refresh(theater)
    return theaters
