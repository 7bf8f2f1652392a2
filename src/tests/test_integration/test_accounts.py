import asyncio

import pytest
from fastapi import Depends
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select, func, text
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import get_credential_store
from database import engine, get_db
from database.models.accounts import UserModel, SessionModel
from security.interfaces import TokenKind
from storages.credentials import CredentialStore

BASE_URL = "https://test"


async def count_sessions(db_session, user_id: str) -> int:
    result = await db_session.execute(
        select(func.count(SessionModel.id)).where(
            SessionModel.user_id == user_id
        )
    )
    return result.scalar()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_register_success(client, db_session):
    """Registration creates the user, its session and both cookies."""
    response = await client.post(
        "/auth/register",
        json={
            "name": "Neo",
            "email": "neo@matrix.com",
            "password": "RedPill1999!"
        }
    )
    assert response.status_code == 201
    assert response.json() == {
        "status": 201,
        "message": "Welcome, Neo! Your account has been created."
    }

    set_cookie = response.headers.get_list("set-cookie")
    assert any(header.startswith("token=") for header in set_cookie)
    assert any(header.startswith("refreshToken=") for header in set_cookie)
    for header in set_cookie:
        lowered = header.lower()
        assert "httponly" in lowered
        assert "samesite=strict" in lowered
        assert "secure" in lowered
        assert "path=/" in lowered

    result = await db_session.execute(
        select(UserModel).where(UserModel.email == "neo@matrix.com")
    )
    user = result.scalars().first()
    assert user is not None
    assert user.name == "Neo"

    result = await db_session.execute(
        select(SessionModel).where(SessionModel.user_id == user.id)
    )
    session = result.scalars().first()
    assert session.access_token == client.cookies.get("token")
    assert session.refresh_token == client.cookies.get("refreshToken")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_register_duplicate_email(client, registered_user):
    client.cookies.clear()
    response = await client.post(
        "/auth/register",
        json={
            "name": "Neo Again",
            "email": registered_user["email"],
            "password": "RedPill1999!"
        }
    )
    assert response.status_code == 409
    assert response.json() == {"status": 409, "error": "User already exists"}


class StaleLookupStore(CredentialStore):
    """Store whose email lookup misses users committed by another request."""

    async def get_user_by_email(self, email: str):
        return None


def get_stale_lookup_store(
    db: AsyncSession = Depends(get_db)
) -> CredentialStore:
    return StaleLookupStore(db)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_register_race_on_same_email(
    app, client, registered_user, db_session
):
    """The unique email constraint rejects a registration that passed
    the duplicate check before the first user was committed."""
    app.dependency_overrides[get_credential_store] = get_stale_lookup_store
    client.cookies.clear()

    response = await client.post(
        "/auth/register",
        json={
            "name": "Neo Again",
            "email": registered_user["email"],
            "password": "RedPill1999!"
        }
    )
    assert response.status_code == 500
    assert response.json() == {"status": 500, "error": "User registration failed"}
    assert "token" not in response.cookies

    result = await db_session.execute(
        select(func.count(UserModel.id)).where(
            UserModel.email == registered_user["email"]
        )
    )
    assert result.scalar() == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_register_validation_errors_are_aggregated(client):
    response = await client.post(
        "/auth/register",
        json={"email": "not-an-email", "password": "123"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == 400
    assert len(body["errors"]) == 3
    assert any(error.startswith("name:") for error in body["errors"])
    assert any(error.startswith("email:") for error in body["errors"])
    assert any(error.startswith("password:") for error in body["errors"])


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_success(client, registered_user, registered_user_id, db_session):
    client.cookies.clear()
    response = await client.post(
        "/auth/login",
        json={
            "email": registered_user["email"],
            "password": registered_user["password"]
        }
    )
    assert response.status_code == 200
    assert response.json() == {"status": 200, "message": "Welcome back, Neo!"}

    new_access_token = client.cookies.get("token")
    assert new_access_token
    assert new_access_token != registered_user["access_token"]

    assert await count_sessions(db_session, registered_user_id) == 1
    result = await db_session.execute(
        select(SessionModel).where(SessionModel.user_id == registered_user_id)
    )
    session = result.scalars().first()
    assert session.access_token == new_access_token
    assert session.refresh_token == client.cookies.get("refreshToken")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_with_access_cookie_is_conflict(client, registered_user):
    response = await client.post(
        "/auth/login",
        json={
            "email": registered_user["email"],
            "password": registered_user["password"]
        }
    )
    assert response.status_code == 409
    assert response.json() == {"status": 409, "error": "Already authenticated"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_wrong_password(client, registered_user):
    client.cookies.clear()
    response = await client.post(
        "/auth/login",
        json={"email": registered_user["email"], "password": "BluePill1999!"}
    )
    assert response.status_code == 401
    assert response.json() == {"status": 401, "error": "Invalid credentials"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_unknown_email(client):
    response = await client.post(
        "/auth/login",
        json={"email": "smith@matrix.com", "password": "RedPill1999!"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_concurrent_logins_keep_one_session(
    app, registered_user, registered_user_id, db_session
):
    """Simultaneous logins of one user still leave a single session row."""
    credentials = {
        "email": registered_user["email"],
        "password": registered_user["password"]
    }

    async def login() -> int:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url=BASE_URL
        ) as fresh_client:
            response = await fresh_client.post("/auth/login", json=credentials)
            return response.status_code

    statuses = await asyncio.gather(*(login() for _ in range(5)))

    assert statuses == [200] * 5
    assert await count_sessions(db_session, registered_user_id) == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_refresh_token_twice(client, registered_user, db_session, registered_user_id):
    """The refresh token is not rotated and keeps working."""
    first = await client.get("/auth/refresh-token")
    assert first.status_code == 200
    assert first.json() == {"status": 200, "message": "Access token refreshed"}
    first_access_token = client.cookies.get("token")

    second = await client.get("/auth/refresh-token")
    assert second.status_code == 200
    second_access_token = client.cookies.get("token")

    assert first_access_token != registered_user["access_token"]
    assert second_access_token != first_access_token
    assert client.cookies.get("refreshToken") == registered_user["refresh_token"]

    set_cookie = second.headers.get_list("set-cookie")
    assert all(not header.startswith("refreshToken=") for header in set_cookie)

    result = await db_session.execute(
        select(SessionModel).where(SessionModel.user_id == registered_user_id)
    )
    session = result.scalars().first()
    assert session.access_token == second_access_token


@pytest.mark.integration
@pytest.mark.asyncio
async def test_refresh_without_cookie(client):
    response = await client.get("/auth/refresh-token")
    assert response.status_code == 400
    assert response.json() == {"status": 400, "error": "No refresh token provided"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_refresh_with_access_token_is_forbidden(client, registered_user):
    client.cookies.clear()
    client.cookies.set("refreshToken", registered_user["access_token"])
    response = await client.get("/auth/refresh-token")
    assert response.status_code == 403
    assert response.json() == {"status": 403, "error": "Invalid refresh token"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_refresh_after_logout(client, registered_user):
    logout = await client.post("/auth/logout")
    assert logout.status_code == 200

    client.cookies.set("refreshToken", registered_user["refresh_token"])
    response = await client.get("/auth/refresh-token")
    assert response.status_code == 404
    assert response.json() == {"status": 404, "error": "Session not found"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_logout_success(client, registered_user, registered_user_id, db_session):
    response = await client.post("/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"status": 200, "message": "See you later Neo 👋"}

    assert client.cookies.get("token") is None
    assert client.cookies.get("refreshToken") is None
    assert await count_sessions(db_session, registered_user_id) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_logout_twice(client, registered_user):
    first = await client.post("/auth/logout")
    assert first.status_code == 200

    client.cookies.set("token", registered_user["access_token"])
    client.cookies.set("refreshToken", registered_user["refresh_token"])
    second = await client.post("/auth/logout")
    assert second.status_code == 404
    assert second.json() == {"status": 404, "error": "Session not found"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_logout_without_cookies(client):
    response = await client.post("/auth/logout")
    assert response.status_code == 400
    assert response.json() == {"status": 400, "error": "No tokens found in cookies"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_logout_without_refresh_cookie(client, registered_user):
    client.cookies.delete("refreshToken")
    response = await client.post("/auth/logout")
    assert response.status_code == 400
    assert response.json() == {"status": 400, "error": "No refreshToken provided"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_logout_with_tampered_access_token(client, registered_user):
    client.cookies.clear()
    client.cookies.set("refreshToken", registered_user["refresh_token"])
    client.cookies.set("token", registered_user["access_token"] + "x")
    response = await client.post("/auth/logout")
    assert response.status_code == 401
    assert response.json() == {"status": 401, "error": "Invalid token"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_own_account(client, registered_user, registered_user_id, db_session):
    response = await client.delete(f"/users/{registered_user_id}")
    assert response.status_code == 200
    assert response.json() == {
        "status": 200,
        "message": "User and session data deleted"
    }
    assert client.cookies.get("token") is None

    result = await db_session.execute(
        select(UserModel).where(UserModel.id == registered_user_id)
    )
    assert result.scalars().first() is None
    assert await count_sessions(db_session, registered_user_id) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_other_account_is_forbidden(
    client, registered_user, another_user, db_session
):
    response = await client.delete(f"/users/{another_user.id}")
    assert response.status_code == 403
    assert response.json() == {
        "status": 403,
        "error": "You can only delete your own account"
    }

    result = await db_session.execute(
        select(func.count(UserModel.id))
    )
    assert result.scalar() == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_account_invalid_id(client, registered_user):
    response = await client.delete("/users/not-an-object-id")
    assert response.status_code == 400
    assert response.json() == {
        "status": 400,
        "error": "Invalid user ObjectId parameter format"
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_account_without_cookies(client, another_user):
    response = await client.delete(f"/users/{another_user.id}")
    assert response.status_code == 400
    assert response.json()["error"] == "No tokens found in cookies"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_login_with_missing_sessions_collection(client, registered_user):
    async with engine.begin() as conn:
        await conn.execute(text("DROP TABLE sessions"))

    client.cookies.clear()
    response = await client.post(
        "/auth/login",
        json={
            "email": registered_user["email"],
            "password": registered_user["password"]
        }
    )
    assert response.status_code == 404
    assert response.json() == {
        "status": 404,
        "error": "Collection 'sessions' not found"
    }


@pytest.mark.integration
@pytest.mark.asyncio
async def test_full_account_journey(client, jwt_manager):
    """Register, log out, log back in, refresh and delete the account."""
    register = await client.post(
        "/auth/register",
        json={
            "name": "Morpheus",
            "email": "morpheus@matrix.com",
            "password": "Nebuchadnezzar1!"
        }
    )
    assert register.status_code == 201

    logout = await client.post("/auth/logout")
    assert logout.json()["message"] == "See you later Morpheus 👋"

    login = await client.post(
        "/auth/login",
        json={"email": "morpheus@matrix.com", "password": "Nebuchadnezzar1!"}
    )
    assert login.json()["message"] == "Welcome back, Morpheus!"

    refresh = await client.get("/auth/refresh-token")
    assert refresh.status_code == 200

    relogin = await client.post(
        "/auth/login",
        json={"email": "morpheus@matrix.com", "password": "Nebuchadnezzar1!"}
    )
    assert relogin.status_code == 409

    claims = jwt_manager.verify(
        TokenKind.ACCESS, client.cookies.get("token")
    )
    delete = await client.delete(f"/users/{claims['user_id']}")
    assert delete.status_code == 200
