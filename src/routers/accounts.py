from typing import Optional

from fastapi import APIRouter, status, Depends, Cookie, Response

from config.dependencies import get_session_manager
from config.settings import BaseAppSettings, get_settings
from schemas.accounts import (
    UserRegistrationRequestSchema,
    UserRegistrationResponseSchema,
    UserLoginRequestSchema,
    UserLoginResponseSchema,
    MessageResponseSchema
)
from security.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    set_auth_cookies,
    clear_auth_cookies
)
from security.sessions import SessionManager

router = APIRouter()


@router.post(
    "/login",
    response_model=UserLoginResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate a user with email and password. "
                "Stores the access and refresh tokens in http-only cookies.",
    responses={
        401: {
            "description": "Invalid credentials",
            "content": {
                "application/json": {
                    "example": {"status": 401, "error": "Invalid credentials"}
                }
            }
        },
        404: {
            "description": "Collection not found",
            "content": {
                "application/json": {
                    "example": {
                        "status": 404,
                        "error": "Collection 'users' not found"
                    }
                }
            }
        },
        409: {
            "description": "An access token cookie is already present",
            "content": {
                "application/json": {
                    "example": {"status": 409, "error": "Already authenticated"}
                }
            }
        }
    },
)
async def login_user(
    data: UserLoginRequestSchema,
    response: Response,
    token: Optional[str] = Cookie(None, alias=ACCESS_TOKEN_COOKIE),
    settings: BaseAppSettings = Depends(get_settings),
    session_manager: SessionManager = Depends(get_session_manager)
) -> UserLoginResponseSchema:
    """Authenticate a user and start or replace their session.

    Args:
        data: Login credentials (email, password).
        response: Response the token cookies are attached to.
        token: Current access token cookie, rejected when present.
        settings: Application settings.
        session_manager: Authentication session manager.

    Returns:
        UserLoginResponseSchema: Greeting containing the user's name.
    """
    result = await session_manager.login(
        email=data.email,
        password=data.password,
        current_access_token=token
    )
    set_auth_cookies(
        response, settings, result.access_token, result.refresh_token
    )
    return UserLoginResponseSchema(
        status=status.HTTP_200_OK,
        message=result.message
    )


@router.post(
    "/register",
    response_model=UserRegistrationResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Register a new user and open their first session. "
                "Stores the access and refresh tokens in http-only cookies.",
    responses={
        400: {
            "description": "Invalid registration data",
            "content": {
                "application/json": {
                    "example": {
                        "status": 400,
                        "errors": ["name: Field required"]
                    }
                }
            }
        },
        409: {
            "description": "User with this email already exists",
            "content": {
                "application/json": {
                    "example": {"status": 409, "error": "User already exists"}
                }
            }
        },
        500: {
            "description": "The user or its session could not be stored",
            "content": {
                "application/json": {
                    "example": {
                        "status": 500,
                        "error": "User registration failed"
                    }
                }
            }
        }
    },
)
async def register_user(
    data: UserRegistrationRequestSchema,
    response: Response,
    settings: BaseAppSettings = Depends(get_settings),
    session_manager: SessionManager = Depends(get_session_manager)
) -> UserRegistrationResponseSchema:
    """Register a new user and set the session cookies.

    Args:
        data: Registration data (name, email, password).
        response: Response the token cookies are attached to.
        settings: Application settings.
        session_manager: Authentication session manager.

    Returns:
        UserRegistrationResponseSchema: Welcome message containing the name.
    """
    result = await session_manager.register(
        name=data.name,
        email=data.email,
        password=data.password
    )
    set_auth_cookies(
        response, settings, result.access_token, result.refresh_token
    )
    return UserRegistrationResponseSchema(
        status=status.HTTP_201_CREATED,
        message=result.message
    )


@router.post(
    "/logout",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="User logout",
    description="Revoke the session identified by the token cookies "
                "and clear both cookies.",
    responses={
        400: {
            "description": "Token cookies missing or malformed",
            "content": {
                "application/json": {
                    "example": {
                        "status": 400,
                        "error": "No tokens found in cookies"
                    }
                }
            }
        },
        401: {
            "description": "Token verification failed",
            "content": {
                "application/json": {
                    "example": {"status": 401, "error": "Invalid token"}
                }
            }
        },
        404: {
            "description": "Session already revoked",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "Session not found"}
                }
            }
        }
    },
)
async def logout_user(
    response: Response,
    token: Optional[str] = Cookie(None, alias=ACCESS_TOKEN_COOKIE),
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    settings: BaseAppSettings = Depends(get_settings),
    session_manager: SessionManager = Depends(get_session_manager)
) -> MessageResponseSchema:
    """Log the user out and clear the token cookies.

    Args:
        response: Response whose cookies are cleared.
        token: Access token cookie.
        refresh_token: Refresh token cookie.
        settings: Application settings.
        session_manager: Authentication session manager.

    Returns:
        MessageResponseSchema: Farewell containing the user's name.
    """
    result = await session_manager.logout(token, refresh_token)
    clear_auth_cookies(response, settings)
    return MessageResponseSchema(
        status=status.HTTP_200_OK,
        message=result.message
    )


@router.get(
    "/refresh-token",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    description="Mint a new access token from the refresh token cookie. "
                "The refresh token itself is not rotated.",
    responses={
        400: {
            "description": "Refresh token cookie missing",
            "content": {
                "application/json": {
                    "example": {
                        "status": 400,
                        "error": "No refresh token provided"
                    }
                }
            }
        },
        403: {
            "description": "Refresh token verification failed",
            "content": {
                "application/json": {
                    "example": {"status": 403, "error": "Invalid refresh token"}
                }
            }
        },
        404: {
            "description": "No session holds the refresh token",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "Session not found"}
                }
            }
        }
    },
)
async def refresh_access_token(
    response: Response,
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    settings: BaseAppSettings = Depends(get_settings),
    session_manager: SessionManager = Depends(get_session_manager)
) -> MessageResponseSchema:
    """Set a new access token cookie for the current session.

    Args:
        response: Response the new access token cookie is attached to.
        refresh_token: Refresh token cookie.
        settings: Application settings.
        session_manager: Authentication session manager.

    Returns:
        MessageResponseSchema: Confirmation message.
    """
    result = await session_manager.refresh(refresh_token)
    set_auth_cookies(response, settings, result.access_token)
    return MessageResponseSchema(
        status=status.HTTP_200_OK,
        message=result.message
    )
