from typing import Optional

from fastapi import Response

from config.settings import BaseAppSettings

ACCESS_TOKEN_COOKIE = "token"
REFRESH_TOKEN_COOKIE = "refreshToken"


def _cookie_options(settings: BaseAppSettings) -> dict:
    return {
        "path": "/",
        "secure": settings.COOKIE_SECURE,
        "httponly": True,
        "samesite": "strict",
    }


def set_auth_cookies(
    response: Response,
    settings: BaseAppSettings,
    access_token: str,
    refresh_token: Optional[str] = None
) -> None:
    """Store the token pair in http-only, same-site strict cookies.

    Cookie lifetimes follow the token lifetimes. The refresh cookie is left
    untouched when no refresh token is given.

    Args:
        response (Response): Response the cookies are attached to.
        settings (BaseAppSettings): Token lifetimes and cookie security flag.
        access_token (str): Value of the ``token`` cookie.
        refresh_token (Optional[str]): Value of the ``refreshToken`` cookie.
    """
    options = _cookie_options(settings)
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **options
    )
    if refresh_token is not None:
        response.set_cookie(
            REFRESH_TOKEN_COOKIE,
            refresh_token,
            max_age=settings.REFRESH_TOKEN_EXPIRE_MINUTES * 60,
            **options
        )


def clear_auth_cookies(response: Response, settings: BaseAppSettings) -> None:
    """Expire both token cookies immediately."""
    options = _cookie_options(settings)
    response.delete_cookie(ACCESS_TOKEN_COOKIE, **options)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, **options)
