from typing import Optional

from fastapi import APIRouter, status, Depends, Cookie, Response

from config.dependencies import get_session_manager
from config.settings import BaseAppSettings, get_settings
from schemas.accounts import MessageResponseSchema
from security.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies
)
from security.sessions import SessionManager
from validation.requests import validate_object_id

router = APIRouter()


@router.delete(
    "/{user_id}",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Delete own account",
    description="Delete the authenticated user's account and its sessions. "
                "Users can only delete their own account.",
    responses={
        200: {
            "description": "Account deleted",
            "content": {
                "application/json": {
                    "example": {
                        "status": 200,
                        "message": "User and session data deleted"
                    }
                }
            }
        },
        403: {
            "description": "Target account is not the caller's account",
            "content": {
                "application/json": {
                    "example": {
                        "status": 403,
                        "error": "You can only delete your own account"
                    }
                }
            }
        },
        500: {
            "description": "User deleted but session cleanup failed",
            "content": {
                "application/json": {
                    "example": {
                        "status": 500,
                        "error": "Can't delete session because it's not "
                                 "found or already deleted"
                    }
                }
            }
        }
    },
)
async def delete_user(
    user_id: str,
    response: Response,
    token: Optional[str] = Cookie(None, alias=ACCESS_TOKEN_COOKIE),
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    settings: BaseAppSettings = Depends(get_settings),
    session_manager: SessionManager = Depends(get_session_manager)
) -> MessageResponseSchema:
    """Delete the caller's account and clear the token cookies.

    A 500 response after the authorization checks means the user row may
    already be gone while its session survived.
    """
    user_id = validate_object_id(
        user_id, "Invalid user ObjectId parameter format"
    )
    result = await session_manager.delete_account(
        user_id, token, refresh_token
    )
    clear_auth_cookies(response, settings)
    return MessageResponseSchema(
        status=status.HTTP_200_OK,
        message=result.message
    )
