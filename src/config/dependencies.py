from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import BaseAppSettings, get_settings
from database import get_db
from security.interfaces import JWTManagerInterface
from security.manager import JWTManager
from security.sessions import SessionManager
from storages.credentials import CredentialStore
from storages.interfaces import CredentialStoreInterface


def get_jwt_manager(
    settings: BaseAppSettings = Depends(get_settings)
) -> JWTManagerInterface:
    """Get JWT manager instance with application settings.

    Creates and returns a JWT manager configured with the application's
    secret keys, token expiration times, and signing algorithm.

    Args:
        settings (BaseAppSettings): Application settings containing JWT configuration.

    Returns:
        JWTManagerInterface: Configured JWT manager instance.
    """
    return JWTManager(
        access_secret_key=settings.SECRET_KEY_ACCESS,
        refresh_secret_key=settings.SECRET_KEY_REFRESH,
        access_expires_delta=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_expires_delta=settings.REFRESH_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_SIGNING_ALGORITHM
    )


def get_credential_store(
    db: AsyncSession = Depends(get_db)
) -> CredentialStoreInterface:
    """Get the credential store bound to the request's database session."""
    return CredentialStore(db)


def get_session_manager(
    store: CredentialStoreInterface = Depends(get_credential_store),
    jwt_manager: JWTManagerInterface = Depends(get_jwt_manager)
) -> SessionManager:
    """Get the session manager for the current request.

    Args:
        store (CredentialStoreInterface): Persistence of users and sessions.
        jwt_manager (JWTManagerInterface): Token codec.

    Returns:
        SessionManager: Manager handling the authentication transitions.
    """
    return SessionManager(store=store, jwt_manager=jwt_manager)
