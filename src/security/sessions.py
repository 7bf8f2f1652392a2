"""Session lifecycle of the authentication subsystem.

SessionManager implements login, registration, logout, access token refresh
and account deletion on top of a credential store and a JWT manager.

Every transition that reads cookies runs its checks in a fixed order:

1. presence of every required cookie
2. signature and expiry of each token
3. shape of the access token claims
4. authorization
5. persistence

A request missing a cookie never reaches token verification and a request
with an invalid token never reaches authorization or the store.

Refreshing mints a new access token only. The refresh token is not rotated
and stays usable until it expires, the user logs out or the account is
deleted.
"""
from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database.models.accounts import UserModel
from exceptions.api import (
    AccountOwnershipError,
    AlreadyAuthenticatedError,
    ApiError,
    DuplicateUserError,
    ForbiddenError,
    InvalidAccessTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    MalformedTokenError,
    MissingRefreshTokenError,
    MissingTokenError,
    MissingTokensError,
    PersistenceError,
    RegistrationFailedError,
    SessionCreationFailedError,
    SessionDeletionFailedError,
    SessionNotFoundError,
    UserNotFoundError
)
from exceptions.security import BaseSecurityError
from security.interfaces import JWTManagerInterface, TokenKind
from storages.interfaces import CredentialStoreInterface

logger = structlog.get_logger(__name__)

AUTH_COLLECTIONS = ("users", "sessions")


@dataclass(frozen=True)
class Identity:
    """Identity claims carried by both token kinds."""
    user_id: str
    email: str
    name: str

    @classmethod
    def from_user(cls, user: UserModel) -> "Identity":
        return cls(user_id=user.id, email=user.email, name=user.name)

    def to_claims(self) -> dict:
        return {"user_id": self.user_id, "email": self.email, "name": self.name}


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a transition: the message for the client and the tokens
    to store in cookies, if any."""
    message: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class SessionManager:
    """Coordinate issuing, validating, refreshing and revoking token pairs.

    Attributes:
        _store (CredentialStoreInterface): Persistence of users and sessions.
        _jwt_manager (JWTManagerInterface): Token codec.
    """

    def __init__(
        self,
        store: CredentialStoreInterface,
        jwt_manager: JWTManagerInterface
    ) -> None:
        self._store = store
        self._jwt_manager = jwt_manager

    @staticmethod
    def _require_tokens(
        access_token: Optional[str],
        refresh_token: Optional[str]
    ) -> None:
        if not access_token and not refresh_token:
            raise MissingTokensError
        if not access_token:
            raise MissingTokenError
        if not refresh_token:
            raise MissingRefreshTokenError

    def _verify(self, kind: TokenKind, token: str, error: ApiError) -> dict:
        try:
            return self._jwt_manager.verify(kind, token)
        except BaseSecurityError as exc:
            logger.warning(
                "auth.token_rejected",
                kind=kind.value,
                reason=str(exc)
            )
            raise error from exc

    @staticmethod
    def _extract_identity(claims: dict) -> Identity:
        user_id = claims.get("user_id")
        name = claims.get("name")
        if not user_id or not name:
            raise MalformedTokenError
        return Identity(
            user_id=str(user_id),
            email=claims.get("email") or "",
            name=name
        )

    def _issue_pair(self, identity: Identity) -> tuple[str, str]:
        claims = identity.to_claims()
        return (
            self._jwt_manager.issue(TokenKind.ACCESS, claims),
            self._jwt_manager.issue(TokenKind.REFRESH, claims)
        )

    async def login(
        self,
        email: str,
        password: str,
        current_access_token: Optional[str] = None
    ) -> AuthResult:
        """Authenticate a user and upsert their session.

        Args:
            email: Email address of the account.
            password: Plain text password.
            current_access_token: Value of the ``token`` cookie, if sent.

        Returns:
            AuthResult: Greeting and the new token pair.

        Raises:
            AlreadyAuthenticatedError: If an access token cookie is present.
            InvalidCredentialsError: If the email is unknown or the password is wrong.
            SessionCreationFailedError: If the session cannot be stored.
        """
        if current_access_token:
            raise AlreadyAuthenticatedError

        await self._store.ensure_collections(*AUTH_COLLECTIONS)

        user = await self._store.get_user_by_email(email)
        if not user or not user.verify_password(password):
            logger.warning("auth.login_rejected", email=email)
            raise InvalidCredentialsError

        access_token, refresh_token = self._issue_pair(Identity.from_user(user))

        try:
            await self._store.upsert_session(
                user.id, access_token, refresh_token
            )
            await self._store.commit()
        except SQLAlchemyError as exc:
            await self._store.rollback()
            raise SessionCreationFailedError from exc

        logger.info("auth.login_succeeded", user_id=user.id)
        return AuthResult(
            message=f"Welcome back, {user.name}!",
            access_token=access_token,
            refresh_token=refresh_token
        )

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create a user together with its first session.

        The user row is flushed before the session is inserted, so a
        concurrent registration with the same email fails at the user
        insert rather than later.

        Raises:
            DuplicateUserError: If the email is already registered.
            RegistrationFailedError: If the user row cannot be inserted.
            SessionCreationFailedError: If the session row cannot be inserted.
        """
        await self._store.ensure_collections(*AUTH_COLLECTIONS)

        if await self._store.get_user_by_email(email):
            raise DuplicateUserError

        try:
            user = await self._store.add_user(
                UserModel.create(name=name, email=email, raw_password=password)
            )
        except IntegrityError as exc:
            await self._store.rollback()
            logger.warning("auth.registration_conflict", email=email)
            raise RegistrationFailedError from exc
        except SQLAlchemyError as exc:
            await self._store.rollback()
            raise RegistrationFailedError from exc

        access_token, refresh_token = self._issue_pair(Identity.from_user(user))

        try:
            await self._store.add_session(user.id, access_token, refresh_token)
            await self._store.commit()
        except SQLAlchemyError as exc:
            await self._store.rollback()
            raise SessionCreationFailedError from exc

        logger.info("auth.registered", user_id=user.id)
        return AuthResult(
            message=f"Welcome, {user.name}! Your account has been created.",
            access_token=access_token,
            refresh_token=refresh_token
        )

    async def logout(
        self,
        access_token: Optional[str],
        refresh_token: Optional[str]
    ) -> AuthResult:
        """Revoke the session identified by the cookie pair.

        Raises:
            MissingTokensError, MissingTokenError, MissingRefreshTokenError:
                If a cookie is absent.
            InvalidAccessTokenError, InvalidRefreshTokenError:
                If a token fails verification.
            MalformedTokenError: If the access token lacks user id or name.
            UserNotFoundError: If the user of the claims no longer exists.
            SessionNotFoundError: If no session holds the access token.
        """
        self._require_tokens(access_token, refresh_token)

        claims = self._verify(
            TokenKind.ACCESS, access_token, InvalidAccessTokenError()
        )
        self._verify(
            TokenKind.REFRESH, refresh_token, InvalidRefreshTokenError()
        )

        identity = self._extract_identity(claims)

        await self._store.ensure_collections(*AUTH_COLLECTIONS)

        user = await self._store.get_user_by_id(identity.user_id)
        if not user:
            raise UserNotFoundError
        if user.id != identity.user_id:
            raise ForbiddenError

        try:
            deleted = await self._store.delete_session_by_access_token(
                access_token
            )
            if not deleted:
                await self._store.rollback()
                raise SessionNotFoundError

            if refresh_token != access_token:
                await self._store.delete_sessions_by_refresh_token(
                    refresh_token
                )
            await self._store.commit()
        except SQLAlchemyError as exc:
            await self._store.rollback()
            raise PersistenceError(str(exc)) from exc

        logger.info("auth.logout_succeeded", user_id=user.id)
        return AuthResult(message=f"See you later {user.name} 👋")

    async def refresh(self, refresh_token: Optional[str]) -> AuthResult:
        """Mint a new access token for the session holding the refresh token.

        An invalid refresh token is reported with a 403 status, unlike
        logout and account deletion which report it as 401.

        Raises:
            MissingRefreshTokenError: If the cookie is absent.
            InvalidRefreshTokenError: If the token fails verification (403).
            SessionNotFoundError: If no session holds the refresh token.
            UserNotFoundError: If the user of the claims no longer exists.
        """
        if not refresh_token:
            raise MissingRefreshTokenError("No refresh token provided")

        claims = self._verify(
            TokenKind.REFRESH,
            refresh_token,
            InvalidRefreshTokenError("Invalid refresh token", status_code=403)
        )

        await self._store.ensure_collections(*AUTH_COLLECTIONS)

        session = await self._store.get_session_by_refresh_token(refresh_token)
        if not session:
            raise SessionNotFoundError

        user = await self._store.get_user_by_email(claims.get("email") or "")
        if not user:
            raise UserNotFoundError

        access_token = self._jwt_manager.issue(
            TokenKind.ACCESS, Identity.from_user(user).to_claims()
        )

        try:
            await self._store.update_session_access_token(
                session.id, access_token
            )
            await self._store.commit()
        except SQLAlchemyError as exc:
            await self._store.rollback()
            raise PersistenceError(str(exc)) from exc

        logger.info("auth.session_refreshed", user_id=user.id)
        return AuthResult(
            message="Access token refreshed",
            access_token=access_token
        )

    async def delete_account(
        self,
        target_user_id: str,
        access_token: Optional[str],
        refresh_token: Optional[str]
    ) -> AuthResult:
        """Delete the caller's own account, then its sessions.

        The user deletion is committed before the sessions are removed. If
        removing the sessions fails the user is already gone and
        SessionDeletionFailedError is raised.

        Raises:
            AccountOwnershipError: If the target is not the caller's account.
            UserNotFoundError: If no user row was deleted.
            SessionDeletionFailedError: If the sessions cannot be removed.
        """
        self._require_tokens(access_token, refresh_token)

        claims = self._verify(
            TokenKind.ACCESS, access_token, InvalidAccessTokenError()
        )
        self._verify(
            TokenKind.REFRESH, refresh_token, InvalidRefreshTokenError()
        )

        identity = self._extract_identity(claims)

        if identity.user_id != target_user_id:
            logger.warning(
                "auth.account_deletion_forbidden",
                user_id=identity.user_id,
                target_user_id=target_user_id
            )
            raise AccountOwnershipError

        await self._store.ensure_collections(*AUTH_COLLECTIONS)

        try:
            deleted = await self._store.delete_user(target_user_id)
            if not deleted:
                await self._store.rollback()
                raise UserNotFoundError
            await self._store.commit()
        except SQLAlchemyError as exc:
            await self._store.rollback()
            raise PersistenceError(str(exc)) from exc

        try:
            await self._store.delete_sessions_by_tokens(
                access_token, refresh_token
            )
            await self._store.commit()
        except SQLAlchemyError as exc:
            await self._store.rollback()
            logger.error(
                "auth.session_cleanup_failed",
                user_id=target_user_id,
                error=str(exc)
            )
            raise SessionDeletionFailedError from exc

        logger.info("auth.account_deleted", user_id=target_user_id)
        return AuthResult(message="User and session data deleted")
