import uuid
from datetime import timedelta, datetime, timezone
from typing import Optional

from jose import jwt, ExpiredSignatureError, JWTError

from exceptions.security import TokenExpiredError, InvalidTokenError
from security.interfaces import JWTManagerInterface, TokenKind


class JWTManager(JWTManagerInterface):
    """JWT token manager for access and refresh tokens.

    Secrets and lifetimes are held in maps keyed by TokenKind, so verifying
    a token of one kind can only ever use that kind's secret.
    """

    def __init__(
        self,
        access_secret_key: str,
        refresh_secret_key: str,
        access_expires_delta: int,
        refresh_expires_delta: int,
        algorithm: str
    ) -> None:
        """Initialize the JWT manager with configuration.

        Args:
            access_secret_key (str): Secret key for signing access tokens.
            refresh_secret_key (str): Secret key for signing refresh tokens.
            access_expires_delta (int): Access token expiration time in minutes.
            refresh_expires_delta (int): Refresh token expiration time in minutes.
            algorithm (str): JWT signing algorithm (e.g., 'HS256').
        """
        self._secrets: dict[TokenKind, str] = {
            TokenKind.ACCESS: access_secret_key,
            TokenKind.REFRESH: refresh_secret_key,
        }
        self._lifetimes: dict[TokenKind, timedelta] = {
            TokenKind.ACCESS: timedelta(minutes=access_expires_delta),
            TokenKind.REFRESH: timedelta(minutes=refresh_expires_delta),
        }
        self._algorithm = algorithm

    @property
    def access_expires_delta(self) -> timedelta:
        return self._lifetimes[TokenKind.ACCESS]

    @property
    def refresh_expires_delta(self) -> timedelta:
        return self._lifetimes[TokenKind.REFRESH]

    def issue(
        self,
        kind: TokenKind,
        claims: dict,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT of the given kind with the claims and an expiration.

        A random ``jti`` is added so two tokens issued within the same second
        for the same user still differ.

        Args:
            kind (TokenKind): Token kind selecting secret and default lifetime.
            claims (dict): Data to encode in the token.
            expires_delta (Optional[timedelta]): Custom expiration time.

        Returns:
            str: Encoded JWT token.
        """
        to_encode = claims.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta if expires_delta else self._lifetimes[kind]
        )
        to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})

        return jwt.encode(
            to_encode,
            key=self._secrets[kind],
            algorithm=self._algorithm
        )

    def verify(self, kind: TokenKind, token: str) -> dict:
        """Decode and validate a token of the given kind.

        Args:
            kind (TokenKind): Token kind selecting the verification secret.
            token (str): The token to decode.

        Returns:
            dict: Decoded token data.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or malformed.
        """
        try:
            return jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self._algorithm]
            )
        except ExpiredSignatureError:
            raise TokenExpiredError
        except JWTError:
            raise InvalidTokenError
