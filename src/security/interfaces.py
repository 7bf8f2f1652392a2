from abc import ABC, abstractmethod
from datetime import timedelta
from enum import Enum
from typing import Optional


class TokenKind(Enum):
    """The two classes of bearer token issued to a user.

    - ACCESS: short-lived token authorizing requests
    - REFRESH: long-lived token used only to mint new access tokens
    """
    ACCESS = "access"
    REFRESH = "refresh"


class JWTManagerInterface(ABC):
    """Abstract interface for JWT token management.

    Implementations sign and verify access and refresh tokens, each kind
    with its own secret and lifetime.
    """

    @abstractmethod
    def issue(
        self,
        kind: TokenKind,
        claims: dict,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Sign a token of the given kind carrying the claims.

        Args:
            kind (TokenKind): Which secret and default lifetime to use.
            claims (dict): Identity claims to encode.
            expires_delta (Optional[timedelta]): Custom expiration time.

        Returns:
            str: Encoded token.
        """
        pass

    @abstractmethod
    def verify(self, kind: TokenKind, token: str) -> dict:
        """Verify a token of the given kind and return its claims.

        Args:
            kind (TokenKind): Which secret to verify against.
            token (str): The token to verify.

        Returns:
            dict: Decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or malformed.
        """
        pass

