class BaseSecurityError(Exception):
    """Base class for token codec errors.

    These never reach a client directly; the session manager translates
    them into API errors for the cookie that failed.
    """

    def __init__(self, message=None) -> None:
        if message is None:
            message = "A security error occurred."
        super().__init__(message)


class InvalidTokenError(BaseSecurityError):
    """Raised when a JWT cannot be decoded or its signature does not match."""

    def __init__(self, message="Invalid token.") -> None:
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a correctly signed JWT is past its expiration time."""

    def __init__(self, message="Token has expired.") -> None:
        super().__init__(message)
