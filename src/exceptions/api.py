from typing import Optional


class ApiError(Exception):
    """Base exception class for errors returned to API clients.

    Every subclass carries the HTTP status code and the default message of
    the response rendered by the exception handlers. Either can be overridden
    per raise site.
    """
    status_code: int = 500
    message: str = "Unknown error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[list[str]] = None
    ) -> None:
        """Initialize the API error.

        Args:
            message (str, optional): Custom error message. Defaults to the class message.
            status_code (int, optional): Custom HTTP status. Defaults to the class status.
            errors (list[str], optional): Aggregated validation messages.
        """
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)


class BadRequestError(ApiError):
    status_code = 400
    message = "Bad request"


class AuthenticationError(ApiError):
    status_code = 401
    message = "Unauthorized"


class ForbiddenError(ApiError):
    status_code = 403
    message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class ConflictError(ApiError):
    status_code = 409
    message = "Conflict"


class InternalError(ApiError):
    status_code = 500
    message = "Unknown error occurred"


class RequestValidationFailedError(BadRequestError):
    """Raised when a request body fails validation.

    The individual messages are collected in ``errors`` so a client sees
    every problem at once.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__(message="Validation failed", errors=errors)


class InvalidQueryParametersError(BadRequestError):
    message = "Invalid query parameters"


class InvalidObjectIdError(BadRequestError):
    message = "Invalid ObjectId format"


class MissingTokensError(BadRequestError):
    message = "No tokens found in cookies"


class MissingTokenError(BadRequestError):
    message = "No token provided"


class MissingRefreshTokenError(BadRequestError):
    message = "No refreshToken provided"


class MalformedTokenError(BadRequestError):
    message = "Unable to extract user information from token"


class InvalidCredentialsError(AuthenticationError):
    message = "Invalid credentials"


class InvalidAccessTokenError(AuthenticationError):
    message = "Invalid token"


class InvalidRefreshTokenError(AuthenticationError):
    message = "Invalid refreshToken"


class AccountOwnershipError(ForbiddenError):
    message = "You can only delete your own account"


class CollectionNotFoundError(NotFoundError):
    """Raised when a collection a handler depends on does not exist."""

    def __init__(self, name: str) -> None:
        self.collection = name
        super().__init__(message=f"Collection '{name}' not found")


class UserNotFoundError(NotFoundError):
    message = "User not found"


class SessionNotFoundError(NotFoundError):
    message = "Session not found"


class MovieNotFoundError(NotFoundError):
    message = "Movie not found"


class TheaterNotFoundError(NotFoundError):
    message = "Theater not found"


class CommentNotFoundError(NotFoundError):
    message = "Comment not found"


class AlreadyAuthenticatedError(ConflictError):
    message = "Already authenticated"


class DuplicateUserError(ConflictError):
    message = "User already exists"


class DuplicateMovieError(ConflictError):
    message = "Movie already exists"


class RegistrationFailedError(InternalError):
    message = "User registration failed"


class SessionCreationFailedError(InternalError):
    message = "Session creation failed"


class SessionDeletionFailedError(InternalError):
    message = "Can't delete session because it's not found or already deleted"


class PersistenceError(InternalError):
    message = "A database error occurred"
