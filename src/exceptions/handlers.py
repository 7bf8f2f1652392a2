"""Exception handlers rendering every error as a JSON envelope.

All error responses share the shape ``{"status": <code>, "error": <message>}``;
aggregated validation failures use ``{"status": 400, "errors": [...]}``
instead of ``error``.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exceptions.api import ApiError
from middleware.request_id import REQUEST_ID_HEADER

logger = structlog.get_logger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


def _error_body(status_code: int, message: str) -> dict:
    return {"status": status_code, "error": message}


def _format_validation_error(error: dict) -> str:
    location = [
        str(part) for part in error.get("loc", ())
        if part not in ("body", "query", "path", "cookie")
    ]
    message = error.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an ApiError with its own status code and message.

    Args:
        request: FastAPI Request object.
        exc: ApiError raised by a handler, a dependency or the session manager.

    Returns:
        JSONResponse: The error envelope.
    """
    assert isinstance(exc, ApiError)

    if exc.errors:
        content = {"status": exc.status_code, "errors": exc.errors}
    else:
        content = _error_body(exc.status_code, exc.message)

    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Convert RequestValidationError into a 400 response listing every problem.

    Args:
        request: FastAPI Request object.
        exc: RequestValidationError from Pydantic validation.

    Returns:
        JSONResponse: ``{"status": 400, "errors": [...]}``.
    """
    assert isinstance(exc, RequestValidationError)

    errors = [_format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": status.HTTP_400_BAD_REQUEST, "errors": errors},
    )


async def http_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Convert framework HTTP errors (unknown path, wrong method) into the envelope.

    Args:
        request: FastAPI Request object.
        exc: Starlette HTTPException.

    Returns:
        JSONResponse: The error envelope, preserving the exception headers.
    """
    assert isinstance(exc, StarletteHTTPException)

    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, detail),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions with a 500 response.

    The exception message is returned when it has one, otherwise a generic
    label. This handler runs outside the request id middleware, so the id
    bound to the logging context is copied onto the response here.

    Args:
        request: FastAPI Request object.
        exc: Unhandled exception.

    Returns:
        JSONResponse: The 500 error envelope.
    """
    logger.exception(
        "request.unhandled_exception",
        path=request.url.path,
        exc_type=type(exc).__name__
    )
    message = str(exc) or UNKNOWN_ERROR_MESSAGE
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, message),
        headers={REQUEST_ID_HEADER: request_id} if request_id else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(
        RequestValidationError,
        validation_exception_handler
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
