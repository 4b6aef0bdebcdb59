"""Error handlers for FastAPI application.

Every error leaves the service as `{"error": "<message>"}`, optionally with
a `details` object, which is the shape existing callers already parse.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger

logger = get_logger("core.error_handlers")


def create_error_response(
    message: str,
    status_code: int = 500,
    details: dict = None,
) -> JSONResponse:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details dictionary.

    Returns:
        JSONResponse with error details.
    """
    error_body = {"error": message}
    if details:
        error_body["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=error_body
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    if exc.status_code >= 500:
        logger.error(
            "Application error: %s [%s %s]",
            exc.message,
            request.method,
            request.url.path
        )
    else:
        logger.warning(
            "Application error: %s [%s %s]",
            exc.message,
            request.method,
            request.url.path
        )

    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details
    )


def _location_to_field(loc) -> str:
    # loc starts with the source ("body", "query", "path"); integer parts are JSON offsets
    parts = [p for p in loc[1:] if isinstance(p, str)]
    return ".".join(parts) or "body"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing errors (malformed JSON, non-object body).

    Reported as 400 naming the first offending location, like any other
    input validation failure.
    """
    errors = exc.errors()
    first = errors[0] if errors else {"loc": ("body",), "msg": "Invalid request", "type": "invalid"}
    field = _location_to_field(first.get("loc", ()))

    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )

    return create_error_response(
        message=f"Invalid {field}: {first.get('msg')}",
        status_code=status.HTTP_400_BAD_REQUEST,
        details={"field": field, "reason": first.get("type")}
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy database errors without exposing internals."""
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle all unhandled exceptions with a generic 500."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=exc
    )

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
