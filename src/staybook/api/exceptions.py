"""FastAPI exception handlers for access and booking errors.

This is the only place AccessError becomes an HTTP response. Guards and the
conflict detector raise; they never write responses themselves.

Status mapping (fixed per error class):
- 401 Unauthorized: Unauthenticated
- 403 Forbidden: Forbidden, BookingConflict, PastDateBooking
- 404 Not Found: NotFound

Usage:
    from staybook.api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from staybook.models import AccessError
from staybook.utils.logging import get_logger

logger = get_logger(__name__)


async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    """Convert an AccessError to its JSON response.

    Args:
        request: The incoming request
        exc: The AccessError exception

    Returns:
        JSONResponse with {"message", "errors"?} and the error's status code.
    """
    logger.info(
        "Request rejected: %s %s -> %s",
        request.method,
        request.url.path,
        exc.status_code,
        extra={"error_code": exc.code.value, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json", exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AccessError, access_error_handler)  # type: ignore[arg-type]
