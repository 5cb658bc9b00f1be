"""
Booking engine errors

Raised by the engine, the stores and the booking service; translated to
HTTP responses by the handler registered in ``register_exception_handlers``.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)


class BookingEngineError(Exception):
    """Base exception for all booking engine errors"""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "booking_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(BookingEngineError):
    """Missing or malformed input: absent tenant, bad duration, bad date"""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"


class InvalidIntervalError(ValidationError):
    """Interval end is not strictly after its start"""

    error = "invalid_interval"


class NotFoundError(BookingEngineError):
    """Room, tenant or booking does not exist (or is inactive) for the tenant"""

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"


class ConflictError(BookingEngineError):
    """Interval overlaps an existing booking or falls outside business hours"""

    status_code = status.HTTP_409_CONFLICT
    error = "conflict"


class ConcurrencyError(BookingEngineError):
    """Atomic write rejected after passing the pre-flight conflict check"""

    status_code = status.HTTP_409_CONFLICT
    error = "slot_taken"


async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    logger.info(f"Request rejected ({exc.error}): {exc.detail}", path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.error},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map engine errors to JSON responses"""
    app.add_exception_handler(BookingEngineError, booking_engine_error_handler)
