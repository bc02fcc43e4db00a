import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse

from catalog.errors import ErrorType, ERROR_STATUS_MAP, format_errors
from catalog.responses import send_error

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str, details: list[str] | None = None):
        self.error_type = error_type
        self.message = message
        # Every violation when raised for a failed validation, first one is `message`
        self.details = details or []
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_MAP.get(self.error_type, 500)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = exc.status_code
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return send_error(status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched paths and unsupported methods both surface as 'Route not found'."""
    if exc.status_code in (404, 405):
        status_code = ERROR_STATUS_MAP[ErrorType.ROUTE_NOT_FOUND]
        message = "Route not found"
    else:
        status_code = exc.status_code
        message = str(exc.detail) if exc.detail else "Internal Server Error"
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {message}")
    return send_error(status_code, message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies - reports every violation at once."""
    messages = format_errors(exc.errors(), skip_prefix="body")
    message = f"Validation error: {', '.join(messages)}"
    logger.warning(f"{request.method} {request.url.path} -> 400: {message}")
    return send_error(ERROR_STATUS_MAP[ErrorType.VALIDATION], message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return send_error(500, "Internal Server Error")
