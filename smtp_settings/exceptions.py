"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ForbiddenException(AppException):
    """Access forbidden exception."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, 403)


class InvalidNonceException(ForbiddenException):
    """Authenticity token missing, expired, or issued for another action."""

    def __init__(self, message: str = "Invalid security token"):
        super().__init__(message)


class UnauthorizedException(AppException):
    """Authentication required exception."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, 401)


class ConfigurationException(AppException):
    """A required mail setting is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class TransportException(AppException):
    """The mail server refused or could not be reached."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message, 502)
        self.detail = detail


def create_exception_handlers():
    """Create exception handlers rendering the JSON error envelope."""

    async def app_exception_handler(request: Request, exc: AppException):
        """Handle application exceptions."""
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "message": exc.message,
            },
        )

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "An unexpected error occurred",
            },
        )

    return {
        AppException: app_exception_handler,
        Exception: generic_exception_handler,
    }
