"""
Centralized error handling middleware for FastAPI.

Provides consistent ``{success: false, error}`` responses and logging
for all API routes.
"""

import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from job_engine import InvalidRequestError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base exception for errors surfaced to API callers."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class BadRequestError(ApiError):
    """Raised when a request body or parameter is missing or invalid."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=400, details=details)


class KeyNotFoundError(ApiError):
    """Raised when an API key id is not found."""

    def __init__(self, key_id: str):
        super().__init__(
            message="Key not found",
            status_code=404,
            details={"id": key_id},
        )


class PlatformNotFoundError(ApiError):
    """Raised when a platform name is not supported."""

    def __init__(self, platform: str):
        super().__init__(
            message=f"Unknown platform '{platform}'",
            status_code=404,
            details={"platform": platform},
        )


def format_error_response(message: str, error_kind: Optional[str] = None) -> dict:
    """
    Format a consistent error response body.

    Args:
        message: Human-readable error message
        error_kind: Optional failure classification

    Returns:
        dict: ``{"success": False, "error": message}`` plus ``errorKind`` when given
    """
    body = {"success": False, "error": message}
    if error_kind:
        body["errorKind"] = error_kind
    return body


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response

        except InvalidRequestError as e:
            logger.warning(f"Invalid request: {e.message}")
            return JSONResponse(
                status_code=e.status_code or 400,
                content=format_error_response(e.message, e.kind),
            )

        except ApiError as e:
            logger.warning(
                f"ApiError: {e.message}",
                extra={"status_code": e.status_code, "details": e.details},
            )
            return JSONResponse(
                status_code=e.status_code,
                content=format_error_response(e.message),
            )

        except Exception as e:
            # Log full stack trace for unexpected errors
            logger.exception(f"Unhandled exception: {str(e)}")
            return JSONResponse(
                status_code=500,
                content=format_error_response(str(e) or e.__class__.__name__),
            )
