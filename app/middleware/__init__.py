"""FastAPI middleware for request/response processing."""

from .error_handler import (
    ErrorHandlerMiddleware,
    ApiError,
    BadRequestError,
    KeyNotFoundError,
    PlatformNotFoundError,
    format_error_response,
)

__all__ = [
    "ErrorHandlerMiddleware",
    "ApiError",
    "BadRequestError",
    "KeyNotFoundError",
    "PlatformNotFoundError",
    "format_error_response",
]
