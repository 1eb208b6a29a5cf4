from .base import (
    AppError,
    BadRequestError,
    ConflictError,
    ErrorKind,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
)
from .http import handle_app_error, register_error_handler
from .validation import ValidationError, raise_validation_error

__all__ = [
    "AppError",
    "BadRequestError",
    "ConflictError",
    "ErrorKind",
    "ForbiddenError",
    "InternalServerError",
    "NotFoundError",
    "RateLimitedError",
    "UnauthorizedError",
    "ValidationError",
    "handle_app_error",
    "raise_validation_error",
    "register_error_handler",
]
