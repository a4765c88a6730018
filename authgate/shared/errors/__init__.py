from .base import AppError, DomainError, ValidationError
from .http import error_response, register_error_handler
from .validation import format_pydantic_errors, raise_validation_error

__all__ = [
    "AppError",
    "DomainError",
    "ValidationError",
    "error_response",
    "format_pydantic_errors",
    "raise_validation_error",
    "register_error_handler",
]
