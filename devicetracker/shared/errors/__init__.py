from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    MissingFieldError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
    require_fields,
)
from .http import error_response, http_exception_response

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "MissingFieldError",
    "NotFoundError",
    "StoreUnavailableError",
    "ValidationError",
    "error_response",
    "http_exception_response",
    "require_fields",
]
