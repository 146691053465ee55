"""
Core utilities package.

Centralized core components for the Variant Attribute Service:
- logger: Structured logging with correlation IDs
- errors: Custom exception classes and handlers
"""

# Errors
from .errors import (
    ConfirmationRequiredError,
    ErrorResponse,
    ErrorResponseModel,
    GatewayError,
    ImageCapacityError,
    InvalidReferenceError,
    UnknownFieldTypeError,
    UnsavedVariantPendingError,
    VariantBusyError,
    error_response_handler,
    http_exception_handler,
)

# Logger
from .logger import logger

__all__ = [
    # Errors
    "ConfirmationRequiredError",
    "ErrorResponse",
    "ErrorResponseModel",
    "GatewayError",
    "ImageCapacityError",
    "InvalidReferenceError",
    "UnknownFieldTypeError",
    "UnsavedVariantPendingError",
    "VariantBusyError",
    "error_response_handler",
    "http_exception_handler",
    # Logger
    "logger",
]
