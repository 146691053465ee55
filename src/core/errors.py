# Error handling utilities

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.logger import logger


class ErrorResponse(Exception):
    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidReferenceError(ErrorResponse):
    """Unknown group/attribute/variant id or an index out of range.

    Raised for broken invariants upstream, never for user input.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=500, details=details)


class UnknownFieldTypeError(ErrorResponse):
    def __init__(self, field_type, details: dict = None):
        super().__init__(
            f"Unknown attribute field type: {field_type}",
            status_code=400,
            details={"field_type": str(field_type), **(details or {})},
        )


class ImageCapacityError(ErrorResponse):
    """A batch of images would push a variant over its image limit."""

    def __init__(self, current: int, requested: int, limit: int):
        super().__init__(
            f"Maximum {limit} images allowed per variant",
            status_code=400,
            details={"current": current, "requested": requested, "limit": limit},
        )


class VariantBusyError(ErrorResponse):
    def __init__(self, message: str = "Please complete the current variant operation first", details: dict = None):
        super().__init__(message, status_code=409, details=details)


class UnsavedVariantPendingError(ErrorResponse):
    def __init__(self, message: str = "Please save the current variant before adding a new one", details: dict = None):
        super().__init__(message, status_code=409, details=details)


class ConfirmationRequiredError(ErrorResponse):
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=428, details=details)


class GatewayError(ErrorResponse):
    """Failure talking to the persistence gateway or the asset store."""

    def __init__(self, message: str, status_code: int = 502, details: dict = None):
        super().__init__(message, status_code=status_code, details=details)


def error_response_handler(request: Request, exc: ErrorResponse):
    logger.error(
        f"Error: {exc.message}",
        metadata={
            "event": "error_response",
            "status_code": exc.status_code,
            "url": str(request.url),
            "method": request.method,
            **exc.details,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
    )


def http_exception_handler(request: Request, exc: HTTPException):
    logger.error(
        f"HTTPException: {exc.detail}",
        metadata={"event": "http_exception", "status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


class ErrorResponseModel(BaseModel):
    error: str
    details: dict = None
