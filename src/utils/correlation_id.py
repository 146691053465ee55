"""
Correlation ID utilities for request tracing.
Shared by the API middleware, the logger and outgoing gateway calls.
"""

import uuid
from contextvars import ContextVar
from typing import Optional, Dict

from src.config import config

CORRELATION_ID_HEADER = config.correlation_id_header

# Context variable to store correlation ID across async operations
correlation_id_context: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """
    Get the current correlation ID from context
    Generates a new one if none exists

    Returns:
        str: Current correlation ID
    """
    correlation_id = correlation_id_context.get("")
    if not correlation_id:
        correlation_id = create_correlation_id()
        correlation_id_context.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in context"""
    correlation_id_context.set(correlation_id)


def create_correlation_id() -> str:
    """Create a new UUID-based correlation ID"""
    return str(uuid.uuid4())


def create_headers_with_correlation_id(
    additional_headers: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """
    Create headers with correlation ID for outgoing requests

    Args:
        additional_headers: Optional additional headers to include

    Returns:
        dict: Headers dictionary with correlation ID
    """
    headers = {CORRELATION_ID_HEADER: get_correlation_id()}

    if additional_headers:
        headers.update(additional_headers)

    return headers


def extract_correlation_id_from_headers(headers: Dict[str, str]) -> str:
    """
    Extract correlation ID from request headers
    Generates new one if not present
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    correlation_id = lowered.get(CORRELATION_ID_HEADER.lower())

    if not correlation_id:
        correlation_id = create_correlation_id()

    return correlation_id
