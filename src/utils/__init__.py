"""
Shared utilities package
"""

from .correlation_id import (
    get_correlation_id,
    set_correlation_id,
    create_correlation_id,
    create_headers_with_correlation_id,
    extract_correlation_id_from_headers,
)

__all__ = [
    # Correlation ID utilities
    "get_correlation_id",
    "set_correlation_id",
    "create_correlation_id",
    "create_headers_with_correlation_id",
    "extract_correlation_id_from_headers",
]
