"""
HTTP middlewares for the variant attribute API.
"""

from .correlation_id import CorrelationIdMiddleware

__all__ = ["CorrelationIdMiddleware"]
