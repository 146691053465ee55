"""
FastAPI route handlers (API layer).

Route handlers organized by resource.
"""

from .attributes import router as attributes_router
from .field_types import router as field_types_router
from .health import router as health_router
from .variants import router as variants_router

__all__ = [
    "attributes_router",
    "field_types_router",
    "health_router",
    "variants_router",
]
