"""Service layer exports."""

from src.services.attribute_group_engine import AttributeGroupEngine
from src.services.differentiator_service import calculate_differentiators
from src.services.duplicate_detector import find_duplicates, is_duplicate
from src.services.variant_service import VariantService
from src.services.variant_workspace import VariantWorkspace

__all__ = [
    "AttributeGroupEngine",
    "VariantService",
    "VariantWorkspace",
    "calculate_differentiators",
    "find_duplicates",
    "is_duplicate",
]
