"""
Variant Service

Lifecycle of a single variant aggregate: creation, cloning, scalar edits,
image list management and the read-only summary shown on a variant card.
"""

import copy
from typing import Iterable, Optional

from src.core.errors import ImageCapacityError, InvalidReferenceError
from src.core.logger import logger
from src.models.variant import (
    MAX_IMAGES_PER_VARIANT,
    AttributeDisplay,
    GroupDisplay,
    Variant,
    VariantPatch,
    VariantSummary,
)
from src.services.attribute_value_service import format_for_display
from src.utils.id_generator import IdGenerator, default_id_generator
from src.utils.ordering import check_index, move

COPY_SUFFIX = " (Copy)"


class VariantService:
    """Operations on one variant aggregate."""

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        self.id_generator = id_generator or default_id_generator

    def create_empty(self) -> Variant:
        return Variant(key=self.id_generator.variant_key())

    def clone(self, variant: Variant) -> Variant:
        """
        Copy a variant as a new, unsaved one.

        The copy has no SKU, a fresh local key, a name suffixed with
        " (Copy)" and deep copies of the images and attribute groups.
        Attribute ids are kept so both variants share attribute identity.
        """
        cloned = variant.model_copy(deep=True)
        cloned.sku = None
        cloned.key = self.id_generator.variant_key()
        cloned.name = f"{variant.name}{COPY_SUFFIX}"

        logger.debug(
            f"Variant cloned: {variant.sku or variant.key}",
            metadata={"source": variant.sku or variant.key, "clone_key": cloned.key},
        )
        return cloned

    def apply_edits(self, variant: Variant, patch: VariantPatch) -> Variant:
        """
        Merge scalar edits into a copy of ``variant``.

        Only fields present in the patch change. Images and attribute groups
        are replaced only when the patch includes them.
        """
        updated = variant.model_copy(deep=True)

        for field_name in patch.model_fields_set:
            value = getattr(patch, field_name)
            if value is None:
                continue
            if field_name == "images":
                value = list(value)
                if len(value) > MAX_IMAGES_PER_VARIANT:
                    raise ImageCapacityError(0, len(value), MAX_IMAGES_PER_VARIANT)
            setattr(updated, field_name, copy.deepcopy(value))

        return updated

    # ===== Images =====

    def add_images(self, variant: Variant, urls: Iterable[str]) -> Variant:
        """
        Append image URLs, all or nothing.

        Raises:
            ImageCapacityError: If the variant would hold more than five images
        """
        batch = list(dict.fromkeys(url for url in urls if url))
        current = len(variant.images)

        if current + len(batch) > MAX_IMAGES_PER_VARIANT:
            logger.warning(
                "Image batch rejected: variant image limit reached",
                metadata={"current": current, "requested": len(batch)},
            )
            raise ImageCapacityError(current, len(batch), MAX_IMAGES_PER_VARIANT)

        variant.images.extend(batch)
        return variant

    def remove_image(self, variant: Variant, index: int) -> str:
        check_index(variant.images, index, what="image")
        return variant.images.pop(index)

    def reorder_images(self, variant: Variant, from_index: int, to_index: int) -> Variant:
        move(variant.images, from_index, to_index, what="image")
        return variant

    @staticmethod
    def remaining_image_slots(variant: Variant) -> int:
        return MAX_IMAGES_PER_VARIANT - len(variant.images)

    # ===== Display =====

    def summarize(self, variant: Variant) -> VariantSummary:
        """Summary of a variant with every attribute value formatted."""
        flagged = []
        groups = []

        for group in variant.attribute_groups:
            rows = []
            for attribute in group.attributes:
                row = AttributeDisplay(
                    label=attribute.label,
                    value=attribute.value,
                    formatted_value=format_for_display(attribute.value),
                    is_differentiator=attribute.is_differentiator,
                    group_name=group.name,
                )
                rows.append(row)
                if attribute.is_differentiator:
                    flagged.append(row)
            if rows:
                groups.append(GroupDisplay(group_name=group.name, attributes=rows))

        return VariantSummary(
            name=variant.name or "Unnamed Variant",
            sku=variant.sku or "No SKU",
            price=variant.price,
            cost_price=variant.cost_price,
            image_count=len(variant.images),
            total_attributes=sum(len(group.attributes) for group in variant.attribute_groups),
            differentiator_attributes=flagged,
            attributes_by_group=groups,
        )

    @staticmethod
    def find_index(variants, key: str) -> int:
        """Index of the variant with a given local key or SKU"""
        for index, variant in enumerate(variants):
            if variant.key == key or (variant.sku is not None and variant.sku == key):
                return index
        raise InvalidReferenceError(f"Variant {key} not found", details={"variant": key})
