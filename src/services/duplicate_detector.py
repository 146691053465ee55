"""
Duplicate Detector

Advisory check for variants that would look identical to a customer. Two
variants are duplicates when their scalar fields, image lists and the set of
formatted attribute values all match. The SKU and local key are ignored.
"""

from typing import Iterable, List, Sequence, Tuple

from src.models.variant import Variant
from src.services.attribute_value_service import format_for_display


def variant_signature(variant: Variant) -> Tuple:
    attributes = sorted(
        (attribute.id, format_for_display(attribute.value))
        for attribute in variant.iter_attributes()
    )
    return (
        variant.name,
        float(variant.price),
        float(variant.cost_price),
        variant.description or "",
        tuple(variant.images),
        tuple(attributes),
    )


def find_duplicates(candidate: Variant, candidate_index: int, siblings: Sequence[Variant]) -> List[int]:
    """Indexes of siblings matching ``candidate``, skipping its own position"""
    signature = variant_signature(candidate)
    return [
        index
        for index, sibling in enumerate(siblings)
        if index != candidate_index and variant_signature(sibling) == signature
    ]


def is_duplicate(candidate: Variant, candidate_index: int, siblings: Iterable[Variant]) -> bool:
    return bool(find_duplicates(candidate, candidate_index, list(siblings)))
