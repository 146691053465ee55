"""
Differentiator Service

An attribute id is a differentiator when, across all variants of a product,
it carries at least two distinct set values. Values are compared by their
display string, so the result is fully recomputed from the current variants.
"""

from typing import Dict, Iterable, List

from src.core.logger import logger
from src.models.variant import DifferentiatorSummary, Variant
from src.services.attribute_value_service import format_for_display, is_set


def collect_values(variants: Iterable[Variant]) -> Dict[str, List[str]]:
    """Distinct formatted set values per attribute id, in first-seen order"""
    seen: Dict[str, Dict[str, None]] = {}

    for variant in variants:
        for attribute in variant.iter_attributes():
            if not is_set(attribute.value):
                continue
            formatted = format_for_display(attribute.value)
            seen.setdefault(attribute.id, {})[formatted] = None

    return {attribute_id: list(values) for attribute_id, values in seen.items()}


def calculate_differentiators(variants: Iterable[Variant]) -> DifferentiatorSummary:
    """
    Attribute ids whose set values differ across variants.

    Unset values (None, '', 0, False) never contribute. A product with a
    single variant has no differentiators.
    """
    variants = list(variants)
    values = {
        attribute_id: formatted
        for attribute_id, formatted in collect_values(variants).items()
        if len(formatted) > 1
    }

    summary = DifferentiatorSummary(attributes=list(values), values=values)
    logger.debug(
        "Differentiators calculated",
        metadata={"variant_count": len(variants), "differentiators": summary.attributes},
    )
    return summary


def flagged_attribute_ids(variants: Iterable[Variant]) -> List[str]:
    """Ids carrying the per-instance isDifferentiator flag on any variant"""
    flagged: Dict[str, None] = {}
    for variant in variants:
        for attribute in variant.iter_attributes():
            if attribute.is_differentiator:
                flagged[attribute.id] = None
    return list(flagged)
