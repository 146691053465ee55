"""
Variant attribute models package.

Exports the field-type catalog, value shapes and variant models.
"""

from .field_types import (
    FieldType,
    FieldTypeDescriptor,
    UnitCatalog,
    UnitDefinition,
    UnitType,
)
from .attribute_values import (
    AttributeValue,
    Dimension2DValue,
    Dimension3DValue,
    MeasurementValue,
    NumberWithUnitValue,
    RangeValue,
    TextWithUnitValue,
)
from .variant import (
    AttributeGroup,
    AttributeInstance,
    DifferentiatorSummary,
    Variant,
    VariantPatch,
    VariantSummary,
    VariantOperationResult,
)

__all__ = [
    "FieldType",
    "FieldTypeDescriptor",
    "UnitCatalog",
    "UnitDefinition",
    "UnitType",
    "AttributeValue",
    "Dimension2DValue",
    "Dimension3DValue",
    "MeasurementValue",
    "NumberWithUnitValue",
    "RangeValue",
    "TextWithUnitValue",
    "AttributeGroup",
    "AttributeInstance",
    "DifferentiatorSummary",
    "Variant",
    "VariantPatch",
    "VariantSummary",
    "VariantOperationResult",
]
