"""
Attribute Value Models

One value shape per attribute field type. Scalar field types carry a bare
primitive; composite field types carry one of the models below. Together
with ``FieldType`` they form a closed tagged union keyed by the field type.
"""

import datetime
from typing import Any, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.field_types import (
    DEFAULT_UNIT_TYPE,
    FIELD_TYPE_UNIT_TYPES,
    FieldType,
    UNIT_CATALOGS,
    UnitType,
)

Number = Union[int, float]


def unit_symbols(unit_type: UnitType) -> list:
    """Unit symbols of a catalog, in catalog order"""
    return [definition.unit for definition in UNIT_CATALOGS[unit_type].values()]


class CompositeValue(BaseModel):
    """Base for structured attribute values (wire keys are camelCase)."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_wire(self) -> dict:
        """Serialize without unset magnitudes, as the form surface sends them."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class RangeValue(CompositeValue):
    """A numeric range, e.g. an operating temperature span."""
    min: Optional[Number] = 0
    max: Optional[Number] = 0


class Dimension2DValue(CompositeValue):
    unit: str
    length: Optional[Number] = None
    width: Optional[Number] = None


class Dimension3DValue(CompositeValue):
    unit: str
    length: Optional[Number] = None
    width: Optional[Number] = None
    height: Optional[Number] = None
    depth: Optional[Number] = None


class MeasurementValue(CompositeValue):
    """Weight, volume, area and duration values: a magnitude and its unit."""
    unit: str
    value: Optional[Number] = None


class _SelectableUnitValue(CompositeValue):
    unit_type: UnitType = Field(DEFAULT_UNIT_TYPE, alias="unitType")
    unit: str

    @model_validator(mode="after")
    def check_unit_in_catalog(self):
        """The unit must come from the catalog selected by unitType"""
        if self.unit not in unit_symbols(self.unit_type):
            raise ValueError(
                f"unit '{self.unit}' is not part of the {self.unit_type.value} catalog"
            )
        return self


class NumberWithUnitValue(_SelectableUnitValue):
    value: Optional[Number] = None


class TextWithUnitValue(_SelectableUnitValue):
    value: Optional[str] = None


AttributeValue = Union[
    None,
    str,
    bool,
    int,
    float,
    RangeValue,
    Dimension2DValue,
    Dimension3DValue,
    MeasurementValue,
    NumberWithUnitValue,
    TextWithUnitValue,
]

STRING_FIELD_TYPES = frozenset({
    FieldType.TEXT,
    FieldType.TEXTAREA,
    FieldType.DATE,
    FieldType.EMAIL,
    FieldType.URL,
    FieldType.PHONE,
    FieldType.COLOR,
    FieldType.SIZE,
})

COMPOSITE_VALUE_MODELS: Mapping[FieldType, Type[CompositeValue]] = {
    FieldType.RANGE: RangeValue,
    FieldType.DIMENSION_2D: Dimension2DValue,
    FieldType.DIMENSION_3D: Dimension3DValue,
    FieldType.WEIGHT: MeasurementValue,
    FieldType.VOLUME: MeasurementValue,
    FieldType.AREA: MeasurementValue,
    FieldType.DURATION: MeasurementValue,
    FieldType.NUMBER_WITH_UNIT: NumberWithUnitValue,
    FieldType.TEXT_WITH_UNIT: TextWithUnitValue,
}


def coerce_value(field_type: FieldType, raw: Any) -> AttributeValue:
    """
    Build the typed value for ``field_type`` from wire data.

    ``None`` always means "not set". An empty string is kept for the
    string-like types and treated as "not set" for every other type.

    Raises:
        ValueError: If ``raw`` does not fit the field type's shape
    """
    field_type = FieldType(field_type)

    if raw is None:
        return None

    if field_type in STRING_FIELD_TYPES:
        if isinstance(raw, str):
            return raw
        if field_type == FieldType.DATE and isinstance(raw, (datetime.date, datetime.datetime)):
            return raw.isoformat()
        raise ValueError(f"{field_type.value} value must be a string")

    if isinstance(raw, str) and raw == "":
        return None

    if field_type == FieldType.BOOLEAN:
        if isinstance(raw, bool):
            return raw
        raise ValueError("boolean value must be true or false")

    if field_type == FieldType.NUMBER:
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return raw
        raise ValueError("number value must be numeric")

    model = COMPOSITE_VALUE_MODELS[field_type]
    if isinstance(raw, CompositeValue):
        if not isinstance(raw, model):
            raise ValueError(f"{field_type.value} value must be a {model.__name__}")
        value = raw.model_copy(deep=True)
    elif isinstance(raw, dict):
        value = model.model_validate(raw)
    else:
        raise ValueError(f"{field_type.value} value must be an object")

    fixed_unit_type = FIELD_TYPE_UNIT_TYPES.get(field_type)
    if fixed_unit_type is not None and value.unit not in unit_symbols(fixed_unit_type):
        raise ValueError(
            f"unit '{value.unit}' is not part of the {fixed_unit_type.value} catalog"
        )

    return value
