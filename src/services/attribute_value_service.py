"""
Attribute Value Service

Default values, display formatting and unit-type switching for attribute
values. ``format_for_display`` doubles as the canonical equality key used by
the differentiator engine and the duplicate detector: two values are the same
exactly when they format to the same string. There is no unit conversion, so
``1000 g`` and ``1 kg`` are different values.
"""

import json
import math
from typing import Any

from pydantic import BaseModel

from src.core.errors import ErrorResponse
from src.models.attribute_values import (
    AttributeValue,
    CompositeValue,
    Dimension2DValue,
    Dimension3DValue,
    MeasurementValue,
    NumberWithUnitValue,
    RangeValue,
    STRING_FIELD_TYPES,
    TextWithUnitValue,
    coerce_value,
)
from src.models.field_types import DEFAULT_UNIT_TYPE, FieldType
from src.services.field_type_registry import (
    default_unit_for,
    first_unit_of,
    resolve_field_type,
    resolve_unit_type,
)

NOT_SET = "Not set"


def default_value_for(field_type) -> AttributeValue:
    """
    Zero value for a freshly added attribute of ``field_type``.

    Numbers start unset rather than at 0; unit-bearing values start on the
    field type's initial unit.
    """
    field_type = resolve_field_type(field_type)

    if field_type in STRING_FIELD_TYPES:
        return ""
    if field_type == FieldType.NUMBER:
        return None
    if field_type == FieldType.BOOLEAN:
        return False
    if field_type == FieldType.RANGE:
        return RangeValue(min=0, max=0)
    if field_type == FieldType.DIMENSION_2D:
        return Dimension2DValue(unit=default_unit_for(field_type))
    if field_type == FieldType.DIMENSION_3D:
        return Dimension3DValue(unit=default_unit_for(field_type))
    if field_type in (FieldType.WEIGHT, FieldType.VOLUME, FieldType.AREA, FieldType.DURATION):
        return MeasurementValue(unit=default_unit_for(field_type))
    if field_type == FieldType.NUMBER_WITH_UNIT:
        return NumberWithUnitValue(unit_type=DEFAULT_UNIT_TYPE, unit=first_unit_of(DEFAULT_UNIT_TYPE))
    if field_type == FieldType.TEXT_WITH_UNIT:
        return TextWithUnitValue(unit_type=DEFAULT_UNIT_TYPE, unit=first_unit_of(DEFAULT_UNIT_TYPE))

    raise ErrorResponse(f"No default value for field type {field_type.value}", status_code=500)


def change_unit_type(value, unit_type):
    """
    Switch a number/text-with-unit value to another unit catalog.

    The unit is reset to the first entry of the new catalog; the unit of the
    previous catalog is never kept. The magnitude is preserved.
    """
    if not isinstance(value, (NumberWithUnitValue, TextWithUnitValue)):
        raise ErrorResponse(
            "Unit type can only be changed on number/text with unit values",
            status_code=400,
            details={"value_type": type(value).__name__},
        )

    unit_type = resolve_unit_type(unit_type)
    return type(value)(
        unit_type=unit_type,
        unit=first_unit_of(unit_type),
        value=value.value,
    )


def coerce(field_type, raw) -> AttributeValue:
    """Typed value for ``field_type``; raises ValueError on a shape mismatch"""
    return coerce_value(resolve_field_type(field_type), raw)


def to_plain(value: Any) -> Any:
    """Plain JSON-like form of a value (composite models become dicts)"""
    if isinstance(value, CompositeValue):
        return value.to_wire()
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    return value


def is_set(value: Any) -> bool:
    """
    Whether a value counts towards differentiation.

    None, empty strings, zero and False are unset. Objects always count,
    even when their magnitudes are missing.
    """
    value = to_plain(value)
    if isinstance(value, (dict, list, tuple)):
        return True
    return bool(value)


def format_for_display(value: Any) -> str:
    """
    Render any attribute value as a single human-readable string.

    - nothing or an empty string: "Not set"
    - object with value and unit: "{value} {unit}"
    - object with unitType and unit: "{value or 0} {unit}"
    - any other object: JSON with sorted keys
    - anything else: its string form
    """
    value = to_plain(value)

    if value is None or (isinstance(value, str) and value == ""):
        return NOT_SET

    if isinstance(value, dict):
        magnitude = value.get("value")
        unit = value.get("unit")
        if magnitude is not None and unit is not None:
            return f"{_format_scalar(magnitude)} {_format_scalar(unit)}"
        if value.get("unitType") is not None and unit is not None:
            shown = "0" if magnitude is None else _format_scalar(magnitude)
            return f"{shown} {_format_scalar(unit)}"
        return _serialize(value)

    if isinstance(value, (list, tuple)):
        return _serialize(list(value))

    return _format_scalar(value)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _normalize(value: Any) -> Any:
    # Same JSON for model and dict forms: no nulls, integral floats as ints
    if isinstance(value, dict):
        return {str(k): _normalize(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def _serialize(value: Any) -> str:
    return json.dumps(
        _normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
