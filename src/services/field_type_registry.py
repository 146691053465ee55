"""
Field Type Registry

Pure lookups over the static field-type catalog: display labels and the unit
catalog that applies to a field type.
"""

from typing import List, Optional

from src.core.errors import UnknownFieldTypeError
from src.models.field_types import (
    DEFAULT_UNIT_TYPE,
    EMPTY_CATALOG,
    FIELD_TYPE_LABELS,
    FIELD_TYPE_UNIT_TYPES,
    SELECTABLE_UNIT_FIELD_TYPES,
    SIZE_OPTIONS,
    UNIT_CATALOGS,
    FieldType,
    FieldTypeDescriptor,
    UnitCatalog,
    UnitType,
)

# Initial unit offered by each fixed-catalog field type
DEFAULT_UNITS = {
    FieldType.DIMENSION_2D: "cm",
    FieldType.DIMENSION_3D: "cm",
    FieldType.WEIGHT: "kg",
    FieldType.VOLUME: "l",
    FieldType.AREA: "m²",
    FieldType.DURATION: "h",
}


def resolve_field_type(field_type) -> FieldType:
    """Turn a tag into a FieldType or raise UnknownFieldTypeError"""
    if isinstance(field_type, FieldType):
        return field_type
    try:
        return FieldType(field_type)
    except ValueError:
        raise UnknownFieldTypeError(field_type) from None


def resolve_unit_type(unit_type) -> UnitType:
    if isinstance(unit_type, UnitType):
        return unit_type
    try:
        return UnitType(unit_type)
    except ValueError:
        raise UnknownFieldTypeError(unit_type, details={"kind": "unit_type"}) from None


def label_of(field_type) -> str:
    """Human display name of a field type"""
    return FIELD_TYPE_LABELS[resolve_field_type(field_type)]


def unit_type_for(field_type, unit_type=None) -> Optional[UnitType]:
    """
    Unit category that applies to a field type.

    Fixed-catalog types ignore ``unit_type``; number/text-with-unit use it
    and fall back to the default category. Other types have none.
    """
    field_type = resolve_field_type(field_type)
    if field_type in FIELD_TYPE_UNIT_TYPES:
        return FIELD_TYPE_UNIT_TYPES[field_type]
    if field_type in SELECTABLE_UNIT_FIELD_TYPES:
        return resolve_unit_type(unit_type) if unit_type is not None else DEFAULT_UNIT_TYPE
    return None


def catalog_for(field_type, unit_type=None) -> UnitCatalog:
    """Unit catalog for a field type, or an empty catalog"""
    resolved = unit_type_for(field_type, unit_type)
    if resolved is None:
        return EMPTY_CATALOG
    return UNIT_CATALOGS[resolved]


def catalog_for_unit_type(unit_type) -> UnitCatalog:
    return UNIT_CATALOGS[resolve_unit_type(unit_type)]


def first_unit_of(unit_type) -> str:
    """Symbol of the first unit in a catalog"""
    catalog = catalog_for_unit_type(unit_type)
    return next(iter(catalog.values())).unit


def default_unit_for(field_type, unit_type=None) -> Optional[str]:
    field_type = resolve_field_type(field_type)
    if field_type in DEFAULT_UNITS:
        return DEFAULT_UNITS[field_type]
    resolved = unit_type_for(field_type, unit_type)
    if resolved is None:
        return None
    return first_unit_of(resolved)


def size_options() -> dict:
    return dict(SIZE_OPTIONS)


def describe(field_type, unit_type=None) -> FieldTypeDescriptor:
    field_type = resolve_field_type(field_type)
    return FieldTypeDescriptor(
        field_type=field_type,
        label=label_of(field_type),
        unit_type=unit_type_for(field_type, unit_type),
        selectable_unit_type=field_type in SELECTABLE_UNIT_FIELD_TYPES,
        units=list(catalog_for(field_type, unit_type).values()),
    )


def list_field_types() -> List[FieldTypeDescriptor]:
    """All field types, in declaration order, for the form surface"""
    return [describe(field_type) for field_type in FieldType]
