"""
Attribute Field Types and Unit Catalogs

Static reference data: the supported attribute field types, their display
labels, and the unit catalogs used by measurement-bearing field types.
Catalogs mix metric/imperial units with regional (Indian) units.
"""

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    """Supported attribute field types"""
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
    COLOR = "color"
    SIZE = "size"
    RANGE = "range"
    DIMENSION_2D = "dimension2d"
    DIMENSION_3D = "dimension3d"
    WEIGHT = "weight"
    VOLUME = "volume"
    AREA = "area"
    DURATION = "duration"
    NUMBER_WITH_UNIT = "number_with_unit"
    TEXT_WITH_UNIT = "text_with_unit"


class UnitType(str, Enum):
    """Measurement categories selectable on number/text-with-unit fields"""
    WEIGHT = "weight"
    LENGTH = "length"
    VOLUME = "volume"
    AREA = "area"
    DURATION = "duration"


class UnitDefinition(BaseModel):
    """A single unit in a catalog (e.g., kg / kgs / Kilogram)."""
    model_config = ConfigDict(frozen=True)

    unit: str = Field(..., description="Short symbol")
    plural: str = Field(..., description="Plural symbol")
    label: str = Field(..., description="Human readable name")


UnitCatalog = Mapping[str, UnitDefinition]


def _catalog(**units) -> UnitCatalog:
    return MappingProxyType({
        key: UnitDefinition(unit=unit, plural=plural, label=label)
        for key, (unit, plural, label) in units.items()
    })


WEIGHT_UNITS: UnitCatalog = _catalog(
    GRAM=("g", "gms", "Gram"),
    KILOGRAM=("kg", "kgs", "Kilogram"),
    MILLIGRAM=("mg", "mgs", "Milligram"),
    POUND=("lb", "lbs", "Pound"),
    OUNCE=("oz", "ozs", "Ounce"),
    TON=("ton", "tons", "Ton"),
    # Indian units
    TOLLA=("tolla", "tollas", "Tolla"),
    CHHATAK=("chhatak", "chhataks", "Chhatak"),
    SEER=("seer", "seers", "Seer"),
    MAUND=("maund", "maunds", "Maund"),
)

LENGTH_UNITS: UnitCatalog = _catalog(
    MILLIMETER=("mm", "mms", "Millimeter"),
    CENTIMETER=("cm", "cms", "Centimeter"),
    METER=("m", "ms", "Meter"),
    KILOMETER=("km", "kms", "Kilometer"),
    INCH=("in", "ins", "Inch"),
    FOOT=("ft", "fts", "Foot"),
    YARD=("yd", "yds", "Yard"),
    MILE=("mi", "mis", "Mile"),
    # Indian units
    ANGUL=("angul", "anguls", "Angul"),
    HATH=("hath", "haths", "Hath"),
    GAZ=("gaz", "gazs", "Gaz"),
    KOS=("kos", "koss", "Kos"),
)

VOLUME_UNITS: UnitCatalog = _catalog(
    MILLILITER=("ml", "mls", "Milliliter"),
    LITER=("l", "ls", "Liter"),
    CUBIC_METER=("m³", "m³s", "Cubic Meter"),
    CUBIC_CENTIMETER=("cm³", "cm³s", "Cubic Centimeter"),
    GALLON=("gal", "gals", "Gallon"),
    QUART=("qt", "qts", "Quart"),
    PINT=("pt", "pts", "Pint"),
    CUP=("cup", "cups", "Cup"),
    # Indian units
    PAO=("pao", "paos", "Pao"),
    CHHATAK=("chhatak", "chhataks", "Chhatak"),
    SEER=("seer", "seers", "Seer"),
    MAUND=("maund", "maunds", "Maund"),
)

AREA_UNITS: UnitCatalog = _catalog(
    SQUARE_METER=("m²", "m²s", "Square Meter"),
    SQUARE_CENTIMETER=("cm²", "cm²s", "Square Centimeter"),
    SQUARE_KILOMETER=("km²", "km²s", "Square Kilometer"),
    SQUARE_INCH=("in²", "in²s", "Square Inch"),
    SQUARE_FOOT=("ft²", "ft²s", "Square Foot"),
    SQUARE_YARD=("yd²", "yd²s", "Square Yard"),
    ACRE=("acre", "acres", "Acre"),
    HECTARE=("ha", "has", "Hectare"),
    # Indian units
    BIGH=("bigh", "bighs", "Bigh"),
    KATHA=("katha", "kathas", "Katha"),
    DHUR=("dhur", "dhurs", "Dhur"),
    BISWA=("biswa", "biswas", "Biswa"),
)

DURATION_UNITS: UnitCatalog = _catalog(
    SECOND=("s", "secs", "Second"),
    MINUTE=("min", "mins", "Minute"),
    HOUR=("h", "hrs", "Hour"),
    DAY=("day", "days", "Day"),
    WEEK=("week", "weeks", "Week"),
    MONTH=("month", "months", "Month"),
    YEAR=("year", "years", "Year"),
)

EMPTY_CATALOG: UnitCatalog = MappingProxyType({})

UNIT_CATALOGS: Mapping[UnitType, UnitCatalog] = MappingProxyType({
    UnitType.WEIGHT: WEIGHT_UNITS,
    UnitType.LENGTH: LENGTH_UNITS,
    UnitType.VOLUME: VOLUME_UNITS,
    UnitType.AREA: AREA_UNITS,
    UnitType.DURATION: DURATION_UNITS,
})

# Field types whose unit catalog is fixed by the type itself
FIELD_TYPE_UNIT_TYPES: Mapping[FieldType, UnitType] = MappingProxyType({
    FieldType.DIMENSION_2D: UnitType.LENGTH,
    FieldType.DIMENSION_3D: UnitType.LENGTH,
    FieldType.WEIGHT: UnitType.WEIGHT,
    FieldType.VOLUME: UnitType.VOLUME,
    FieldType.AREA: UnitType.AREA,
    FieldType.DURATION: UnitType.DURATION,
})

# Field types whose catalog is chosen per value through ``unitType``
SELECTABLE_UNIT_FIELD_TYPES = frozenset({
    FieldType.NUMBER_WITH_UNIT,
    FieldType.TEXT_WITH_UNIT,
})

DEFAULT_UNIT_TYPE = UnitType.WEIGHT

FIELD_TYPE_LABELS: Mapping[FieldType, str] = MappingProxyType({
    FieldType.TEXT: "Text",
    FieldType.TEXTAREA: "Text Area",
    FieldType.RANGE: "Range",
    FieldType.COLOR: "Color",
    FieldType.BOOLEAN: "Boolean",
    FieldType.NUMBER: "Number",
    FieldType.NUMBER_WITH_UNIT: "Number with Unit",
    FieldType.TEXT_WITH_UNIT: "Text with Unit",
    FieldType.DATE: "Date",
    FieldType.EMAIL: "Email",
    FieldType.URL: "URL",
    FieldType.PHONE: "Phone",
    FieldType.DIMENSION_2D: "2D Dimension",
    FieldType.DIMENSION_3D: "3D Dimension",
    FieldType.WEIGHT: "Weight",
    FieldType.VOLUME: "Volume",
    FieldType.AREA: "Area",
    FieldType.DURATION: "Duration",
    FieldType.SIZE: "Size",
})

# Options offered by the size picker
SIZE_OPTIONS: Mapping[str, str] = MappingProxyType({
    "XS": "Extra Small",
    "S": "Small",
    "M": "Medium",
    "L": "Large",
    "XL": "Extra Large",
    "XXL": "Double XL",
})


class FieldTypeDescriptor(BaseModel):
    """Field type as offered to the form/display surface"""
    model_config = ConfigDict(populate_by_name=True)

    field_type: FieldType = Field(..., alias="fieldType")
    label: str
    unit_type: Optional[UnitType] = Field(None, alias="unitType")
    selectable_unit_type: bool = Field(False, alias="selectableUnitType")
    units: List[UnitDefinition] = Field(default_factory=list)
