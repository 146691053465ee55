"""
Variant Models

A product variant carries its own scalar fields, an ordered image list and an
ordered list of attribute groups. Attribute ids are shared by the variants of
one product and act as the join key for differentiator computation.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from src.models.attribute_values import CompositeValue, coerce_value
from src.models.field_types import FieldType
from src.utils.id_generator import default_id_generator

MAX_IMAGES_PER_VARIANT = 5


class AttributeInstance(BaseModel):
    """A single labeled, typed value attached to a variant."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable id shared across variants")
    field_type: FieldType = Field(..., alias="fieldType")
    label: str = ""
    value: Any = None
    is_differentiator: bool = Field(False, alias="isDifferentiator")

    @field_validator("field_type", mode="before")
    @classmethod
    def normalize_field_type(cls, v):
        """Older records stored upper-case tags (e.g. 'TEXT')."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def coerce_value_to_field_type(self):
        self.value = coerce_value(self.field_type, self.value)
        return self

    @field_serializer("value")
    def serialize_value(self, value):
        if isinstance(value, CompositeValue):
            return value.to_wire()
        return value


class AttributeGroup(BaseModel):
    """An ordered, named bucket of attribute instances."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    attributes: List[AttributeInstance] = Field(default_factory=list)


class Variant(BaseModel):
    """
    One purchasable configuration of a product.

    ``sku`` is None until the persistence gateway confirms the variant.
    ``key`` identifies the variant locally and is never serialized.
    """
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(default_factory=default_id_generator.variant_key, exclude=True)
    sku: Optional[str] = None
    name: str = ""
    price: float = Field(0, ge=0)
    cost_price: float = Field(0, ge=0, alias="costPrice")
    description: Optional[str] = ""
    images: List[str] = Field(default_factory=list)
    attribute_groups: List[AttributeGroup] = Field(default_factory=list, alias="attributeGroups")

    @field_validator("images")
    @classmethod
    def validate_image_count(cls, v):
        if len(v) > MAX_IMAGES_PER_VARIANT:
            raise ValueError(f"Maximum {MAX_IMAGES_PER_VARIANT} images allowed per variant")
        return v

    @property
    def is_saved(self) -> bool:
        return self.sku is not None

    def iter_attributes(self) -> Iterable[AttributeInstance]:
        """All attributes of all groups, in display order"""
        for group in self.attribute_groups:
            yield from group.attributes

    def attribute_ids(self) -> List[str]:
        return [attribute.id for attribute in self.iter_attributes()]

    def to_wire(self) -> Dict[str, Any]:
        """Persisted shape consumed by the persistence gateway"""
        data = self.model_dump(by_alias=True, mode="json")
        if data.get("sku") is None:
            data.pop("sku", None)
        return data


class VariantPatch(BaseModel):
    """Scalar edits to merge into a variant; unset fields are left alone."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0, alias="costPrice")
    description: Optional[str] = None
    images: Optional[List[str]] = None
    attribute_groups: Optional[List[AttributeGroup]] = Field(None, alias="attributeGroups")


class DifferentiatorSummary(BaseModel):
    """Product-level differentiator set persisted alongside the variants."""
    attributes: List[str] = Field(default_factory=list)
    values: Dict[str, List[str]] = Field(default_factory=dict)

    def discard(self, attribute_ids: Iterable[str]) -> None:
        """Drop membership of the given attribute ids"""
        dropped = set(attribute_ids)
        if not dropped:
            return
        self.attributes = [a for a in self.attributes if a not in dropped]
        for attribute_id in dropped:
            self.values.pop(attribute_id, None)


class AttributeDisplay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    value: Any = None
    formatted_value: str = Field(..., alias="formattedValue")
    is_differentiator: bool = Field(False, alias="isDifferentiator")
    group_name: Optional[str] = Field(None, alias="groupName")


class GroupDisplay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    group_name: str = Field(..., alias="groupName")
    attributes: List[AttributeDisplay] = Field(default_factory=list)


class VariantSummary(BaseModel):
    """Read-only summary rendered on a variant card."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    sku: str
    price: float
    cost_price: float = Field(..., alias="costPrice")
    image_count: int = Field(..., alias="imageCount")
    total_attributes: int = Field(..., alias="totalAttributes")
    differentiator_attributes: List[AttributeDisplay] = Field(
        default_factory=list, alias="differentiatorAttributes"
    )
    attributes_by_group: List[GroupDisplay] = Field(
        default_factory=list, alias="attributesByGroup"
    )


class VariantOperationResult(BaseModel):
    """Outcome of a persistence or upload operation on one variant."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    variant_index: Optional[int] = Field(None, alias="variantIndex")
    sku: Optional[str] = None


# API Request/Response Models

class DifferentiatorRequest(BaseModel):
    variants: List[Variant] = Field(default_factory=list)


class DuplicateCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate: Variant
    candidate_index: int = Field(-1, alias="candidateIndex")
    variants: List[Variant] = Field(default_factory=list)


class DuplicateCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_duplicate: bool = Field(..., alias="isDuplicate")
    duplicate_indexes: List[int] = Field(default_factory=list, alias="duplicateIndexes")


class FormatValueRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: Any = None
    field_type: Optional[FieldType] = Field(None, alias="fieldType")


class FormatValueResponse(BaseModel):
    formatted: str


class DefaultValueRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_type: FieldType = Field(..., alias="fieldType")


class DefaultValueResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_type: FieldType = Field(..., alias="fieldType")
    label: str
    value: Any = None
