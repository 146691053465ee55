"""
Attribute Group Engine

In-memory editing of one variant's attribute groups: add/remove/move groups
and attributes and targeted field updates. Operations are synchronous and
only fail on invalid references (unknown ids, indexes out of range).
"""

from typing import Iterable, Optional, Set

from src.core.errors import InvalidReferenceError
from src.core.logger import logger
from src.models.attribute_values import AttributeValue
from src.models.variant import (
    AttributeGroup,
    AttributeInstance,
    DifferentiatorSummary,
    Variant,
)
from src.services.attribute_value_service import (
    change_unit_type,
    coerce,
    default_value_for,
)
from src.services.field_type_registry import label_of, resolve_field_type
from src.utils.id_generator import IdGenerator, default_id_generator
from src.utils.ordering import move


class AttributeGroupEngine:
    """
    Edits the attribute groups of a single variant in place.

    Args:
        variant: Variant being edited
        id_generator: Source of fresh group/attribute ids
        reserved_ids: Attribute ids used elsewhere in the product
        differentiators: Product summary to prune when attributes are removed
    """

    MAX_ID_ATTEMPTS = 8

    def __init__(
        self,
        variant: Variant,
        id_generator: Optional[IdGenerator] = None,
        reserved_ids: Optional[Iterable[str]] = None,
        differentiators: Optional[DifferentiatorSummary] = None,
    ):
        self.variant = variant
        self.id_generator = id_generator or default_id_generator
        self.reserved_ids: Set[str] = set(reserved_ids or ())
        self.differentiators = differentiators
        self.expanded_group_id: Optional[str] = None

    @property
    def groups(self):
        return self.variant.attribute_groups

    # ===== Groups =====

    def add_group(self, name: str = "") -> str:
        """Append an empty group; the new group becomes the expanded one."""
        existing = {group.id for group in self.groups}
        group_id = self._fresh_id(self.id_generator.group_id, existing)
        self.groups.append(AttributeGroup(id=group_id, name=name))
        self.expanded_group_id = group_id

        logger.debug(
            f"Attribute group added: {group_id}",
            metadata={"group_id": group_id, "variant_key": self.variant.key},
        )
        return group_id

    def remove_group(self, group_id: str) -> AttributeGroup:
        """Delete a group with all its attributes and prune their ids."""
        index = self._group_index(group_id)
        group = self.groups.pop(index)
        removed_ids = [attribute.id for attribute in group.attributes]

        if self.differentiators is not None:
            self.differentiators.discard(removed_ids)
        if self.expanded_group_id == group_id:
            self.expanded_group_id = None

        logger.debug(
            f"Attribute group removed: {group_id}",
            metadata={"group_id": group_id, "removed_attributes": removed_ids},
        )
        return group

    def move_group(self, from_index: int, to_index: int) -> None:
        move(self.groups, from_index, to_index, what="group")

    def rename_group(self, group_id: str, name: str) -> None:
        self.get_group(group_id).name = name

    def toggle_group(self, group_id: str) -> Optional[str]:
        """Expand a group, or collapse it when it is already expanded."""
        self.get_group(group_id)
        self.expanded_group_id = None if self.expanded_group_id == group_id else group_id
        return self.expanded_group_id

    # ===== Attributes =====

    def add_attribute(self, group_id: str, field_type) -> str:
        """Append a new attribute with the field type's default value."""
        group = self.get_group(group_id)
        field_type = resolve_field_type(field_type)

        taken = set(self.variant.attribute_ids()) | self.reserved_ids
        attribute_id = self._fresh_id(
            lambda: self.id_generator.attribute_id(field_type.value), taken
        )
        group.attributes.append(AttributeInstance(
            id=attribute_id,
            field_type=field_type,
            label=label_of(field_type),
            value=default_value_for(field_type),
            is_differentiator=False,
        ))
        self.reserved_ids.add(attribute_id)

        logger.debug(
            f"Attribute added: {attribute_id}",
            metadata={"group_id": group_id, "field_type": field_type.value},
        )
        return attribute_id

    def remove_attribute(self, group_id: str, attribute_id: str) -> AttributeInstance:
        group = self.get_group(group_id)
        index = self._attribute_index(group, attribute_id)
        removed = group.attributes.pop(index)

        if self.differentiators is not None:
            self.differentiators.discard([attribute_id])
        return removed

    def move_attribute(self, group_id: str, from_index: int, to_index: int) -> None:
        group = self.get_group(group_id)
        move(group.attributes, from_index, to_index, what="attribute")

    def set_attribute_label(self, group_id: str, attribute_id: str, label: str) -> None:
        self.get_attribute(group_id, attribute_id).label = label

    def set_attribute_value(self, group_id: str, attribute_id: str, value) -> AttributeValue:
        """
        Replace an attribute's value.

        Raises:
            ValueError: If the value does not fit the attribute's field type
        """
        attribute = self.get_attribute(group_id, attribute_id)
        attribute.value = coerce(attribute.field_type, value)
        return attribute.value

    def set_attribute_differentiator_flag(self, group_id: str, attribute_id: str, flag: bool) -> None:
        self.get_attribute(group_id, attribute_id).is_differentiator = bool(flag)

    def set_attribute_unit_type(self, group_id: str, attribute_id: str, unit_type) -> AttributeValue:
        """Switch the unit catalog of a number/text-with-unit attribute."""
        attribute = self.get_attribute(group_id, attribute_id)
        value = attribute.value
        if value is None:
            value = default_value_for(attribute.field_type)
        attribute.value = change_unit_type(value, unit_type)
        return attribute.value

    # ===== Lookups =====

    def get_group(self, group_id: str) -> AttributeGroup:
        return self.groups[self._group_index(group_id)]

    def get_attribute(self, group_id: str, attribute_id: str) -> AttributeInstance:
        group = self.get_group(group_id)
        return group.attributes[self._attribute_index(group, attribute_id)]

    def _group_index(self, group_id: str) -> int:
        for index, group in enumerate(self.groups):
            if group.id == group_id:
                return index
        raise InvalidReferenceError(
            f"Attribute group {group_id} not found",
            details={"group_id": group_id, "variant_key": self.variant.key},
        )

    @staticmethod
    def _attribute_index(group: AttributeGroup, attribute_id: str) -> int:
        for index, attribute in enumerate(group.attributes):
            if attribute.id == attribute_id:
                return index
        raise InvalidReferenceError(
            f"Attribute {attribute_id} not found in group {group.id}",
            details={"group_id": group.id, "attribute_id": attribute_id},
        )

    def _fresh_id(self, make_id, taken: Set[str]) -> str:
        for _ in range(self.MAX_ID_ATTEMPTS):
            candidate = make_id()
            if candidate not in taken:
                return candidate
        raise InvalidReferenceError(
            "Could not generate a unique id",
            details={"attempts": self.MAX_ID_ATTEMPTS},
        )
