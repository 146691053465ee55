"""
Unit tests for the Variant Service
"""

import pytest

from src.core.errors import ImageCapacityError, InvalidReferenceError
from src.models.variant import VariantPatch
from src.services.variant_service import VariantService


@pytest.fixture
def variant_service(id_generator):
    """Variant service with a deterministic id generator"""
    return VariantService(id_generator)


@pytest.fixture
def full_variant(make_variant):
    """Saved variant holding five images"""
    return make_variant(
        sku="TS-RED",
        attributes=[("c1", "text", "Red"), ("w1", "weight", {"unit": "kg", "value": 1})],
        images=[f"https://cdn.example.com/{n}.jpg" for n in range(5)],
    )


class TestClone:
    """Test clone method"""

    def test_clone_strips_sku_and_suffixes_name(self, variant_service, red_variant):
        cloned = variant_service.clone(red_variant)
        assert cloned.sku is None
        assert cloned.is_saved is False
        assert cloned.name == "T-Shirt Red (Copy)"
        assert cloned.key != red_variant.key

    def test_clone_deep_copies_groups(self, variant_service, red_variant):
        cloned = variant_service.clone(red_variant)
        assert cloned.attribute_groups == red_variant.attribute_groups
        assert cloned.attribute_groups is not red_variant.attribute_groups
        assert cloned.attribute_groups[0] is not red_variant.attribute_groups[0]

        cloned.attribute_groups[0].attributes[0].value = "Green"
        assert red_variant.attribute_groups[0].attributes[0].value == "Red"

    def test_clone_copies_images(self, variant_service, full_variant):
        cloned = variant_service.clone(full_variant)
        cloned.images.pop()
        assert len(full_variant.images) == 5

    def test_clone_keeps_attribute_ids(self, variant_service, full_variant):
        assert variant_service.clone(full_variant).attribute_ids() == ["c1", "w1"]

    def test_clone_wire_shape_omits_sku(self, variant_service, red_variant):
        data = variant_service.clone(red_variant).to_wire()
        assert "sku" not in data
        assert "key" not in data
        assert data["attributeGroups"][0]["attributes"][0]["fieldType"] == "text"


class TestApplyEdits:
    """Test apply_edits method"""

    def test_only_present_fields_change(self, variant_service, full_variant):
        updated = variant_service.apply_edits(full_variant, VariantPatch(price=25.0))
        assert updated.price == 25.0
        assert updated.name == full_variant.name
        assert updated.images == full_variant.images
        assert updated.attribute_groups == full_variant.attribute_groups

    def test_returns_new_variant(self, variant_service, full_variant):
        updated = variant_service.apply_edits(full_variant, VariantPatch(name="Renamed"))
        assert updated is not full_variant
        assert full_variant.name == "T-Shirt"
        assert updated.key == full_variant.key
        assert updated.sku == "TS-RED"

    def test_images_replaced_when_included(self, variant_service, full_variant):
        updated = variant_service.apply_edits(full_variant, VariantPatch(images=["a.jpg"]))
        assert updated.images == ["a.jpg"]

    def test_too_many_images_rejected(self, variant_service, full_variant):
        patch = VariantPatch(images=[f"{n}.jpg" for n in range(6)])
        with pytest.raises(ImageCapacityError):
            variant_service.apply_edits(full_variant, patch)

    def test_patch_from_wire(self, variant_service, full_variant):
        patch = VariantPatch.model_validate({"costPrice": 4.0, "description": "Soft"})
        updated = variant_service.apply_edits(full_variant, patch)
        assert updated.cost_price == 4.0
        assert updated.description == "Soft"


class TestImages:
    """Test image list operations"""

    def test_sixth_image_rejected(self, variant_service, full_variant):
        """Adding a sixth image fails and leaves the five images untouched"""
        before = list(full_variant.images)
        with pytest.raises(ImageCapacityError) as exc_info:
            variant_service.add_images(full_variant, ["https://cdn.example.com/6.jpg"])
        assert exc_info.value.message == "Maximum 5 images allowed per variant"
        assert exc_info.value.status_code == 400
        assert full_variant.images == before

    def test_batch_is_all_or_nothing(self, variant_service, make_variant):
        variant = make_variant(images=["1.jpg", "2.jpg", "3.jpg"])
        with pytest.raises(ImageCapacityError):
            variant_service.add_images(variant, ["4.jpg", "5.jpg", "6.jpg"])
        assert variant.images == ["1.jpg", "2.jpg", "3.jpg"]

    def test_duplicates_within_batch_collapse(self, variant_service, make_variant):
        variant = make_variant(images=["1.jpg", "2.jpg", "3.jpg"])
        variant_service.add_images(variant, ["4.jpg", "4.jpg", "5.jpg"])
        assert variant.images == ["1.jpg", "2.jpg", "3.jpg", "4.jpg", "5.jpg"]
        assert variant_service.remaining_image_slots(variant) == 0

    def test_remove_image(self, variant_service, full_variant):
        removed = variant_service.remove_image(full_variant, 0)
        assert removed.endswith("/0.jpg")
        assert len(full_variant.images) == 4

    def test_remove_image_out_of_range(self, variant_service, full_variant):
        with pytest.raises(InvalidReferenceError):
            variant_service.remove_image(full_variant, 5)

    def test_reorder_images(self, variant_service, make_variant):
        variant = make_variant(images=["a", "b", "c"])
        variant_service.reorder_images(variant, 0, 2)
        assert variant.images == ["b", "c", "a"]


class TestSummarize:
    """Test summarize method"""

    def test_summary(self, variant_service, full_variant):
        full_variant.attribute_groups[0].attributes[0].is_differentiator = True
        summary = variant_service.summarize(full_variant)

        assert summary.sku == "TS-RED"
        assert summary.image_count == 5
        assert summary.total_attributes == 2
        assert [row.label for row in summary.differentiator_attributes] == ["c1"]
        rows = summary.attributes_by_group[0].attributes
        assert [row.formatted_value for row in rows] == ["Red", "1 kg"]

    def test_unsaved_summary(self, variant_service):
        summary = variant_service.summarize(variant_service.create_empty())
        assert summary.sku == "No SKU"
        assert summary.name == "Unnamed Variant"
        assert summary.attributes_by_group == []


class TestFindIndex:
    """Test find_index method"""

    def test_by_sku_and_key(self, variant_service, red_variant, blue_variant):
        variants = [red_variant, blue_variant]
        assert variant_service.find_index(variants, "TS-BLUE") == 1
        assert variant_service.find_index(variants, red_variant.key) == 0

    def test_missing(self, variant_service, red_variant):
        with pytest.raises(InvalidReferenceError):
            variant_service.find_index([red_variant], "NOPE")
