"""
Unit tests for the Differentiator Service
"""

from src.services.differentiator_service import (
    calculate_differentiators,
    collect_values,
    flagged_attribute_ids,
)


class TestCalculateDifferentiators:
    """Test calculate_differentiators function"""

    def test_same_values_are_not_differentiators(self, make_variant):
        """Red and Red: no differentiators"""
        variants = [
            make_variant(attributes=[("c1", "text", "Red")]),
            make_variant(attributes=[("c1", "text", "Red")]),
        ]
        summary = calculate_differentiators(variants)
        assert summary.attributes == []
        assert summary.values == {}

    def test_different_values_are_differentiators(self, red_variant, blue_variant):
        """Red and Blue: c1 differentiates, values in first-seen order"""
        summary = calculate_differentiators([red_variant, blue_variant])
        assert summary.model_dump() == {"attributes": ["c1"], "values": {"c1": ["Red", "Blue"]}}

    def test_single_variant_has_no_differentiators(self, red_variant):
        assert calculate_differentiators([red_variant]).attributes == []

    def test_no_variants(self):
        assert calculate_differentiators([]).attributes == []

    def test_unset_values_are_ignored(self, make_variant):
        variants = [
            make_variant(attributes=[("c1", "text", "Red"), ("n1", "number", 0), ("b1", "boolean", True)]),
            make_variant(attributes=[("c1", "text", ""), ("n1", "number", 5), ("b1", "boolean", False)]),
        ]
        summary = calculate_differentiators(variants)
        assert summary.attributes == []

    def test_composites_always_count(self, make_variant):
        variants = [
            make_variant(attributes=[("w1", "weight", {"unit": "kg"})]),
            make_variant(attributes=[("w1", "weight", {"unit": "kg", "value": 2})]),
        ]
        summary = calculate_differentiators(variants)
        assert summary.values == {"w1": ['{"unit":"kg"}', "2 kg"]}

    def test_no_unit_conversion(self, make_variant):
        variants = [
            make_variant(attributes=[("w1", "weight", {"unit": "g", "value": 1000})]),
            make_variant(attributes=[("w1", "weight", {"unit": "kg", "value": 1})]),
        ]
        assert calculate_differentiators(variants).attributes == ["w1"]

    def test_numbers_compare_by_display_string(self, make_variant):
        variants = [
            make_variant(attributes=[("n1", "number", 10)]),
            make_variant(attributes=[("n1", "number", 10.0)]),
        ]
        assert calculate_differentiators(variants).attributes == []

    def test_matches_ids_across_groups(self, make_variant, red_variant):
        """Attribute identity is the id, not the group it lives in"""
        other = make_variant(attributes=[("c1", "text", "Blue")])
        other.attribute_groups[0].id = "g2"
        other.attribute_groups[0].name = "Appearance"
        assert calculate_differentiators([red_variant, other]).attributes == ["c1"]

    def test_three_variants_collect_distinct_values(self, make_variant):
        variants = [
            make_variant(attributes=[("s1", "size", value)])
            for value in ("M", "L", "M")
        ]
        assert calculate_differentiators(variants).values == {"s1": ["M", "L"]}

    def test_flag_does_not_affect_summary(self, make_variant):
        first = make_variant(attributes=[("c1", "text", "Red")])
        second = make_variant(attributes=[("c1", "text", "Red")])
        first.attribute_groups[0].attributes[0].is_differentiator = True
        assert calculate_differentiators([first, second]).attributes == []


class TestHelpers:
    """Test collect_values and flagged_attribute_ids"""

    def test_collect_values_skips_unset(self, make_variant):
        variant = make_variant(attributes=[("c1", "text", "Red"), ("n1", "number", None)])
        assert collect_values([variant]) == {"c1": ["Red"]}

    def test_flagged_attribute_ids(self, make_variant):
        variant = make_variant(attributes=[("c1", "text", "Red"), ("s1", "size", "M")])
        variant.attribute_groups[0].attributes[1].is_differentiator = True
        assert flagged_attribute_ids([variant, variant]) == ["s1"]
