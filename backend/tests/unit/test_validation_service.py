"""
Unit tests for the validation service.

Tests validate_snapshot error/warning rules per section, orphan policy,
stats, section shape handling and get_data_summary.
Version: 1.0.0
"""
import pytest

from catalog_hub.services.validation_service import (
    get_data_summary,
    linked_category_ids,
    section_entries,
    validate_snapshot,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestSectionEntries:
    """Tests for section_entries shape handling."""

    def test_mapping_yields_keys_as_ids(self):
        assert section_entries({"a": {"x": 1}}) == [("a", {"x": 1})]

    def test_list_uses_positions_and_skips_holes(self):
        entries = section_entries([None, {"name": "x"}, None, {"name": "y"}])
        assert entries == [("1", {"name": "x"}), ("3", {"name": "y"})]

    def test_none_and_scalars_are_empty(self):
        assert section_entries(None) == []
        assert section_entries("products") == []


class TestLinkedCategoryIds:
    """Tests for linked_category_ids."""

    def test_single_category_id(self):
        assert linked_category_ids({"category_id": "c1"}) == ["c1"]

    def test_category_ids_mapping_uses_truthy_flags(self):
        product = {"category_ids": {"c1": True, "c2": False, "c3": True}}
        assert linked_category_ids(product) == ["c1", "c3"]

    def test_category_ids_list_and_single_are_merged_without_duplicates(self):
        product = {"category_ids": ["c1", "c2"], "category_id": "c1"}
        assert linked_category_ids(product) == ["c1", "c2"]

    def test_no_links(self):
        assert linked_category_ids({"category_id": ""}) == []

    def test_integer_zero_is_a_real_id(self):
        assert linked_category_ids({"category_id": 0}) == ["0"]
        assert linked_category_ids({"category_ids": [0, None, " "]}) == ["0"]


# ---------------------------------------------------------------------------
# validate_snapshot
# ---------------------------------------------------------------------------

class TestValidateSnapshot:
    """Tests for validate_snapshot."""

    def test_valid_snapshot_has_no_errors_or_warnings(self, valid_snapshot):
        result = validate_snapshot(valid_snapshot)
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.stats.productCount == 2
        assert result.stats.categoryCount == 1
        assert result.stats.reviewCount == 1
        assert result.stats.offerCount == 1

    def test_valid_iff_no_errors(self, minimal_snapshot):
        result = validate_snapshot(minimal_snapshot)
        assert result.valid is True
        assert result.valid == (len(result.errors) == 0)
        assert result.warnings  # missing image/description only warn

    def test_minimal_snapshot_warnings(self, minimal_snapshot):
        result = validate_snapshot(minimal_snapshot)
        assert "Product p1: Missing product image" in result.warnings
        assert "Product p1: Missing description" in result.warnings
        assert "Category c1: Missing category image" in result.warnings

    def test_empty_candidate(self):
        result = validate_snapshot({})
        assert result.valid is False
        assert "No products found" in result.errors
        assert "No categories found" in result.errors
        assert "CRITICAL: No products - cannot publish without products" in result.errors
        assert "CRITICAL: No categories - cannot publish without categories" in result.errors

    def test_none_candidate_treated_as_empty(self):
        result = validate_snapshot(None)
        assert result.valid is False
        assert result.stats.productCount == 0

    def test_empty_sections_are_critical(self):
        result = validate_snapshot({"products": {}, "categories": {}})
        assert result.valid is False
        assert "CRITICAL: No products - cannot publish without products" in result.errors
        assert "No products found" not in result.errors

    def test_missing_name_is_error(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["name"] = "   "
        result = validate_snapshot(minimal_snapshot)
        assert "Product p1: Missing or empty name" in result.errors
        assert result.valid is False

    def test_missing_price_is_error(self, minimal_snapshot):
        del minimal_snapshot["products"]["p1"]["price"]
        result = validate_snapshot(minimal_snapshot)
        assert "Product p1: Missing price" in result.errors

    @pytest.mark.parametrize("price", ["100", -5, True, float("nan")])
    def test_invalid_price_format(self, minimal_snapshot, price):
        minimal_snapshot["products"]["p1"]["price"] = price
        result = validate_snapshot(minimal_snapshot)
        assert "Product p1: Invalid price format" in result.errors

    def test_zero_price_is_allowed(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["price"] = 0
        assert validate_snapshot(minimal_snapshot).valid is True

    def test_unusually_high_price_warns(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["price"] = 2_000_000
        result = validate_snapshot(minimal_snapshot)
        assert result.valid is True
        assert any("Price seems unusually high" in w for w in result.warnings)

    def test_price_threshold_is_configurable(self, minimal_snapshot):
        result = validate_snapshot(minimal_snapshot, price_warning_threshold=50)
        assert any("Price seems unusually high" in w for w in result.warnings)

    def test_compare_price_below_price_is_error(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["compare_at_price"] = 50
        result = validate_snapshot(minimal_snapshot)
        assert (
            "Product p1: Compare price (50) should be higher than sale price (100)"
            in result.errors
        )

    def test_compare_price_equal_to_price_is_allowed(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["compare_at_price"] = 100
        assert validate_snapshot(minimal_snapshot).valid is True

    def test_unassigned_product_warns(self, minimal_snapshot):
        del minimal_snapshot["products"]["p1"]["category_id"]
        result = validate_snapshot(minimal_snapshot)
        assert result.valid is True
        assert "Product p1: Not assigned to any category" in result.warnings

    def test_orphan_category_warns_by_default(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["category_id"] = "ghost"
        result = validate_snapshot(minimal_snapshot)
        assert result.valid is True
        assert "Product p1: References unknown category ghost" in result.warnings

    def test_orphan_category_errors_under_error_policy(self, minimal_snapshot):
        minimal_snapshot["products"]["p1"]["category_id"] = "ghost"
        result = validate_snapshot(minimal_snapshot, orphan_policy="error")
        assert result.valid is False
        assert "Product p1: References unknown category ghost" in result.errors

    def test_list_shaped_categories_with_integer_ids(self):
        candidate = {
            "products": {
                "p1": {
                    "name": "Clip",
                    "price": 100,
                    "category_id": 0,
                    "image_url": "https://cdn.example.com/clip.png",
                    "description": "Hair clip",
                },
            },
            "categories": [{"name": "Hair", "image_url": "https://cdn.example.com/hair.png"}],
        }
        result = validate_snapshot(candidate, orphan_policy="error")
        assert result.valid is True
        assert result.warnings == []

    def test_unknown_integer_category_under_error_policy(self, minimal_snapshot):
        minimal_snapshot["categories"] = [{"name": "Hair"}]
        minimal_snapshot["products"]["p1"]["category_id"] = 5
        result = validate_snapshot(minimal_snapshot, orphan_policy="error")
        assert result.valid is False
        assert "Product p1: References unknown category 5" in result.errors

    def test_non_mapping_product_entry(self, minimal_snapshot):
        minimal_snapshot["products"]["p2"] = "oops"
        result = validate_snapshot(minimal_snapshot)
        assert "Product p2: Invalid product entry" in result.errors

    def test_list_shaped_products(self):
        candidate = {
            "products": [None, {"name": "A", "price": 1, "category_id": "0"}],
            "categories": [{"name": "C"}],
        }
        result = validate_snapshot(candidate)
        assert result.valid is True
        assert result.stats.productCount == 1

    def test_category_missing_name_is_error(self, minimal_snapshot):
        minimal_snapshot["categories"]["c1"]["name"] = ""
        result = validate_snapshot(minimal_snapshot)
        assert "Category c1: Missing or empty name" in result.errors

    def test_review_rules(self, minimal_snapshot):
        minimal_snapshot["reviews"] = {"r1": {"rating": 4}}
        result = validate_snapshot(minimal_snapshot)
        assert "Review r1: Missing customer name" in result.errors
        assert "Review r1: Missing review text" in result.errors
        assert result.stats.reviewCount == 1

    def test_offer_rules(self, minimal_snapshot):
        minimal_snapshot["offers"] = {"o1": {"discount": 10}, "o2": {"title": "X", "isActive": False}}
        result = validate_snapshot(minimal_snapshot)
        assert "Offer o1: Missing title" in result.errors
        assert "Offer o1: Active status not set" in result.warnings
        assert not any(w.startswith("Offer o2") for w in result.warnings)

    def test_does_not_mutate_input(self, valid_snapshot):
        import copy
        before = copy.deepcopy(valid_snapshot)
        validate_snapshot(valid_snapshot)
        assert valid_snapshot == before


class TestGetDataSummary:
    """Tests for get_data_summary."""

    def test_counts_each_section(self, valid_snapshot):
        summary = get_data_summary(valid_snapshot)
        assert summary.splitlines() == [
            "Data Summary:",
            "- Products: 2",
            "- Categories: 1",
            "- Reviews: 1",
            "- Offers: 1",
        ]

    def test_empty_candidate(self):
        assert "- Products: 0" in get_data_summary(None)


class TestOrphanPolicy:

    def test_unknown_policy_rejected(self, minimal_snapshot):
        with pytest.raises(ValueError, match="Unknown orphan policy"):
            validate_snapshot(minimal_snapshot, orphan_policy="ignore")


class TestPublishScenarios:
    """Draft shapes an operator commonly submits."""

    def test_product_without_category_or_description(self):
        from catalog_hub.services.snapshot_builder import build_snapshot

        draft = {"products": {"p1": {"name": "Clip", "price": 100}}, "categories": {"c1": {"name": "Hair"}}}
        result = validate_snapshot(draft)

        assert result.valid is True
        assert "Product p1: Missing description" in result.warnings
        assert "Product p1: Not assigned to any category" in result.warnings

        built = build_snapshot(draft)
        assert "published_at" in built and "published_at" not in draft
        assert "version" in built and "version" not in draft

    def test_empty_products_with_categories(self):
        result = validate_snapshot({"products": {}, "categories": {"c1": {"name": "Hair"}}})
        assert result.valid is False
        assert any("products" in error for error in result.errors)
