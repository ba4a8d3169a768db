"""Tests for natural-key normalization and validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.features.menus.schemas import (
    PRICE_MAX,
    MenuItemKey,
    MenuKey,
    RestaurantKey,
    coerce_price,
    describe_errors,
    normalize_name,
)


class TestNormalizeName:
    """Tests for normalize_name."""

    def test_strips_whitespace(self):
        assert normalize_name("  Pizza Place \t") == "Pizza Place"

    def test_whitespace_only_becomes_empty(self):
        assert normalize_name("   ") == ""

    def test_numbers_are_stringified(self):
        assert normalize_name(42) == "42"

    @pytest.mark.parametrize("value", [None, True, False, {"a": 1}, ["x"]])
    def test_other_shapes_are_absent(self, value):
        assert normalize_name(value) is None


class TestCoercePrice:
    """Tests for coerce_price."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10, 10),
            (10.0, 10),
            ("10", 10),
            ("10.00", 10),
            (" 12 ", 12),
            (Decimal("15.50"), 15),
        ],
    )
    def test_whole_unit_values(self, value, expected):
        assert coerce_price(value) == expected

    def test_fraction_truncates_toward_zero(self):
        """9.99 is stored as 9, not rounded to 10."""
        assert coerce_price(9.99) == 9
        assert coerce_price("9.99") == 9
        assert coerce_price(-3.7) == -3

    @pytest.mark.parametrize(
        "value", [None, True, "abc", "", float("nan"), float("inf"), "Infinity", [10], {}]
    )
    def test_non_numeric_is_absent(self, value):
        assert coerce_price(value) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1e10000000", PRICE_MAX + 1),
            ("-1e10000000", -(PRICE_MAX + 1)),
            (Decimal("9" * 5000), PRICE_MAX + 1),
            (1e300, PRICE_MAX + 1),
            ("2147483647.5", PRICE_MAX),
        ],
    )
    def test_out_of_range_is_clamped_past_the_bound(self, value, expected):
        assert coerce_price(value) == expected


class TestKeySchemas:
    """Tests for the key models used by the importer."""

    def test_restaurant_key_trims_name(self):
        key = RestaurantKey.model_validate({"name": "  Bistro  "})
        assert key.name == "Bistro"

    def test_restaurant_key_rejects_blank(self):
        with pytest.raises(ValidationError) as exc_info:
            RestaurantKey.model_validate({"name": "   "})
        assert describe_errors(exc_info.value) == "Name can't be blank"

    def test_menu_key_rejects_missing_name(self):
        with pytest.raises(ValidationError) as exc_info:
            MenuKey.model_validate({"name": None})
        assert describe_errors(exc_info.value) == "Name can't be blank"

    def test_name_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            MenuKey.model_validate({"name": "x" * 256})
        assert describe_errors(exc_info.value) == (
            "Name is too long (maximum is 255 characters)"
        )

    def test_menu_item_key_normalizes_both_fields(self):
        key = MenuItemKey.model_validate({"name": " Burger ", "price": "10.00"})
        assert key.name == "Burger"
        assert key.price == 10

    def test_menu_item_key_rejects_missing_price(self):
        with pytest.raises(ValidationError) as exc_info:
            MenuItemKey.model_validate({"name": "Burger", "price": None})
        assert describe_errors(exc_info.value) == "Price can't be blank"

    @pytest.mark.parametrize("price", [0, -5, 0.5, "0"])
    def test_menu_item_key_rejects_non_positive_price(self, price):
        with pytest.raises(ValidationError) as exc_info:
            MenuItemKey.model_validate({"name": "Burger", "price": price})
        assert describe_errors(exc_info.value) == "Price must be greater than 0"

    def test_menu_item_key_rejects_price_above_column_range(self):
        with pytest.raises(ValidationError) as exc_info:
            MenuItemKey.model_validate({"name": "Burger", "price": PRICE_MAX + 1})
        assert "Price must be less than or equal to" in describe_errors(exc_info.value)

    def test_menu_item_key_rejects_huge_exponent(self):
        with pytest.raises(ValidationError) as exc_info:
            MenuItemKey.model_validate({"name": "Burger", "price": "1e10000000"})
        assert describe_errors(exc_info.value) == (
            f"Price must be less than or equal to {PRICE_MAX}"
        )

    def test_errors_are_joined_in_field_order(self):
        with pytest.raises(ValidationError) as exc_info:
            MenuItemKey.model_validate({"name": "", "price": -1})
        assert describe_errors(exc_info.value) == (
            "Name can't be blank, Price must be greater than 0"
        )

    def test_keys_are_frozen(self):
        key = RestaurantKey.model_validate({"name": "Bistro"})
        with pytest.raises(ValidationError):
            key.name = "Other"  # type: ignore[misc]
