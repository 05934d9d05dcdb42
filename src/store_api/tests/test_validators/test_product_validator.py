import pytest

from store_api.validators.product_validator import (
    validate_low_stock_threshold,
    validate_product_create,
    validate_product_update,
    validate_stock_quantity,
)


class TestValidateProductCreate:

    def test_price_rounded_and_stock_defaulted(self):
        result = validate_product_create({"name": "Widget", "price": 9.999})
        assert result.valid is True
        assert result.data.price == 10.0
        assert result.data.stock == 0

    def test_numeric_strings_accepted(self):
        data = validate_product_create({"name": "Widget", "price": "12.345", "stock": "3"}).unwrap()
        assert (data.price, data.stock) == (12.35, 3)

    @pytest.mark.parametrize("payload, field", [
        ({"price": 1}, "name"),
        ({"name": "W"}, "price"),
        ({"name": "W", "price": 0}, "price"),
        ({"name": "W", "price": -5}, "price"),
        ({"name": "W", "price": "abc"}, "price"),
        ({"name": "W", "price": True}, "price"),
        ({"name": "W", "price": 0.001}, "price"),
        ({"name": "W", "price": 1, "stock": -1}, "stock"),
        ({"name": "W", "price": 1, "stock": 1.5}, "stock"),
        ({"name": "W", "price": 1, "stock": "many"}, "stock"),
    ])
    def test_invalid_payloads(self, payload, field):
        result = validate_product_create(payload)
        assert result.valid is False
        assert result.error.fields == [field]


class TestValidateProductUpdate:

    def test_partial(self):
        assert validate_product_update({"stock": 4}).data.changes() == {"stock": 4}
        assert validate_product_update({"price": 1.239}).data.changes() == {"price": 1.24}

    def test_negative_stock_rejected(self):
        result = validate_product_update({"stock": -1})
        assert result.valid is False
        assert result.error.fields == ["stock"]


def test_validate_stock_quantity():
    assert validate_stock_quantity(0).data == 0
    assert validate_stock_quantity("8").data == 8
    assert validate_stock_quantity(-3).valid is False
    assert validate_stock_quantity(None).valid is False


def test_validate_low_stock_threshold():
    assert validate_low_stock_threshold().data == 5
    assert validate_low_stock_threshold("").data == 5
    assert validate_low_stock_threshold("0").data == 0
    assert validate_low_stock_threshold(-1).valid is False


class TestNumericBounds:

    @pytest.mark.parametrize("price", [1e30, "1e30", 1.23e28, float("inf"), float("nan"), "nan"])
    def test_huge_or_non_finite_price_is_a_validation_failure(self, price):
        """
        Behavior:
                - Prices far beyond the supported range come back as a failed result.
                - Nothing escapes the validator as an exception.

        Importance:
                - Oversized input is a client error (400), not a server error.
        """
        result = validate_product_create({"name": "Big", "price": price})

        assert result.valid is False
        assert result.error.fields == ["price"]

    def test_stock_beyond_sqlite_integer_range(self):
        result = validate_product_create({"name": "Big", "price": 1, "stock": 2**70})

        assert result.valid is False
        assert result.error.fields == ["stock"]
        assert validate_stock_quantity(2**63).valid is False
        assert validate_low_stock_threshold(str(2**64)).valid is False

    def test_upper_bounds_are_inclusive(self):
        assert validate_product_create({"name": "Big", "price": 1, "stock": 2**63 - 1}).data.stock == 2**63 - 1
        assert validate_product_create({"name": "Big", "price": 1e12}).data.price == 1e12

    def test_failure_message_names_the_field(self):
        result = validate_product_create({"name": "W", "price": -5})
        assert result.error.message.startswith("price: ")


def test_explicit_null_in_update_is_rejected():
    result = validate_product_update({"name": None})
    assert result.valid is False
    assert result.error.fields == ["name"]


def test_null_stock_on_create_defaults_to_zero():
    assert validate_product_create({"name": "W", "price": 1, "stock": None}).data.stock == 0
