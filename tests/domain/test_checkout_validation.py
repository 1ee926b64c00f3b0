"""Tests for checkout request parsing and validation (no database)."""

import pytest

from pos_kernel.domain.dtos import CheckoutLine
from pos_kernel.domain.validation import (
    MAX_PRODUCT_ID,
    MAX_QUANTITY,
    parse_checkout_request,
    validate_checkout_lines,
)
from pos_kernel.exceptions import (
    CheckoutValidationError,
    EmptyCheckoutError,
    InvalidProductIdError,
    InvalidQuantityError,
    MalformedRequestError,
)


class TestValidateCheckoutLines:

    def test_valid_lines_pass_through_in_order(self):
        lines = [CheckoutLine(3, 1), CheckoutLine(1, 2), CheckoutLine(3, 4)]
        assert validate_checkout_lines(lines) == tuple(lines)

    def test_empty_cart_rejected(self):
        with pytest.raises(EmptyCheckoutError) as exc_info:
            validate_checkout_lines([])
        assert exc_info.value.code == "EMPTY_CHECKOUT"

    @pytest.mark.parametrize("quantity", [0, -1, -100])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(InvalidQuantityError) as exc_info:
            validate_checkout_lines([CheckoutLine(1, 1), CheckoutLine(2, quantity)])
        assert exc_info.value.position == 1
        assert exc_info.value.quantity == quantity

    @pytest.mark.parametrize("quantity", [1.5, "2", None, True])
    def test_non_integer_quantity_rejected(self, quantity):
        with pytest.raises(InvalidQuantityError):
            validate_checkout_lines([CheckoutLine(1, quantity)])

    @pytest.mark.parametrize("product_id", ["1", 1.0, None, False])
    def test_non_integer_product_id_rejected(self, product_id):
        with pytest.raises(InvalidProductIdError) as exc_info:
            validate_checkout_lines([CheckoutLine(product_id, 1)])
        assert exc_info.value.position == 0

    @pytest.mark.parametrize("product_id", [0, -5, MAX_PRODUCT_ID + 1, 2**70])
    def test_product_id_outside_bigint_range_rejected(self, product_id):
        with pytest.raises(InvalidProductIdError) as exc_info:
            validate_checkout_lines([CheckoutLine(product_id, 1)])
        assert exc_info.value.product_id == product_id

    @pytest.mark.parametrize("quantity", [MAX_QUANTITY + 1, 2**70])
    def test_quantity_outside_integer_range_rejected(self, quantity):
        with pytest.raises(InvalidQuantityError) as exc_info:
            validate_checkout_lines([CheckoutLine(1, quantity)])
        assert exc_info.value.quantity == quantity

    def test_range_upper_bounds_accepted(self):
        lines = [CheckoutLine(MAX_PRODUCT_ID, MAX_QUANTITY)]
        assert validate_checkout_lines(lines) == tuple(lines)

    def test_all_validation_errors_are_client_errors(self):
        for exc in (
            EmptyCheckoutError(),
            InvalidQuantityError(0, 0),
            InvalidProductIdError(0, "x"),
            MalformedRequestError("bad"),
        ):
            assert isinstance(exc, CheckoutValidationError)
            assert exc.is_client_error


class TestParseCheckoutRequest:

    def test_items_mapping(self):
        lines = parse_checkout_request(
            {"items": [{"product_id": 1, "quantity": 3}, {"product_id": 2, "quantity": 1}]}
        )
        assert lines == (CheckoutLine(1, 3), CheckoutLine(2, 1))

    def test_bare_list(self):
        assert parse_checkout_request([{"product_id": 5, "quantity": 2}]) == (
            CheckoutLine(5, 2),
        )

    def test_json_text(self):
        body = '{"items": [{"product_id": 9, "quantity": 4}]}'
        assert parse_checkout_request(body) == (CheckoutLine(9, 4),)
        assert parse_checkout_request(body.encode()) == (CheckoutLine(9, 4),)

    def test_invalid_json(self):
        with pytest.raises(MalformedRequestError):
            parse_checkout_request("{not json")

    def test_missing_items_key(self):
        with pytest.raises(MalformedRequestError, match="items"):
            parse_checkout_request({"lines": []})

    def test_items_not_a_list(self):
        with pytest.raises(MalformedRequestError):
            parse_checkout_request({"items": "1,2,3"})
        with pytest.raises(MalformedRequestError):
            parse_checkout_request({"items": 7})

    def test_item_not_an_object(self):
        with pytest.raises(MalformedRequestError, match="item 1"):
            parse_checkout_request({"items": [{"product_id": 1, "quantity": 1}, [1, 2]]})

    def test_item_missing_field(self):
        with pytest.raises(MalformedRequestError, match="quantity"):
            parse_checkout_request({"items": [{"product_id": 1}]})

    def test_empty_items_rejected(self):
        with pytest.raises(EmptyCheckoutError):
            parse_checkout_request({"items": []})

    def test_bad_values_surface_as_validation_errors(self):
        with pytest.raises(InvalidQuantityError):
            parse_checkout_request({"items": [{"product_id": 1, "quantity": 0}]})
