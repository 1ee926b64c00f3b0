"""
Checkout request validation.

Responsibility:
    Turns an untrusted request body into a tuple of CheckoutLine values, or
    raises a CheckoutValidationError.  Runs before any unit of work is opened,
    so a rejected request never touches the store.

Architecture position:
    Kernel > Domain -- pure, zero I/O.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pos_kernel.domain.dtos import CheckoutLine
from pos_kernel.exceptions import (
    EmptyCheckoutError,
    InvalidProductIdError,
    InvalidQuantityError,
    MalformedRequestError,
)


# Column ranges: products.id is BIGINT, stock and line quantities are INTEGER.
MAX_PRODUCT_ID = 2**63 - 1
MAX_QUANTITY = 2**31 - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _in_range(value: Any, upper: int) -> bool:
    return _is_int(value) and 1 <= value <= upper


def validate_checkout_lines(lines: Sequence[CheckoutLine]) -> tuple[CheckoutLine, ...]:
    """
    Check every line of a cart.

    Raises:
        EmptyCheckoutError: no lines.
        InvalidProductIdError: product_id is not an int in 1..MAX_PRODUCT_ID.
        InvalidQuantityError: quantity is not an int in 1..MAX_QUANTITY.
    """
    if len(lines) == 0:
        raise EmptyCheckoutError()

    for position, line in enumerate(lines):
        if not _in_range(line.product_id, MAX_PRODUCT_ID):
            raise InvalidProductIdError(position, line.product_id)
        if not _in_range(line.quantity, MAX_QUANTITY):
            raise InvalidQuantityError(position, line.quantity)

    return tuple(lines)


def parse_checkout_request(payload: Any) -> tuple[CheckoutLine, ...]:
    """
    Parse a checkout request body.

    Accepts raw JSON (str or bytes), a mapping of the form
    ``{"items": [{"product_id": 1, "quantity": 2}, ...]}``, or the bare
    list of items.

    Returns:
        Validated lines in request order.

    Raises:
        MalformedRequestError: the body does not have that shape.
        CheckoutValidationError: the body has that shape but a value is bad.
    """
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise MalformedRequestError(f"not valid JSON ({exc})") from exc

    if isinstance(payload, Mapping):
        if "items" not in payload:
            raise MalformedRequestError("missing 'items'")
        items = payload["items"]
    else:
        items = payload

    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise MalformedRequestError("'items' must be a list")

    lines: list[CheckoutLine] = []
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise MalformedRequestError(f"item {position} must be an object")
        missing = [key for key in ("product_id", "quantity") if key not in item]
        if missing:
            raise MalformedRequestError(
                f"item {position} is missing {', '.join(missing)}"
            )
        lines.append(
            CheckoutLine(product_id=item["product_id"], quantity=item["quantity"])
        )

    return validate_checkout_lines(lines)
