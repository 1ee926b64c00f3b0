"""
Module: pos_kernel.db.types
Responsibility: Shared column types for the kernel, so every
    model declares money, quantities, and names identically.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    CRITICAL: No floats anywhere in the kernel.  Money is an integer count of
    the smallest unit of account; there is no currency and no rounding.
"""

from sqlalchemy import BigInteger, Integer, String

# Integer unit of account (prices, subtotals, order totals)
Amount = BigInteger

# Stock and line quantities
Quantity = Integer

NAME_MAX_LENGTH = 200

# Product and category display names
Name = String(NAME_MAX_LENGTH)


def multiply_amount(unit_price: int, quantity: int) -> int:
    """Compute a line subtotal.

    Both operands must be plain ints (bool is rejected: ``True * 5`` is a bug,
    not a price).
    """
    for value in (unit_price, quantity):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Amount arithmetic requires int, got {type(value).__name__}")
    return unit_price * quantity
