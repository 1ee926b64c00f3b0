"""
Typed Exception Hierarchy for the POS Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

A checkout can fail for very different reasons: the caller sent garbage,
the caller asked for a product that does not exist, the shelf is empty, or
the database went away.  The HTTP layer must answer "400" for the first
three and "500" for the last, and it must never do so by parsing messages.

Every error therefore:
  1. Has a TYPED exception class (catch by type, not message)
  2. Has a CODE attribute (machine-readable, API-safe)
  3. Carries structured DATA (product_id, requested, available, ...)
  4. Declares whether it is the CLIENT's fault (``is_client_error``)

Example:
    try:
        order = checkout_service.checkout(lines)
    except InsufficientStockError as e:
        respond(400, code=e.code, product_id=e.product_id,
                available=e.available)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PosKernelError (base)
    |
    +-- CheckoutValidationError
    |   +-- MalformedRequestError
    |   +-- EmptyCheckoutError
    |   +-- InvalidQuantityError
    |   +-- InvalidProductIdError
    |
    +-- ProductError
    |   +-- ProductNotFoundError
    |   +-- InsufficientStockError
    |
    +-- OrderError
    |   +-- OrderNotFoundError
    |
    +-- StorageError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                 | When Raised
------------|----------------------|---------------------------------------------
Validation  | MALFORMED_REQUEST    | Body is not the expected shape
            | EMPTY_CHECKOUT       | Cart has no lines
            | INVALID_QUANTITY     | Quantity is not an integer in 1..2**31-1
            | INVALID_PRODUCT_ID   | Product id is not an integer in 1..2**63-1
------------|----------------------|---------------------------------------------
Product     | PRODUCT_NOT_FOUND    | Referenced product does not exist
            | INSUFFICIENT_STOCK   | Requested quantity exceeds stock on hand
------------|----------------------|---------------------------------------------
Order       | ORDER_NOT_FOUND      | Order id does not exist (read side)
------------|----------------------|---------------------------------------------
Storage     | STORAGE_ERROR        | Connectivity, constraint, or commit failure

Validation errors are raised before any unit of work is opened.  Product
and storage errors are raised inside the unit of work, which is rolled back
before the error reaches the caller.
"""


class PosKernelError(Exception):
    """
    Base exception for all POS kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "POS_KERNEL_ERROR"
    is_client_error: bool = False


# Validation exceptions


class CheckoutValidationError(PosKernelError):
    """Base exception for input that is rejected before touching the store."""

    code: str = "VALIDATION_ERROR"
    is_client_error: bool = True


class MalformedRequestError(CheckoutValidationError):
    """Request body could not be interpreted as a list of checkout lines."""

    code: str = "MALFORMED_REQUEST"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid request body: {reason}")


class EmptyCheckoutError(CheckoutValidationError):
    """Checkout was requested with no lines."""

    code: str = "EMPTY_CHECKOUT"

    def __init__(self):
        super().__init__("Checkout requires at least one line")


class InvalidQuantityError(CheckoutValidationError):
    """Line quantity is not an integer within the stock column range."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, position: int, quantity: object):
        self.position = position
        self.quantity = quantity
        super().__init__(
            f"Line {position}: quantity must be an integer from 1 to 2**31-1, got {quantity!r}"
        )


class InvalidProductIdError(CheckoutValidationError):
    """Line product id is not a positive BIGINT."""

    code: str = "INVALID_PRODUCT_ID"

    def __init__(self, position: int, product_id: object):
        self.position = position
        self.product_id = product_id
        super().__init__(
            f"Line {position}: product_id must be an integer from 1 to 2**63-1, got {product_id!r}"
        )


# Product-related exceptions


class ProductError(PosKernelError):
    """Base exception for product/inventory errors."""

    code: str = "PRODUCT_ERROR"
    is_client_error: bool = True


class ProductNotFoundError(ProductError):
    """Product with given ID was not found."""

    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product ID {product_id} not found")


class InsufficientStockError(ProductError):
    """Requested quantity exceeds the product's stock on hand."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"requested {requested}, available {available}"
        )


# Order-related exceptions


class OrderError(PosKernelError):
    """Base exception for order errors."""

    code: str = "ORDER_ERROR"
    is_client_error: bool = True


class OrderNotFoundError(OrderError):
    """Order with given ID was not found."""

    code: str = "ORDER_NOT_FOUND"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order ID {order_id} not found")


# Storage exceptions


class StorageError(PosKernelError):
    """The store rejected or failed to apply a statement.

    The original SQLAlchemy exception is chained as ``__cause__``.
    """

    code: str = "STORAGE_ERROR"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage failure during {operation}: {detail}")


def error_status(exc: BaseException) -> int:
    """Map an exception to the HTTP status the request layer should return."""
    if isinstance(exc, PosKernelError):
        if isinstance(exc, OrderNotFoundError):
            return 404
        return 400 if exc.is_client_error else 500
    return 500
