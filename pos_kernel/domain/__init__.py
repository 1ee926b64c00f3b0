"""Pure domain code: DTOs, validation, and the clock abstraction."""

from pos_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from pos_kernel.domain.dtos import (
    BestSeller,
    CheckoutLine,
    OrderLineRecord,
    OrderRecord,
    OversellPolicy,
    ProductQuote,
    SalesSummary,
)
from pos_kernel.domain.validation import parse_checkout_request, validate_checkout_lines

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "CheckoutLine",
    "ProductQuote",
    "OrderLineRecord",
    "OrderRecord",
    "OversellPolicy",
    "BestSeller",
    "SalesSummary",
    "parse_checkout_request",
    "validate_checkout_lines",
]
