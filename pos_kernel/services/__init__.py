"""Unit-of-work services: checkout orchestration and its building blocks."""

from pos_kernel.services.checkout_service import CheckoutService
from pos_kernel.services.inventory_service import InventoryMutator
from pos_kernel.services.order_writer import OrderWriter
from pos_kernel.services.product_resolver import ProductResolver

__all__ = [
    "CheckoutService",
    "InventoryMutator",
    "OrderWriter",
    "ProductResolver",
]
