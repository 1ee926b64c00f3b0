"""ORM models for the POS kernel."""

from pos_kernel.models.order import Order, OrderLine
from pos_kernel.models.product import Category, Product

__all__ = [
    "Category",
    "Product",
    "Order",
    "OrderLine",
]
