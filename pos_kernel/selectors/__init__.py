"""Read-only selectors over committed orders."""

from pos_kernel.selectors.order_selector import OrderSelector
from pos_kernel.selectors.sales_selector import SalesSelector

__all__ = ["OrderSelector", "SalesSelector"]
