"""
Data Transfer Objects for the POS kernel.

Responsibility:
    Immutable value objects that cross layer boundaries.  Services and
    selectors return these instead of ORM rows, so callers never hold a
    live session-bound object and never trigger lazy loads after commit.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  No SQLAlchemy imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class OversellPolicy(str, Enum):
    """What checkout does when a line asks for more than is on the shelf.

    REJECT fails the whole checkout with InsufficientStockError.
    ALLOW_BACKORDER decrements unconditionally and lets stock go negative.
    """

    REJECT = "reject"
    ALLOW_BACKORDER = "allow_backorder"


@dataclass(frozen=True)
class CheckoutLine:
    """One requested line of a cart."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class ProductQuote:
    """Product state observed inside the checkout transaction."""

    product_id: int
    name: str
    unit_price: int
    stock_quantity: int


@dataclass(frozen=True)
class OrderLineRecord:
    """A persisted (or about to be persisted) order line."""

    position: int
    product_id: int
    product_name: str
    unit_price: int
    quantity: int
    subtotal: int

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "subtotal": self.subtotal,
        }


@dataclass(frozen=True)
class OrderRecord:
    """
    A committed order.

    Guarantees:
        - total_amount == sum(line.subtotal for line in lines)
        - lines are in request order
    """

    id: int
    total_amount: int
    created_at: datetime
    lines: tuple[OrderLineRecord, ...]

    @property
    def item_count(self) -> int:
        """Total units sold across all lines."""
        return sum(line.quantity for line in self.lines)

    def to_dict(self) -> dict:
        """Response body for a successful checkout."""
        return {
            "id": self.id,
            "total_amount": self.total_amount,
            "created_at": self.created_at.isoformat(),
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass(frozen=True)
class BestSeller:
    """Product that sold the most units in a reporting window."""

    product_name: str
    quantity_sold: int


@dataclass(frozen=True)
class SalesSummary:
    """Revenue and order count for an inclusive date window."""

    start_date: date
    end_date: date
    total_revenue: int
    order_count: int
    best_seller: BestSeller | None

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_revenue": self.total_revenue,
            "order_count": self.order_count,
            "best_seller": (
                {
                    "product_name": self.best_seller.product_name,
                    "quantity_sold": self.best_seller.quantity_sold,
                }
                if self.best_seller is not None
                else None
            ),
        }
