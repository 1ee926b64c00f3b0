"""
Module: pos_kernel.models.order
Responsibility: ORM persistence for orders and order lines -- the durable
    record of every completed checkout.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - total_amount == sum(order_lines.subtotal) (written together by
      OrderWriter inside the checkout transaction).
    - subtotal == unit_price * quantity (CHECK constraint).
    - quantity > 0 (CHECK constraint).
    - Line position is unique per order and mirrors the request order.
    - product_name and unit_price are snapshots taken at checkout time.
      product_id is NOT a foreign key: renaming or deleting a
      product must never alter or orphan historical orders.

Failure modes:
    - IntegrityError on a line that references a missing order, violates
      the subtotal/quantity checks, or reuses a position.

Audit relevance:
    Orders are never updated after insert.  Reporting reads only these rows
    and their snapshot columns.
"""

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_kernel.db.base import Base, IdentityInteger, TimestampedBase
from pos_kernel.db.types import Amount, Name, Quantity


class Order(TimestampedBase):
    """
    Order header.

    Contract:
        Created exactly once per successful checkout, before its lines,
        within the same transaction that decremented stock.
    """

    __tablename__ = "orders"

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_non_negative"),
        Index("idx_orders_created_at", "created_at"),
    )

    total_amount: Mapped[int] = mapped_column(
        Amount,
        nullable=False,
    )

    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order",
        order_by="OrderLine.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Order {self.id} total={self.total_amount}>"


class OrderLine(Base):
    """One priced line of an order."""

    __tablename__ = "order_lines"

    __table_args__ = (
        UniqueConstraint("order_id", "position", name="uq_order_lines_position"),
        CheckConstraint("quantity > 0", name="ck_order_lines_quantity_positive"),
        CheckConstraint(
            "subtotal = unit_price * quantity",
            name="ck_order_lines_subtotal",
        ),
        Index("idx_order_lines_product", "product_id"),
    )

    order_id: Mapped[int] = mapped_column(
        IdentityInteger,
        ForeignKey("orders.id"),
        nullable=False,
    )

    # 0-based index of the line in the checkout request
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    product_id: Mapped[int] = mapped_column(
        IdentityInteger,
        nullable=False,
    )

    product_name: Mapped[str] = mapped_column(
        Name,
        nullable=False,
    )

    unit_price: Mapped[int] = mapped_column(
        Amount,
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(
        Quantity,
        nullable=False,
    )

    subtotal: Mapped[int] = mapped_column(
        Amount,
        nullable=False,
    )

    order: Mapped[Order] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        return f"<OrderLine {self.order_id}#{self.position} product={self.product_id} qty={self.quantity}>"

