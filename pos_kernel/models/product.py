"""
Module: pos_kernel.models.product
Responsibility: ORM persistence for sellable products and their categories.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - unit_price is a non-negative integer (CHECK constraint).
    - stock_quantity is only ever decremented by checkout through a relative,
      store-evaluated UPDATE (see services/inventory_service.py).  Whether it
      may go below zero is decided by the oversell policy, not by the schema,
      so that backorder-style deployments remain possible.

Failure modes:
    - IntegrityError on negative unit_price or unknown category_id.
"""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_kernel.db.base import Base, IdentityInteger
from pos_kernel.db.types import Amount, Name, Quantity


class Category(Base):
    """Product grouping.  Carries no checkout semantics."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        Name,
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    products: Mapped[list["Product"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<Category {self.id} {self.name!r}>"


class Product(Base):
    """
    A sellable product with a single stock pool.

    Contract:
        Owned by the inventory subsystem.  Checkout reads name, unit_price
        and stock_quantity, and decrements stock_quantity; it never writes
        any other column.
    """

    __tablename__ = "products"

    __table_args__ = (
        CheckConstraint("unit_price >= 0", name="ck_products_unit_price_non_negative"),
        Index("idx_products_category", "category_id"),
    )

    name: Mapped[str] = mapped_column(
        Name,
        nullable=False,
    )

    # Integer unit of account
    unit_price: Mapped[int] = mapped_column(
        Amount,
        nullable=False,
    )

    stock_quantity: Mapped[int] = mapped_column(
        Quantity,
        nullable=False,
        default=0,
    )

    category_id: Mapped[int | None] = mapped_column(
        IdentityInteger,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    category: Mapped[Category | None] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.name!r} stock={self.stock_quantity}>"
