"""
ProductResolver -- prices checkout lines against live product rows.

Responsibility:
    Looks up the name, unit price, and stock of a product inside the
    checkout transaction, so the price used for a line is the one in force
    when its stock is decremented.

Architecture position:
    Kernel > Services.  Called by CheckoutService once per line.

Failure modes:
    - ProductNotFoundError if no row has the id.  This is a client error,
      distinct from the SQLAlchemyError a failing store raises.
"""

from sqlalchemy import select

from pos_kernel.domain.dtos import ProductQuote
from pos_kernel.exceptions import ProductNotFoundError
from pos_kernel.models.product import Product
from pos_kernel.services.base import BaseService


class ProductResolver(BaseService[Product]):
    """Read-only product lookups scoped to the caller's unit of work."""

    def resolve(self, product_id: int) -> ProductQuote:
        """
        Read a product's current name, price, and stock.

        Columns are selected directly rather than loading the entity so that
        repeated lookups of the same product observe decrements issued
        earlier in the transaction.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        stmt = select(
            Product.id,
            Product.name,
            Product.unit_price,
            Product.stock_quantity,
        ).where(Product.id == product_id)
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            raise ProductNotFoundError(product_id)

        return ProductQuote(
            product_id=row.id,
            name=row.name,
            unit_price=row.unit_price,
            stock_quantity=row.stock_quantity,
        )
