"""
InventoryMutator -- stock decrements inside the checkout transaction.

Responsibility:
    Applies ``stock_quantity -= quantity`` for a product as a single
    store-evaluated UPDATE, optionally guarded by ``stock_quantity >= quantity``.
    Also takes row-level locks on every product a cart references before any
    line is processed.

Architecture position:
    Kernel > Services.  Called by CheckoutService; never used standalone.

Invariants enforced:
    - No lost updates: the new stock is computed by the store from the
      current row version, never from a value read earlier in Python.
      Under READ COMMITTED a second transaction blocked on the same row
      re-evaluates the guard against the committed result.
    - Lock ordering: lock_products() locks rows in ascending id order, so
      two carts sharing products cannot deadlock on each other.
    - Under OversellPolicy.REJECT stock never goes below zero.

Failure modes:
    - ProductNotFoundError: no row matched and the id does not exist.
    - InsufficientStockError: the guard rejected the update.
    - SQLAlchemyError: connectivity or constraint failure (propagated).
"""

from collections.abc import Iterable

from sqlalchemy import select, update

from pos_kernel.domain.dtos import OversellPolicy
from pos_kernel.exceptions import InsufficientStockError, ProductNotFoundError
from pos_kernel.logging_config import get_logger
from pos_kernel.models.product import Product
from pos_kernel.services.base import BaseService

logger = get_logger("services.inventory")


class InventoryMutator(BaseService[Product]):
    """Stock mutations for the caller's unit of work."""

    def lock_products(self, product_ids: Iterable[int]) -> set[int]:
        """
        Take exclusive row locks (SELECT ... FOR UPDATE) on the given products.

        Locks are held until the caller's transaction ends.  Ids that do not
        exist are simply not locked; resolving them later reports not-found.

        Returns:
            The subset of ids that exist.
        """
        ids = sorted(set(product_ids))
        if not ids:
            return set()

        stmt = (
            select(Product.id)
            .where(Product.id.in_(ids))
            .order_by(Product.id)
            .with_for_update()
        )
        locked = set(self.session.execute(stmt).scalars().all())
        logger.debug(
            "products_locked",
            extra={"requested": len(ids), "locked": len(locked)},
        )
        return locked

    def decrement(
        self,
        product_id: int,
        quantity: int,
        policy: OversellPolicy = OversellPolicy.REJECT,
    ) -> None:
        """
        Subtract ``quantity`` from a product's stock.

        Preconditions:
            - quantity > 0 (validated upstream).
            - Called inside an open transaction.

        Raises:
            ProductNotFoundError: If the product does not exist.
            InsufficientStockError: If policy is REJECT and stock < quantity.
        """
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(stock_quantity=Product.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        if policy is OversellPolicy.REJECT:
            stmt = stmt.where(Product.stock_quantity >= quantity)

        result = self.session.execute(stmt)
        if result.rowcount == 1:
            logger.debug(
                "stock_decremented",
                extra={"product_id": product_id, "quantity": quantity},
            )
            return

        raise InsufficientStockError(product_id, quantity, self.stock_of(product_id))

    def stock_of(self, product_id: int) -> int:
        """Current stock as seen by this transaction."""
        available = self.session.execute(
            select(Product.stock_quantity).where(Product.id == product_id)
        ).scalar_one_or_none()
        if available is None:
            raise ProductNotFoundError(product_id)
        return available
