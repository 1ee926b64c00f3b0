"""
OrderSelector -- read access to committed orders.

Orders are rebuilt from their snapshot columns only; the live products
table is never joined, so a renamed or deleted product does not change how
a past order reads.
"""

from sqlalchemy import select

from pos_kernel.domain.dtos import OrderLineRecord, OrderRecord
from pos_kernel.exceptions import OrderNotFoundError
from pos_kernel.models.order import Order
from pos_kernel.selectors.base import BaseSelector


class OrderSelector(BaseSelector[Order]):
    """Queries over orders and their lines."""

    def _to_dto(self, order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.id,
            total_amount=order.total_amount,
            created_at=self._as_utc(order.created_at),
            lines=tuple(
                OrderLineRecord(
                    position=line.position,
                    product_id=line.product_id,
                    product_name=line.product_name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in order.lines
            ),
        )

    def get_order(self, order_id: int) -> OrderRecord:
        """
        Get an order with its lines.

        Raises:
            OrderNotFoundError: If the order doesn't exist.
        """
        order = self.session.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return self._to_dto(order)

    def list_orders(self, limit: int = 50, offset: int = 0) -> list[OrderRecord]:
        """Most recent orders first."""
        stmt = (
            select(Order)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._to_dto(order) for order in self.session.execute(stmt).scalars()]
