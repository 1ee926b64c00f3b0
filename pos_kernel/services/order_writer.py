"""
OrderWriter -- persists order headers and their lines.

Responsibility:
    Inserts the order header (the store assigns its id), then one row per
    line tagged with that id.  Both run inside the checkout transaction, so
    a failure on any line leaves no header behind once the caller rolls back.

Architecture position:
    Kernel > Services.  Called by CheckoutService after every line has been
    priced and its stock decremented.

Invariants enforced:
    - Header before lines (lines carry a foreign key to the header).
    - subtotal == unit_price * quantity, enforced by the schema
      (ck_order_lines_subtotal); a violation surfaces as IntegrityError.
"""

from datetime import datetime

from pos_kernel.domain.dtos import OrderLineRecord
from pos_kernel.logging_config import get_logger
from pos_kernel.models.order import Order, OrderLine
from pos_kernel.services.base import BaseService

logger = get_logger("services.order_writer")


class OrderWriter(BaseService[Order]):
    """Writes immutable order rows within the caller's unit of work."""

    def create_order(self, total_amount: int, created_at: datetime) -> int:
        """
        Insert an order header and return its store-assigned id.

        The header is flushed immediately so the id is available for lines.
        """
        order = Order(total_amount=total_amount, created_at=created_at)
        self.session.add(order)
        self.session.flush()
        return order.id

    def add_line(self, order_id: int, line: OrderLineRecord) -> None:
        """Insert one order line under an existing header."""
        self.session.add(
            OrderLine(
                order_id=order_id,
                position=line.position,
                product_id=line.product_id,
                product_name=line.product_name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                subtotal=line.subtotal,
            )
        )
        self.session.flush()
        logger.debug(
            "order_line_written",
            extra={"order_id": order_id, "position": line.position},
        )
