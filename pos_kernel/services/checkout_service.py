"""
CheckoutService -- commits a multi-line cart as one order.

Responsibility:
    The single entry point the request layer calls to sell a cart.  Validates
    the lines, then inside ONE unit of work prices each line, decrements its
    stock, and writes the order header and lines.  Either all of that becomes
    durable or none of it does.

Architecture position:
    Kernel > Services.  Owns the transaction boundary (via session_scope) and
    composes ProductResolver, InventoryMutator, and OrderWriter, each of which
    receives the active session explicitly.

Invariants enforced:
    - Atomicity: commit happens only after every line and the order rows were
      written; any exception rolls back everything, including stock already
      decremented for earlier lines of the same cart.
    - total_amount == sum of line subtotals; subtotal == unit_price * quantity
      using the price read inside the transaction.
    - Lines are processed and persisted in request order.
    - Oversell is governed by OversellPolicy (REJECT by default).

Failure modes:
    - CheckoutValidationError: raised before any storage access.
    - ProductNotFoundError / InsufficientStockError: transaction rolled back.
    - StorageError: any SQLAlchemy failure, including on commit; transaction
      rolled back, original exception chained.  Not retried.
"""

import time
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pos_kernel.db.engine import session_scope
from pos_kernel.db.types import multiply_amount
from pos_kernel.domain.clock import Clock, SystemClock
from pos_kernel.domain.dtos import (
    CheckoutLine,
    OrderLineRecord,
    OrderRecord,
    OversellPolicy,
)
from pos_kernel.domain.validation import parse_checkout_request, validate_checkout_lines
from pos_kernel.exceptions import ProductError, StorageError
from pos_kernel.logging_config import LogContext, get_logger
from pos_kernel.services.inventory_service import InventoryMutator
from pos_kernel.services.order_writer import OrderWriter
from pos_kernel.services.product_resolver import ProductResolver

logger = get_logger("services.checkout")


class CheckoutService:
    """
    Orchestrates checkout: validate, price, decrement, persist, commit.

    One instance may be shared by many request workers; every call opens its
    own session from the injected factory and releases it before returning.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Clock | None = None,
        oversell_policy: OversellPolicy = OversellPolicy.REJECT,
        lock_rows: bool = True,
    ):
        """
        Args:
            session_factory: Creates the session that backs each checkout.
            clock: Source of order timestamps. Defaults to SystemClock.
            oversell_policy: REJECT refuses carts that exceed stock;
                ALLOW_BACKORDER lets stock go negative.
            lock_rows: If True, lock every product in the cart (ascending id)
                before processing lines.
        """
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._oversell_policy = oversell_policy
        self._lock_rows = lock_rows

    @property
    def oversell_policy(self) -> OversellPolicy:
        return self._oversell_policy

    def checkout(self, lines: Sequence[CheckoutLine]) -> OrderRecord:
        """
        Sell a cart.

        Args:
            lines: Requested lines, in the order they should appear on the order.

        Returns:
            The committed order.

        Raises:
            CheckoutValidationError: Bad input; nothing was touched.
            ProductNotFoundError: A line references an unknown product.
            InsufficientStockError: A line exceeds stock (REJECT policy only).
            StorageError: The store failed; nothing was persisted.
        """
        validated = validate_checkout_lines(lines)

        with LogContext.bind(checkout_id=str(uuid4())):
            logger.info(
                "checkout_started",
                extra={
                    "line_count": len(validated),
                    "oversell_policy": self._oversell_policy.value,
                },
            )
            t0 = time.monotonic()
            try:
                with session_scope(self._session_factory) as session:
                    record = self._commit_order(session, validated)
            except ProductError as exc:
                logger.info(
                    "checkout_rejected",
                    extra={
                        "code": exc.code,
                        "product_id": getattr(exc, "product_id", None),
                    },
                )
                raise
            except SQLAlchemyError as exc:
                logger.error("checkout_failed", exc_info=True)
                raise StorageError("checkout", f"{type(exc).__name__}: {exc}") from exc

            logger.info(
                "checkout_completed",
                extra={
                    "order_id": record.id,
                    "total_amount": record.total_amount,
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
            return record

    def checkout_request(self, payload: Any) -> OrderRecord:
        """Parse a raw request body and sell it (see parse_checkout_request)."""
        return self.checkout(parse_checkout_request(payload))

    def _commit_order(
        self, session: Session, lines: Sequence[CheckoutLine]
    ) -> OrderRecord:
        resolver = ProductResolver(session)
        inventory = InventoryMutator(session)
        writer = OrderWriter(session)

        if self._lock_rows:
            inventory.lock_products(line.product_id for line in lines)

        total_amount = 0
        pending: list[OrderLineRecord] = []
        for position, line in enumerate(lines):
            quote = resolver.resolve(line.product_id)
            subtotal = multiply_amount(quote.unit_price, line.quantity)
            total_amount += subtotal
            logger.debug(
                "checkout_line_priced",
                extra={
                    "position": position,
                    "product_id": quote.product_id,
                    "unit_price": quote.unit_price,
                    "quantity": line.quantity,
                    "subtotal": subtotal,
                },
            )

            inventory.decrement(line.product_id, line.quantity, self._oversell_policy)

            pending.append(
                OrderLineRecord(
                    position=position,
                    product_id=quote.product_id,
                    product_name=quote.name,
                    unit_price=quote.unit_price,
                    quantity=line.quantity,
                    subtotal=subtotal,
                )
            )

        created_at = self._clock.now()
        order_id = writer.create_order(total_amount, created_at)
        for pending_line in pending:
            writer.add_line(order_id, pending_line)

        with LogContext.bind(order_id=str(order_id)):
            logger.info(
                "order_persisted",
                extra={"total_amount": total_amount, "line_count": len(pending)},
            )

        return OrderRecord(
            id=order_id,
            total_amount=total_amount,
            created_at=created_at,
            lines=tuple(pending),
        )
