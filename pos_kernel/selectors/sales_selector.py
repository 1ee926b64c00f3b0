"""
SalesSelector -- revenue summaries over committed orders.

Responsibility:
    Answers "how much did we sell between these dates, in how many orders,
    and what sold best?"  Windows are inclusive calendar days in UTC.

Audit relevance:
    Everything is derived from order and order-line rows; there are no
    stored running totals to drift out of sync.
"""

from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import func, select

from pos_kernel.domain.clock import Clock
from pos_kernel.domain.dtos import BestSeller, SalesSummary
from pos_kernel.models.order import Order, OrderLine
from pos_kernel.selectors.base import BaseSelector


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class SalesSelector(BaseSelector[Order]):
    """Aggregate sales queries."""

    def summary(self, start_date: date, end_date: date) -> SalesSummary:
        """
        Summarize sales for ``start_date`` through ``end_date`` inclusive.

        Raises:
            ValueError: If end_date is before start_date.
        """
        if end_date < start_date:
            raise ValueError(f"end_date {end_date} is before start_date {start_date}")

        lower = _day_start(start_date)
        upper = _day_start(end_date + timedelta(days=1))
        in_window = (Order.created_at >= lower, Order.created_at < upper)

        revenue, count = self.session.execute(
            select(
                func.coalesce(func.sum(Order.total_amount), 0),
                func.count(Order.id),
            ).where(*in_window)
        ).one()

        quantity_sold = func.sum(OrderLine.quantity).label("quantity_sold")
        best_row = self.session.execute(
            select(
                OrderLine.product_id,
                func.max(OrderLine.product_name).label("product_name"),
                quantity_sold,
            )
            .join(Order, Order.id == OrderLine.order_id)
            .where(*in_window)
            .group_by(OrderLine.product_id)
            .order_by(quantity_sold.desc(), OrderLine.product_id)
            .limit(1)
        ).one_or_none()

        best_seller = None
        if best_row is not None:
            best_seller = BestSeller(
                product_name=best_row.product_name,
                quantity_sold=int(best_row.quantity_sold),
            )

        return SalesSummary(
            start_date=start_date,
            end_date=end_date,
            total_revenue=int(revenue),
            order_count=int(count),
            best_seller=best_seller,
        )

    def today(self, clock: Clock) -> SalesSummary:
        """Summarize sales for the clock's current UTC day."""
        today = clock.now().astimezone(timezone.utc).date()
        return self.summary(today, today)
