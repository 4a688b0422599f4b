"""
Dashboard aggregates over the full order collection.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from orders.domain.order import Order, OrderStatus, PaymentStatus

CENTS = Decimal("0.01")


class OrderStats:
    """Summary statistics for the order dashboard."""

    def __init__(
        self,
        total_count: int,
        count_by_status: dict[OrderStatus, int],
        count_by_payment_status: dict[PaymentStatus, int],
        total_revenue: Decimal,
    ):
        self.total_count = total_count
        self.count_by_status = count_by_status
        self.count_by_payment_status = count_by_payment_status
        self.total_revenue = total_revenue

    def count_for(self, status: OrderStatus | str) -> int:
        return self.count_by_status[OrderStatus(status)]

    @property
    def formatted_revenue(self) -> str:
        """Revenue rounded to cents for display; the stored total keeps full precision."""
        return str(self.total_revenue.quantize(CENTS, rounding=ROUND_HALF_UP))


def compute_stats(orders: Iterable[Order]) -> OrderStats:
    """Compute aggregates. Always pass the full snapshot, never a filtered view."""
    count_by_status = {status: 0 for status in OrderStatus}
    count_by_payment_status = {status: 0 for status in PaymentStatus}
    total_revenue = Decimal("0")
    total_count = 0

    for order in orders:
        total_count += 1
        count_by_status[order.status] += 1
        count_by_payment_status[order.payment_status] += 1
        total_revenue += order.amount

    return OrderStats(
        total_count=total_count,
        count_by_status=count_by_status,
        count_by_payment_status=count_by_payment_status,
        total_revenue=total_revenue,
    )
