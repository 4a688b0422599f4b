"""
Tests for dashboard aggregates.
"""
from decimal import Decimal

from django.test import SimpleTestCase

from orders.domain.order import OrderStatus, PaymentStatus
from orders.domain.query import OrderQuery, run_query
from orders.domain.stats import compute_stats
from orders.test.factories import make_order


class OrderStatsTest(SimpleTestCase):
    """Tests for aggregate computation."""

    def setUp(self):
        self.orders = [
            make_order("A1", status="pending", amount="10", date="2024-01-01"),
            make_order("A2", status="delivered", payment_status="paid", amount="20", date="2024-01-02"),
        ]

    def test_scenario_revenue(self):
        """Test revenue over the unfiltered collection."""
        stats = compute_stats(self.orders)
        self.assertEqual(stats.total_count, 2)
        self.assertEqual(stats.total_revenue, Decimal("30"))
        self.assertEqual(stats.formatted_revenue, "30.00")
        self.assertEqual(stats.count_for("pending"), 1)
        self.assertEqual(stats.count_for(OrderStatus.DELIVERED), 1)

    def test_counts_partition_total(self):
        """Test per-status counts sum to the total count."""
        orders = self.orders + [
            make_order("B1", status="shipped"),
            make_order("B2", status="cancelled", payment_status="failed"),
            make_order("B3", status="pending"),
        ]
        stats = compute_stats(orders)
        self.assertEqual(sum(stats.count_by_status.values()), stats.total_count)
        self.assertEqual(sum(stats.count_by_payment_status.values()), stats.total_count)
        self.assertEqual(stats.count_for("confirmed"), 0)
        self.assertEqual(stats.count_by_payment_status[PaymentStatus.FAILED], 1)

    def test_every_status_is_reported(self):
        """Test empty collection still reports each status."""
        stats = compute_stats([])
        self.assertEqual(stats.total_count, 0)
        self.assertEqual(set(stats.count_by_status), set(OrderStatus))
        self.assertEqual(stats.formatted_revenue, "0.00")

    def test_revenue_keeps_full_precision(self):
        """Test rounding happens only when formatting."""
        stats = compute_stats([
            make_order("A1", amount="0.005"),
            make_order("A2", amount="10.001"),
        ])
        self.assertEqual(stats.total_revenue, Decimal("10.006"))
        self.assertEqual(stats.formatted_revenue, "10.01")

    def test_revenue_is_independent_of_filters(self):
        """Test aggregates over the full collection ignore listing filters."""
        visible = run_query(self.orders, OrderQuery(status="pending"))
        self.assertEqual(len(visible), 1)
        stats = compute_stats(self.orders)
        self.assertEqual(stats.total_revenue, sum(order.amount for order in self.orders))
