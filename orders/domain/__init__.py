from orders.domain.order import Customer, Order, OrderStatus, PaymentStatus
from orders.domain.query import OrderQuery, SortKey, SortOrder, run_query
from orders.domain.stats import OrderStats, compute_stats

__all__ = [
    "Customer",
    "Order",
    "OrderStatus",
    "PaymentStatus",
    "OrderQuery",
    "SortKey",
    "SortOrder",
    "run_query",
    "OrderStats",
    "compute_stats",
]
