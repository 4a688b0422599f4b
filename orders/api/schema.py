"""
GraphQL schema definition using Ariadne.
"""
from ariadne import (
    QueryType,
    MutationType,
    ObjectType,
    make_executable_schema,
    ScalarType,
    load_schema_from_path,
)
from decimal import Decimal
from datetime import datetime
from pathlib import Path

from orders.api.middleware import ErrorHandler
from orders.domain.errors import NotFoundError, OrderDeskError, ReloadPendingError
from orders.domain.lifecycle import PAYMENT_STATUS_CHOICES, STATUS_CHOICES
from orders.domain.order import parse_order_date
from orders.domain.query import OrderQuery, SortKey, empty_state_message

# Load schema from .graphql files
SCHEMAS_DIR = Path(__file__).parent / "schemas"
type_defs = "\n".join([
    load_schema_from_path(SCHEMAS_DIR / "common.graphql"),
    load_schema_from_path(SCHEMAS_DIR / "query.graphql"),
    load_schema_from_path(SCHEMAS_DIR / "mutation.graphql"),
])

query = QueryType()
mutation = MutationType()
order = ObjectType("Order")
order_stats = ObjectType("OrderStats")


def _service(info):
    return info.context["service"]


def _loaded_service(info):
    """Service whose store has been populated at least once."""
    service = _service(info)
    if service.store.generation == 0:
        service.refresh()
    return service


@query.field("orders")
def resolve_orders(_, info, term=None, status=None, paymentStatus=None, sortBy=None, sortOrder=None):
    """Resolve filtered and sorted order listing."""
    order_query = OrderQuery(
        term=term,
        status=status,
        payment_status=paymentStatus,
        sort_by=sortBy,
        sort_order=sortOrder,
    )
    items = _loaded_service(info).list_orders(order_query)
    return {
        "items": items,
        "total": len(items),
        "emptyMessage": None if items else empty_state_message(order_query),
    }


@query.field("order")
def resolve_order(_, info, id):
    """Resolve single order from the snapshot."""
    try:
        return _loaded_service(info).store.get_order(id)
    except NotFoundError:
        return None


@query.field("orderStats")
def resolve_order_stats(_, info):
    """Resolve dashboard totals."""
    return _loaded_service(info).stats()


@query.field("orderOptions")
def resolve_order_options(*_):
    """Resolve option lists for filter and edit forms."""
    return {
        "statuses": list(STATUS_CHOICES),
        "paymentStatuses": list(PAYMENT_STATUS_CHOICES),
        "sortKeys": [key.value for key in SortKey],
    }


@mutation.field("refreshOrders")
def resolve_refresh_orders(_, info):
    """Resolve refresh mutation."""
    service = _service(info)
    try:
        accepted = service.refresh()
    except OrderDeskError as e:
        return {
            "success": False,
            "message": e.message,
            "generation": service.store.generation,
        }
    return {
        "success": True,
        "message": None if accepted else "A newer refresh is in progress",
        "generation": service.store.generation,
    }


@mutation.field("updateOrderStatus")
def resolve_update_order_status(_, info, orderId, status, paymentStatus=None):
    """Resolve order status update mutation."""
    try:
        updated = _service(info).update_order(orderId, status, paymentStatus)
    except ReloadPendingError as e:
        # Change is persisted; the fresh order arrives with the newer reload
        return {"success": True, "code": e.code, "message": e.message, "order": None}
    except OrderDeskError as e:
        return ErrorHandler.error_payload(e)

    if updated is None:
        return ErrorHandler.error_payload(NotFoundError(orderId))
    return {"success": True, "message": "Order updated successfully", "order": updated}


@mutation.field("deleteOrder")
def resolve_delete_order(_, info, orderId):
    """Resolve order delete mutation."""
    try:
        deleted = _service(info).delete_order(orderId)
    except OrderDeskError as e:
        return ErrorHandler.error_payload(e)

    if not deleted:
        return ErrorHandler.error_payload(NotFoundError(orderId))
    return {"success": True, "message": "Order deleted successfully", "order": None}


order.set_alias("displayId", "display_id")
order.set_alias("customerName", "display_name")
order.set_alias("customerEmail", "display_email")
order.set_alias("itemsCount", "items_count")
order.set_alias("statusLabel", "status_label")
order.set_alias("paymentMethod", "payment_method")
order.set_alias("paymentStatusLabel", "payment_status_label")
order.set_alias("isCashOnDelivery", "is_cash_on_delivery")


@order.field("status")
def resolve_order_status(order_obj, info):
    return order_obj.status.value


@order.field("paymentStatus")
def resolve_order_payment_status(order_obj, info):
    return order_obj.payment_status.value


order_stats.set_alias("totalCount", "total_count")
order_stats.set_alias("totalRevenue", "total_revenue")
order_stats.set_alias("formattedRevenue", "formatted_revenue")


@order_stats.field("countByStatus")
def resolve_count_by_status(stats, info):
    return [
        {"status": status.value, "count": count}
        for status, count in stats.count_by_status.items()
    ]


@order_stats.field("countByPaymentStatus")
def resolve_count_by_payment_status(stats, info):
    return [
        {"status": status.value, "count": count}
        for status, count in stats.count_by_payment_status.items()
    ]


# Define custom scalars
decimal_scalar = ScalarType("Decimal")
datetime_scalar = ScalarType("DateTime")


@decimal_scalar.serializer
def serialize_decimal(value):
    """Serialize Decimal to string."""
    return str(value)


@decimal_scalar.value_parser
def parse_decimal_value(value):
    """Parse Decimal from string."""
    return Decimal(str(value))


@datetime_scalar.serializer
def serialize_datetime(value):
    """Serialize DateTime to ISO format string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


@datetime_scalar.value_parser
def parse_datetime_value(value):
    """Parse DateTime from ISO string or epoch milliseconds."""
    if value is None:
        return None
    return parse_order_date(value)


# Create executable schema
schema = make_executable_schema(
    type_defs,
    query,
    mutation,
    order,
    order_stats,
    datetime_scalar,
    decimal_scalar,
)
