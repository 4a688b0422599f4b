"""
Client-side query engine: search, filter and sort over an order snapshot.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable

from orders.domain.errors import ValidationError
from orders.domain.lifecycle import is_valid_payment_status, is_valid_status
from orders.domain.order import Order

ALL = "all"

FILTERED_EMPTY_MESSAGE = "Try adjusting your filters"
UNFILTERED_EMPTY_MESSAGE = "No orders have been placed yet"


class SortKey(str, Enum):
    """Sortable order fields."""
    DATE = "date"
    AMOUNT = "amount"
    STATUS = "status"


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


class OrderQuery:
    """Search term, filters and sort parameters for one listing."""

    def __init__(
        self,
        term: str | None = "",
        status: str | None = ALL,
        payment_status: str | None = ALL,
        sort_by: SortKey | str | None = SortKey.DATE,
        sort_order: SortOrder | str | None = SortOrder.DESC,
    ):
        status = status or ALL
        payment_status = payment_status or ALL

        if status != ALL and not is_valid_status(status):
            raise ValidationError(f"Invalid status filter: {status}", field="status")
        if payment_status != ALL and not is_valid_payment_status(payment_status):
            raise ValidationError(
                f"Invalid payment filter: {payment_status}", field="paymentStatus"
            )
        try:
            sort_by = SortKey(sort_by or SortKey.DATE)
        except ValueError:
            raise ValidationError(f"Invalid sort key: {sort_by}", field="sortBy") from None
        try:
            sort_order = SortOrder(sort_order or SortOrder.DESC)
        except ValueError:
            raise ValidationError(f"Invalid sort order: {sort_order}", field="sortOrder") from None

        self.term = term or ""
        self.status = getattr(status, "value", status)
        self.payment_status = getattr(payment_status, "value", payment_status)
        self.sort_by = sort_by
        self.sort_order = sort_order

    @property
    def is_filtered(self) -> bool:
        return bool(self.term) or self.status != ALL or self.payment_status != ALL

    def __repr__(self) -> str:
        return (
            f"OrderQuery(term={self.term!r}, status={self.status!r}, "
            f"payment_status={self.payment_status!r}, sort_by={self.sort_by.value!r}, "
            f"sort_order={self.sort_order.value!r})"
        )


def matches_term(order: Order, term: str) -> bool:
    """
    Case-insensitive substring match against id, customer name or email.

    A single term is OR-ed across the three fields. Orders without a customer
    can only match on id.
    """
    if not term:
        return True
    needle = term.casefold()

    if needle in order.id.casefold():
        return True
    customer = order.customer
    if customer is None:
        return False
    for value in (customer.name, customer.email):
        if value and needle in value.casefold():
            return True
    return False


def _sort_value(order: Order, sort_by: SortKey):
    if sort_by is SortKey.AMOUNT:
        return order.amount
    if sort_by is SortKey.STATUS:
        # Lexical on the value, not lifecycle order
        return order.status.value
    return order.date


def run_query(orders: Iterable[Order], query: OrderQuery) -> list[Order]:
    """
    Filter and sort orders. The input collection is never mutated.

    Sorting is stable on ascending keys; ``desc`` is the exact reverse of the
    ascending result, so equal keys come out in reverse input order.
    """
    result = [
        order
        for order in orders
        if matches_term(order, query.term)
        and (query.status == ALL or order.status.value == query.status)
        and (query.payment_status == ALL or order.payment_status.value == query.payment_status)
    ]
    result.sort(key=lambda order: _sort_value(order, query.sort_by))
    if query.sort_order is SortOrder.DESC:
        result.reverse()
    return result


def empty_state_message(query: OrderQuery) -> str:
    """Message shown when a listing comes back empty."""
    return FILTERED_EMPTY_MESSAGE if query.is_filtered else UNFILTERED_EMPTY_MESSAGE
