"""
Domain model for the Order read model mirrored from the order service.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from orders.domain.errors import ValidationError

NOT_AVAILABLE = "N/A"


class OrderStatus(str, Enum):
    """Order fulfillment status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment settlement status enumeration."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class Customer:
    """Customer reference value object."""

    def __init__(self, name: str | None = None, email: str | None = None):
        self.name = name
        self.email = email

    @classmethod
    def from_payload(cls, data: Any) -> Customer | None:
        """Build customer from a populated user reference, if any."""
        # Unpopulated references arrive as a bare id string
        if not isinstance(data, dict):
            return None
        return cls(name=data.get("name"), email=data.get("email"))


def parse_order_date(value: Any) -> datetime:
    """Parse ISO-8601 string or epoch milliseconds into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid order date: {value!r}")
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid order date: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Order:
    """Order snapshot as last reported by the order service."""

    def __init__(
        self,
        id: str,
        date: datetime,
        amount: Decimal,
        status: OrderStatus | str = OrderStatus.PENDING,
        payment_status: PaymentStatus | str = PaymentStatus.PENDING,
        customer: Customer | None = None,
        items: list | tuple | None = None,
        payment_method: str = "",
    ):
        if amount < 0:
            raise ValueError("Amount must be non-negative")

        try:
            status = OrderStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid order status: {status}", field="status") from None
        try:
            payment_status = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationError(
                f"Invalid payment status: {payment_status}", field="paymentStatus"
            ) from None

        self._id = str(id)
        self._date = date
        self._amount = amount
        self._status = status
        self._payment_status = payment_status
        self._customer = customer
        self._items = tuple(items or ())
        self._payment_method = payment_method or ""

    @classmethod
    def from_payload(cls, data: dict) -> Order:
        """Build order from the order service wire record."""
        order_id = data.get("_id", data.get("id"))
        if not order_id:
            raise ValueError("Order record has no id")
        try:
            amount = Decimal(str(data.get("amount", 0)))
        except InvalidOperation:
            raise ValueError(f"Invalid amount for order {order_id}") from None
        if not amount.is_finite():
            raise ValueError(f"Invalid amount for order {order_id}")

        return cls(
            id=order_id,
            date=parse_order_date(data.get("date")),
            amount=amount,
            status=data.get("status"),
            payment_status=data.get("paymentStatus"),
            customer=Customer.from_payload(data.get("userId")),
            items=data.get("items") or [],
            payment_method=data.get("paymentMethod") or "",
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def date(self) -> datetime:
        return self._date

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def payment_status(self) -> PaymentStatus:
        return self._payment_status

    @property
    def customer(self) -> Customer | None:
        return self._customer

    @property
    def items(self) -> tuple:
        """Get line items (immutable)."""
        return self._items

    @property
    def items_count(self) -> int:
        return len(self._items)

    @property
    def payment_method(self) -> str:
        return self._payment_method

    @property
    def display_id(self) -> str:
        """Short id shown in listings: last 8 characters, upper-cased."""
        return "#" + self._id[-8:].upper()

    @property
    def display_name(self) -> str:
        if self._customer is None or not self._customer.name:
            return NOT_AVAILABLE
        return self._customer.name

    @property
    def display_email(self) -> str:
        if self._customer is None or not self._customer.email:
            return NOT_AVAILABLE
        return self._customer.email

    @property
    def is_cash_on_delivery(self) -> bool:
        return self._payment_method == "cod"

    @property
    def status_label(self) -> str:
        return self._status.value.capitalize()

    @property
    def payment_status_label(self) -> str:
        return self._payment_status.value.capitalize()

    def __repr__(self) -> str:
        return f"Order(id={self._id!r}, status={self._status.value!r}, amount={self._amount})"
