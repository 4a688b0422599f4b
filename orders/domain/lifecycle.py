"""
Lifecycle rules for order status and payment status.

Transitions are permissive: any enumerated value may be set from any current
value, including moving out of ``delivered`` or ``cancelled``. Only values
outside the enumerations are rejected, and they are rejected before anything
is sent to the order service.
"""
from __future__ import annotations

from typing import Any

from orders.domain.errors import ValidationError
from orders.domain.order import OrderStatus, PaymentStatus

STATUS_CHOICES = tuple(status.value for status in OrderStatus)
PAYMENT_STATUS_CHOICES = tuple(status.value for status in PaymentStatus)


def is_valid_status(value: Any) -> bool:
    """Check order status membership."""
    return value in STATUS_CHOICES


def is_valid_payment_status(value: Any) -> bool:
    """Check payment status membership."""
    return value in PAYMENT_STATUS_CHOICES


def ensure_status(value: Any) -> OrderStatus:
    """Coerce value to OrderStatus or raise ValidationError."""
    if not is_valid_status(value):
        raise ValidationError(f"Invalid order status: {value}", field="status")
    return OrderStatus(value)


def ensure_payment_status(value: Any) -> PaymentStatus:
    """Coerce value to PaymentStatus or raise ValidationError."""
    if not is_valid_payment_status(value):
        raise ValidationError(f"Invalid payment status: {value}", field="paymentStatus")
    return PaymentStatus(value)


def validate_transition(current: OrderStatus | str | None, target: Any) -> OrderStatus:
    """Validate a status change; every enumerated target is allowed."""
    return ensure_status(target)


def validate_payment_transition(current: PaymentStatus | str | None, target: Any) -> PaymentStatus:
    """Validate a payment status change; every enumerated target is allowed."""
    return ensure_payment_status(target)
