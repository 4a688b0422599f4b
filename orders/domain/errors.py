"""
Error taxonomy for order management.
"""
from __future__ import annotations


class OrderDeskError(Exception):
    """Base error carrying a machine-readable code."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class ValidationError(OrderDeskError):
    """Status or query value outside its fixed enumeration."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class GatewayError(OrderDeskError):
    """Remote order service call failed or answered ``success: false``."""

    code = "GATEWAY_ERROR"


class NotFoundError(OrderDeskError):
    """Order id is no longer present in the local snapshot."""

    code = "NOT_FOUND"

    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class AuthenticationError(OrderDeskError):
    """Request carries no bearer credential for the order service."""

    code = "UNAUTHENTICATED"


class ReloadPendingError(OrderDeskError):
    """Mutation succeeded but every reload was superseded by a newer one."""

    code = "RELOAD_PENDING"

    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} changed; a newer reload is in progress")
        self.order_id = order_id
