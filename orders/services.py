"""
Application service for order management operations.
"""
from __future__ import annotations

import logging

from django.conf import settings

from orders.domain.errors import GatewayError, NotFoundError, ReloadPendingError
from orders.domain.lifecycle import validate_payment_transition, validate_transition
from orders.domain.order import Order, OrderStatus, PaymentStatus
from orders.domain.query import OrderQuery, run_query
from orders.domain.stats import OrderStats, compute_stats
from orders.infra.gateway import OrdersGateway
from orders.infra.store import OrderStore, get_order_store


logger = logging.getLogger(__name__)


class OrderService:
    """
    Service for order operations.

    Edits go validator -> gateway -> full reload. The store is never patched
    locally, so a failed call leaves it exactly as it was.
    """

    def __init__(
        self,
        store: OrderStore | None = None,
        gateway: OrdersGateway | None = None,
    ):
        self.store = store if store is not None else get_order_store()
        if gateway is None:
            # Service account credential; request handlers always pass their own gateway
            gateway = OrdersGateway.from_settings(token=settings.ORDERS_API_TOKEN)
        self.gateway = gateway

    def refresh(self) -> bool:
        """Fetch all orders and replace the store snapshot."""
        token = self.store.issue_token()
        orders = self.gateway.fetch_orders()
        return self.store.load(orders, token=token)

    def list_orders(self, query: OrderQuery | None = None) -> list[Order]:
        """Get filtered and sorted view of the current snapshot."""
        return run_query(self.store.get(), query or OrderQuery())

    def stats(self) -> OrderStats:
        """Get dashboard totals over the full snapshot."""
        return compute_stats(self.store.get())

    def update_order(
        self,
        order_id: str,
        status: OrderStatus | str,
        payment_status: PaymentStatus | str | None = None,
    ) -> Order | None:
        """
        Change order status and optionally payment status.

        Returns the reloaded order, or None when the order is no longer known
        locally (the store is refreshed instead) or vanished on reload. Raises
        ReloadPendingError when the change went through but every reload was
        superseded, so no fresh copy of the order is available yet.
        """
        try:
            current = self.store.get_order(order_id)
        except NotFoundError:
            current = None

        # Validation happens before any network call
        new_status = validate_transition(current.status if current else None, status)
        new_payment_status = None
        if payment_status:
            new_payment_status = validate_payment_transition(
                current.payment_status if current else None, payment_status
            )

        if current is None:
            self._refresh_after_missing(order_id, "update_order")
            return None

        try:
            self.gateway.update_order(order_id, new_status, new_payment_status)
        except GatewayError as e:
            logger.error(
                "order_update_failed",
                extra={"operation": "update_order", "order_id": order_id, "error": e.message},
            )
            raise

        logger.info(
            "order_updated",
            extra={
                "operation": "update_order",
                "order_id": order_id,
                "status": new_status.value,
            },
        )
        if not self._reload_after_change(order_id, "update_order"):
            raise ReloadPendingError(order_id)
        return self.store.get_order(order_id) if order_id in self.store else None

    def delete_order(self, order_id: str) -> bool:
        """Delete order. Returns False when the order was not known locally."""
        if order_id not in self.store:
            self._refresh_after_missing(order_id, "delete_order")
            return False

        try:
            self.gateway.delete_order(order_id)
        except GatewayError as e:
            logger.error(
                "order_delete_failed",
                extra={"operation": "delete_order", "order_id": order_id, "error": e.message},
            )
            raise

        logger.info("order_deleted", extra={"operation": "delete_order", "order_id": order_id})
        self._reload_after_change(order_id, "delete_order")
        return True

    def _refresh_after_missing(self, order_id: str, operation: str) -> None:
        logger.warning(
            "order_not_in_snapshot",
            extra={"operation": operation, "order_id": order_id},
        )
        self.refresh()

    def _reload_after_change(self, order_id: str, operation: str) -> bool:
        """Reload after a successful mutation, retrying once if superseded."""
        if self.refresh():
            return True

        logger.warning(
            "order_reload_superseded",
            extra={"operation": operation, "order_id": order_id},
        )
        return self.refresh()
