"""
In-memory Order Store shared by the listing, stats and CLI consumers.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable

from orders.domain.errors import NotFoundError
from orders.domain.order import Order

logger = logging.getLogger(__name__)


class OrderStore:
    """
    Last-known-good snapshot of all orders.

    The snapshot is replaced wholesale on every accepted load, never patched,
    so readers always see either the previous or the new collection. Each
    fetch takes a token from ``issue_token``; a load carrying a token older
    than the latest issued one is a stale response and is dropped.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._orders: dict[str, Order] = {}
        self._generation = 0
        self._last_token = 0

    @property
    def generation(self) -> int:
        """Number of accepted loads."""
        return self._generation

    def issue_token(self) -> int:
        """Issue the sequence token for a new fetch."""
        with self._lock:
            self._last_token += 1
            return self._last_token

    def load(self, orders: Iterable[Order], token: int | None = None) -> bool:
        """Replace the whole collection. Returns False when the response is stale."""
        snapshot: dict[str, Order] = {}
        for order in orders:
            if order.id in snapshot:
                logger.warning("duplicate_order_id", extra={"order_id": order.id})
            # Later record wins, position of the first one is kept
            snapshot[order.id] = order

        with self._lock:
            if token is not None and token < self._last_token:
                logger.info(
                    "stale_snapshot_discarded",
                    extra={"token": token, "latest_token": self._last_token},
                )
                return False
            self._orders = snapshot
            self._generation += 1
            generation = self._generation

        logger.info(
            "order_store_loaded",
            extra={"count": len(snapshot), "generation": generation},
        )
        return True

    def get(self) -> tuple[Order, ...]:
        """Get read-only snapshot in fetch order."""
        return tuple(self._orders.values())

    def get_order(self, order_id: str) -> Order:
        """Get order by ID or raise NotFoundError."""
        try:
            return self._orders[order_id]
        except KeyError:
            raise NotFoundError(order_id) from None

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._orders

    def __len__(self) -> int:
        return len(self._orders)


_default_store = OrderStore()


def get_order_store() -> OrderStore:
    """Process-wide store shared by the API and management commands."""
    return _default_store
