"""
HTTP client for the remote order service (the Mutation Gateway).
"""
from __future__ import annotations

import logging
from typing import Any

import requests
from django.conf import settings

from orders.domain.errors import AuthenticationError, GatewayError, ValidationError
from orders.domain.order import Order, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

LIST_PATH = "/api/order/list"
UPDATE_STATUS_PATH = "/api/order/update-status"
DELETE_PATH = "/api/order/delete"

FETCH_FAILED = "Failed to fetch orders"
UPDATE_FAILED = "Failed to update order"
DELETE_FAILED = "Failed to delete order"


class OrdersGateway:
    """
    Client for the order service endpoints.

    Every response is an envelope ``{"success": bool, "message": str?, ...}``.
    Failures raise GatewayError carrying the server message when there is one,
    otherwise a generic fallback. Calls are never retried here.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        })
        self._token = token

    @classmethod
    def from_settings(cls, token: str | None) -> OrdersGateway:
        """
        Build gateway from Django settings for the given caller credential.

        The configured ORDERS_API_TOKEN is never substituted here; callers that
        act as the service account pass it explicitly.
        """
        if not token:
            raise AuthenticationError("Bearer token required")
        return cls(
            base_url=settings.ORDERS_API_URL,
            token=token,
            timeout=settings.ORDERS_API_TIMEOUT,
        )

    def fetch_orders(self) -> list[Order]:
        """Fetch the full order collection."""
        data = self._request("GET", LIST_PATH, fallback=FETCH_FAILED)
        records = data.get("orders")
        if not isinstance(records, list):
            raise GatewayError(FETCH_FAILED)

        try:
            return [Order.from_payload(record) for record in records]
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            logger.error(
                "malformed_order_payload",
                extra={"operation": "fetch_orders", "error": str(e)},
            )
            raise GatewayError(FETCH_FAILED) from e

    def update_order(
        self,
        order_id: str,
        status: OrderStatus | str,
        payment_status: PaymentStatus | str | None = None,
    ) -> dict:
        """Persist a status (and optionally payment status) change."""
        payload = {"orderId": order_id, "status": _value(status)}
        if payment_status:
            payload["paymentStatus"] = _value(payment_status)
        return self._request("POST", UPDATE_STATUS_PATH, json=payload, fallback=UPDATE_FAILED)

    def delete_order(self, order_id: str) -> dict:
        """Delete an order."""
        return self._request("POST", DELETE_PATH, json={"orderId": order_id}, fallback=DELETE_FAILED)

    def _request(self, method: str, path: str, fallback: str, json: dict | None = None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(
                "gateway_request_failed",
                extra={
                    "operation": path,
                    "error": str(e),
                    "token": self._token,
                },
            )
            raise GatewayError(fallback) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "gateway_invalid_response",
                extra={"operation": path, "status": response.status_code},
            )
            raise GatewayError(fallback) from e

        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            logger.warning(
                "gateway_call_rejected",
                extra={
                    "operation": path,
                    "status": response.status_code,
                    "error": message,
                },
            )
            raise GatewayError(message or fallback)

        return data


def _value(status: Any) -> str:
    return getattr(status, "value", status)
