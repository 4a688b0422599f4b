"""
Unit tests for domain models and lifecycle rules.
"""
from datetime import datetime, timezone
from decimal import Decimal

from django.test import SimpleTestCase

from orders.domain.errors import ValidationError
from orders.domain.lifecycle import (
    PAYMENT_STATUS_CHOICES,
    STATUS_CHOICES,
    is_valid_payment_status,
    is_valid_status,
    validate_payment_transition,
    validate_transition,
)
from orders.domain.order import Order, OrderStatus, PaymentStatus, parse_order_date
from orders.test.factories import make_order, order_payload


class OrderTest(SimpleTestCase):
    """Tests for Order read model."""

    def test_from_payload(self):
        """Test building order from the service record."""
        order = Order.from_payload(order_payload(
            order_id="65f1c2aa0b1234567890abcd",
            amount=49.99,
            user={"name": "Jane Doe", "email": "jane@example.com"},
            items=[{}, {}],
        ))
        self.assertEqual(order.id, "65f1c2aa0b1234567890abcd")
        self.assertEqual(order.amount, Decimal("49.99"))
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertEqual(order.payment_status, PaymentStatus.PENDING)
        self.assertEqual(order.items_count, 2)
        self.assertEqual(order.display_name, "Jane Doe")
        self.assertEqual(order.display_email, "jane@example.com")
        self.assertEqual(order.display_id, "#7890ABCD")
        self.assertEqual(order.date, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_missing_customer_degrades_to_na(self):
        """Test that absent customer reference shows N/A."""
        order = Order.from_payload(order_payload(user=None))
        self.assertIsNone(order.customer)
        self.assertEqual(order.display_name, "N/A")
        self.assertEqual(order.display_email, "N/A")

    def test_unpopulated_customer_reference_degrades_to_na(self):
        """Test that a bare user id string is treated as absent customer."""
        order = Order.from_payload(order_payload(user="65f1c2aa0b1234567890abcd"))
        self.assertIsNone(order.customer)
        self.assertEqual(order.display_name, "N/A")

    def test_negative_amount_fails(self):
        """Test that negative amount raises error."""
        with self.assertRaises(ValueError):
            make_order(amount="-1")

    def test_unknown_status_is_not_representable(self):
        """Test that status outside the enumeration is rejected."""
        with self.assertRaises(ValidationError):
            make_order(status="archived")
        with self.assertRaises(ValidationError):
            make_order(payment_status="refunded")

    def test_payload_without_id_fails(self):
        """Test that record without id raises error."""
        payload = order_payload()
        del payload["_id"]
        with self.assertRaises(ValueError):
            Order.from_payload(payload)

    def test_labels_and_payment_method(self):
        """Test display labels and cash on delivery routing."""
        order = Order.from_payload(order_payload(status="shipped", payment_status="paid"))
        self.assertEqual(order.status_label, "Shipped")
        self.assertEqual(order.payment_status_label, "Paid")
        self.assertTrue(order.is_cash_on_delivery)

        card = Order.from_payload(order_payload(payment_method="stripe"))
        self.assertFalse(card.is_cash_on_delivery)

    def test_parse_order_date_formats(self):
        """Test ISO strings, naive strings and epoch milliseconds."""
        expected = datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(parse_order_date("2024-01-02T12:00:00Z"), expected)
        self.assertEqual(parse_order_date("2024-01-02T12:00:00"), expected)
        self.assertEqual(parse_order_date(int(expected.timestamp() * 1000)), expected)
        with self.assertRaises(ValueError):
            parse_order_date(None)


class LifecycleTest(SimpleTestCase):
    """Tests for status and payment status rules."""

    def test_membership_checks(self):
        """Test enumeration membership."""
        for status in STATUS_CHOICES:
            self.assertTrue(is_valid_status(status))
        for status in PAYMENT_STATUS_CHOICES:
            self.assertTrue(is_valid_payment_status(status))
        self.assertTrue(is_valid_status(OrderStatus.SHIPPED))
        self.assertFalse(is_valid_status("archived"))
        self.assertFalse(is_valid_status(None))
        self.assertFalse(is_valid_payment_status("paid "))

    def test_any_enumerated_transition_is_allowed(self):
        """Test permissive transitions, terminal states included."""
        for current in OrderStatus:
            for target in STATUS_CHOICES:
                self.assertEqual(validate_transition(current, target), OrderStatus(target))
        self.assertEqual(
            validate_payment_transition(PaymentStatus.PAID, "pending"),
            PaymentStatus.PENDING,
        )

    def test_out_of_enumeration_target_is_rejected(self):
        """Test that unknown targets are rejected."""
        with self.assertRaises(ValidationError) as context:
            validate_transition(OrderStatus.PENDING, "archived")
        self.assertEqual(context.exception.code, "VALIDATION_ERROR")
        self.assertEqual(context.exception.field, "status")

        with self.assertRaises(ValidationError):
            validate_payment_transition(PaymentStatus.PENDING, "refunded")
