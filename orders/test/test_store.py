"""
Tests for the in-memory Order Store.
"""
from django.test import SimpleTestCase

from orders.domain.errors import NotFoundError
from orders.infra.store import OrderStore, get_order_store
from orders.test.factories import make_order


class OrderStoreTest(SimpleTestCase):
    """Tests for snapshot replacement and stale response handling."""

    def setUp(self):
        self.store = OrderStore()

    def test_load_replaces_whole_collection(self):
        """Test load does not merge with the previous snapshot."""
        self.store.load([make_order("A1"), make_order("A2")])
        self.store.load([make_order("A2"), make_order("A3")])
        self.assertEqual([order.id for order in self.store.get()], ["A2", "A3"])
        self.assertNotIn("A1", self.store)
        self.assertEqual(self.store.generation, 2)

    def test_load_is_idempotent(self):
        """Test loading the same collection twice gives the same snapshot."""
        orders = [make_order("A1"), make_order("A2")]
        self.store.load(orders)
        first = self.store.get()
        self.store.load(orders)
        self.assertEqual(self.store.get(), first)

    def test_duplicate_ids_keep_single_entry(self):
        """Test store never holds two entries with the same id."""
        first = make_order("A1", amount="1")
        second = make_order("A1", amount="2")
        with self.assertLogs("orders.infra.store", level="WARNING"):
            self.store.load([first, make_order("B1"), second])
        self.assertEqual(len(self.store), 2)
        self.assertIs(self.store.get_order("A1"), second)
        self.assertEqual([order.id for order in self.store.get()], ["A1", "B1"])

    def test_get_returns_read_only_snapshot(self):
        """Test snapshot is an immutable tuple."""
        self.store.load([make_order("A1")])
        snapshot = self.store.get()
        self.assertIsInstance(snapshot, tuple)
        self.store.load([])
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(self.store.get(), ())

    def test_get_order_missing_raises(self):
        """Test unknown id raises NotFoundError."""
        with self.assertRaises(NotFoundError) as context:
            self.store.get_order("missing")
        self.assertEqual(context.exception.order_id, "missing")

    def test_stale_response_is_discarded(self):
        """Test an older fetch resolving after a newer one is dropped."""
        older = self.store.issue_token()
        newer = self.store.issue_token()
        self.assertTrue(self.store.load([make_order("NEW")], token=newer))
        self.assertFalse(self.store.load([make_order("OLD")], token=older))
        self.assertEqual([order.id for order in self.store.get()], ["NEW"])
        self.assertEqual(self.store.generation, 1)

    def test_older_token_discarded_even_before_newer_resolves(self):
        """Test a superseded fetch cannot land once a newer one was issued."""
        older = self.store.issue_token()
        self.store.issue_token()
        self.assertFalse(self.store.load([make_order("OLD")], token=older))
        self.assertEqual(self.store.generation, 0)

    def test_shared_store(self):
        """Test the process-wide store is a single instance."""
        self.assertIs(get_order_store(), get_order_store())
