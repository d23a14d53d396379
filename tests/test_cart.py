import unittest

from storefront.cart.manager import CartManager
from tests.helpers import make_product


class FakeInventory:
    """Mutable product lookup standing in for the inventory cache"""

    def __init__(self, *products):
        self.products = {p.id: p for p in products}

    def get_product(self, product_id):
        return self.products.get(product_id)


class CartScenarioTests(unittest.TestCase):
    def test_capped_at_available_quantity(self):
        product = make_product(available_quantity=3, price=10)
        cart = CartManager(FakeInventory(product).get_product)

        for _ in range(3):
            self.assertTrue(cart.add_line(product))
        self.assertEqual(cart.quantity_of(product.id), 3)
        self.assertEqual(cart.total(), 30)

        self.assertFalse(cart.add_line(product))
        self.assertEqual(cart.quantity_of(product.id), 3)
        self.assertEqual(cart.total(), 30)

    def test_never_exceeds_stock_for_any_number_of_adds(self):
        for stock in (0, 1, 5, 12):
            product = make_product(available_quantity=stock)
            cart = CartManager()
            for _ in range(stock + 5):
                cart.add_line(product)
            self.assertLessEqual(cart.quantity_of(product.id), stock)
            self.assertEqual(cart.quantity_of(product.id), stock)

    def test_out_of_stock_product_never_enters_cart(self):
        product = make_product(available_quantity=0)
        cart = CartManager()
        self.assertFalse(cart.add_line(product))
        self.assertNotIn(product.id, cart)
        self.assertTrue(cart.is_empty)


class CartMutationTests(unittest.TestCase):
    def setUp(self):
        self.a = make_product(1, price=2.5, available_quantity=10)
        self.b = make_product(2, price=4.0, available_quantity=10)
        self.inventory = FakeInventory(self.a, self.b)
        self.cart = CartManager(self.inventory.get_product)

    def test_remove_one_at_quantity_one_deletes_line(self):
        self.cart.add_line(self.a)
        self.cart.remove_one(self.a.id)
        self.assertNotIn(self.a.id, self.cart)
        self.assertEqual(self.cart.quantity_of(self.a.id), 0)
        self.assertEqual(len(self.cart), 0)

    def test_remove_one_decrements(self):
        self.cart.add_line(self.a)
        self.cart.add_line(self.a)
        self.cart.remove_one(self.a.id)
        self.assertEqual(self.cart.quantity_of(self.a.id), 1)

    def test_remove_one_unknown_is_noop(self):
        revision = self.cart.revision
        self.cart.remove_one(99)
        self.assertEqual(self.cart.revision, revision)

    def test_remove_quantity_decrements_or_deletes(self):
        for _ in range(3):
            self.cart.add_line(self.a)
        self.cart.add_line(self.b)
        self.cart.remove_quantity(self.a.id, 2)
        self.assertEqual(self.cart.quantity_of(self.a.id), 1)
        self.cart.remove_quantity(self.b.id, 5)
        self.assertNotIn(self.b.id, self.cart)

        revision = self.cart.revision
        self.cart.remove_quantity(self.a.id, 0)
        self.cart.remove_quantity(99, 1)
        self.assertEqual(self.cart.revision, revision)

    def test_remove_line_regardless_of_quantity(self):
        for _ in range(4):
            self.cart.add_line(self.a)
        self.cart.add_line(self.b)
        self.cart.remove_line(self.a.id)
        self.assertNotIn(self.a.id, self.cart)
        self.assertEqual(self.cart.count(), 1)

    def test_total_and_count(self):
        self.assertEqual(self.cart.total(), 0)
        self.cart.add_line(self.a)
        self.cart.add_line(self.a)
        self.cart.add_line(self.b)
        self.assertEqual(self.cart.count(), 3)
        self.assertAlmostEqual(self.cart.total(), 2 * 2.5 + 4.0)

    def test_total_zero_iff_empty(self):
        self.assertTrue(self.cart.is_empty)
        self.assertEqual(self.cart.total(), 0)
        self.cart.add_line(self.b)
        self.assertGreater(self.cart.total(), 0)
        self.cart.remove_one(self.b.id)
        self.assertEqual(self.cart.total(), 0)

    def test_total_follows_price_edits(self):
        self.cart.add_line(self.a)
        self.inventory.products[self.a.id] = self.a.model_copy(update={"price": 7.0})
        self.assertEqual(self.cart.total(), 7.0)

    def test_clear(self):
        self.cart.add_line(self.a)
        self.cart.add_line(self.b)
        self.cart.clear()
        self.assertTrue(self.cart.is_empty)
        self.assertEqual(self.cart.count(), 0)

    def test_revision_tracks_effective_mutations(self):
        start = self.cart.revision
        self.cart.add_line(self.a)
        self.assertEqual(self.cart.revision, start + 1)
        self.cart.clear()
        self.assertEqual(self.cart.revision, start + 2)
        self.cart.clear()
        self.assertEqual(self.cart.revision, start + 2)


class LiveStockTests(unittest.TestCase):
    def test_ceiling_follows_current_cached_stock(self):
        product = make_product(available_quantity=5)
        inventory = FakeInventory(product)
        cart = CartManager(inventory.get_product)
        cart.add_line(product)
        cart.add_line(product)

        inventory.products[product.id] = product.model_copy(update={"available_quantity": 2})
        # The stale product passed in still claims 5 units
        self.assertFalse(cart.add_line(product))
        self.assertFalse(cart.can_add(product.id))
        self.assertEqual(cart.quantity_of(product.id), 2)

    def test_missing_product_cannot_grow_but_can_be_removed(self):
        product = make_product(available_quantity=5, price=3.0)
        inventory = FakeInventory(product)
        cart = CartManager(inventory.get_product)
        cart.add_line(product)
        cart.add_line(product)

        del inventory.products[product.id]
        self.assertFalse(cart.add_line(product))
        self.assertEqual(cart.quantity_of(product.id), 2)
        self.assertEqual(cart.missing_products(), [product.id])
        # Last known price still counts toward the total
        self.assertEqual(cart.total(), 6.0)

        cart.remove_one(product.id)
        self.assertEqual(cart.quantity_of(product.id), 1)
        cart.remove_line(product.id)
        self.assertTrue(cart.is_empty)

    def test_reconcile_clamps_and_drops_lines(self):
        a = make_product(1, available_quantity=5)
        b = make_product(2, available_quantity=5)
        c = make_product(3, available_quantity=5)
        inventory = FakeInventory(a, b, c)
        cart = CartManager(inventory.get_product)
        for product in (a, b, c):
            for _ in range(3):
                cart.add_line(product)

        inventory.products[a.id] = a.model_copy(update={"available_quantity": 1})
        inventory.products[b.id] = b.model_copy(update={"available_quantity": 0})
        del inventory.products[c.id]

        changed = cart.reconcile()
        self.assertEqual(sorted(changed), [a.id, b.id])
        self.assertEqual(cart.quantity_of(a.id), 1)
        self.assertNotIn(b.id, cart)
        self.assertEqual(cart.quantity_of(c.id), 3)

    def test_reconcile_without_changes_keeps_revision(self):
        product = make_product(available_quantity=5)
        cart = CartManager(FakeInventory(product).get_product)
        cart.add_line(product)
        revision = cart.revision
        self.assertEqual(cart.reconcile(), [])
        self.assertEqual(cart.revision, revision)


if __name__ == "__main__":
    unittest.main()
