import random
import re
import unittest
from decimal import Decimal
from unittest.mock import Mock, patch

from agrichain.domain.errors import NotFoundError, StorageWriteError
from agrichain.services.claim_service import CLAIMS_KEY, ClaimService
from agrichain.services.order_service import ORDERS_KEY, OrderService
from tests.support import make_services, make_store


class TestOrderService(unittest.TestCase):

    def setUp(self):
        self.store = make_store()
        self.notifications = Mock()
        self.orders = OrderService(self.store, self.notifications)
        self.services = make_services(store=self.store)

    def _filled_cart(self, session_id="s1"):
        cart = self.services.cart(session_id)
        cart.add_to_cart({"id": "prod-001", "name": "Organic Tomatoes", "price": 40}, 5)
        cart.apply_discount(20)
        return cart

    def test_place_order_from_cart(self):
        cart = self._filled_cart()

        order = self.orders.place_order(cart, delivery_info={"city": "Pune"}, tx_hash="0xabc")

        self.assertTrue(re.match(r"^ORD-\d+", order["id"]))
        self.assertEqual(order["subtotal"], 200.0)
        self.assertEqual(order["total"], 180.0)
        self.assertEqual(order["status"], "confirmed")
        self.assertEqual(order["tx_hash"], "0xabc")
        self.assertEqual(order["delivery_info"], {"city": "Pune"})
        self.assertGreater(order["estimated_delivery"], order["order_date"])

    def test_order_clears_cart_and_is_persisted(self):
        cart = self._filled_cart()
        order = self.orders.place_order(cart)

        self.assertEqual(cart.state["items"], [])
        self.assertEqual(self.services.cart("s1").state["items"], [])
        self.assertEqual(self.store.get_value(ORDERS_KEY)[0]["id"], order["id"])
        self.assertEqual(self.orders.get_order(order["id"]), order)

    def test_notification_is_queued(self):
        order = self.orders.place_order(self._filled_cart())
        self.notifications.send_order_notification.assert_called_once_with("s1", order["id"], "180.00")

    def test_notification_failure_does_not_fail_order(self):
        self.notifications.send_order_notification.side_effect = ConnectionError("broker down")
        order = self.orders.place_order(self._filled_cart())
        self.assertEqual(self.orders.get_order(order["id"])["status"], "confirmed")

    def _fail_writes_to(self, prefix):
        real_set = self.store.kv.set

        def set_value(key, value):
            if key.startswith(prefix):
                return False
            return real_set(key, value)

        return patch.object(self.store.kv, "set", side_effect=set_value)

    def test_failed_cart_clear_persists_no_order(self):
        cart = self._filled_cart()

        with self._fail_writes_to("agrichain-cart"):
            with self.assertRaises(StorageWriteError):
                self.orders.place_order(cart)

        self.assertEqual(self.orders.list_orders(), [])
        self.assertEqual(len(self.services.cart("s1").state["items"]), 1)
        self.notifications.send_order_notification.assert_not_called()

    def test_failed_order_save_restores_cart(self):
        cart = self._filled_cart()

        with self._fail_writes_to(ORDERS_KEY):
            with self.assertRaises(StorageWriteError):
                self.orders.place_order(cart)

        self.assertEqual(self.orders.list_orders(), [])
        self.assertEqual(cart.state["total_items"], 5)
        self.assertEqual(self.services.cart("s1").get_cart_total(), Decimal("180"))

    def test_empty_cart_is_rejected(self):
        with self.assertRaises(ValueError):
            self.orders.place_order(self.services.cart("empty"))
        self.notifications.send_order_notification.assert_not_called()

    def test_unique_ids_for_fast_orders(self):
        first = self.orders.place_order(self._filled_cart("a"))
        second = self.orders.place_order(self._filled_cart("b"))
        self.assertNotEqual(first["id"], second["id"])

    def test_list_orders_by_session(self):
        self.orders.place_order(self._filled_cart("a"))
        self.orders.place_order(self._filled_cart("b"))
        self.assertEqual(len(self.orders.list_orders()), 2)
        self.assertEqual([o["session_id"] for o in self.orders.list_orders("b")], ["b"])

    def test_unknown_order(self):
        with self.assertRaises(NotFoundError):
            self.orders.get_order("ORD-0")


class TestClaimService(unittest.TestCase):

    def setUp(self):
        self.store = make_store()
        self.notifications = Mock()
        self.claims = ClaimService(self.store, self.notifications, rng=random.Random(3))

    def test_submit_claim(self):
        claim = self.claims.submit("AGR482913KX7P", {"type": "Crop Loss", "description": "Hail damage"})

        self.assertEqual(claim["status"], "Pending")
        self.assertEqual(claim["type"], "Crop Loss")
        self.assertTrue(5000 <= claim["amount"] < 20000)
        self.assertEqual(self.claims.list("AGR482913KX7P"), [claim])
        self.assertEqual(self.store.get_value(CLAIMS_KEY.format(farmer="AGR482913KX7P")), [claim])
        self.notifications.send_claim_notification.assert_called_once_with("AGR482913KX7P", claim["id"])

    def test_claim_ids_unique_per_farmer(self):
        first = self.claims.submit("f1", {"type": "Flood"})
        second = self.claims.submit("f1", {"type": "Drought"})
        self.assertNotEqual(first["id"], second["id"])
        self.assertEqual(self.claims.list("f2"), [])

    def test_claim_requires_type(self):
        with self.assertRaises(ValueError):
            self.claims.submit("f1", {"description": "no type"})


class TestListingService(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.services = make_services()

    async def test_post_listing_creates_product_and_trace(self):
        result = await self.services.listings.post("AGR571204MQ2D", {
            "name": "Mustard Oil", "category": "Oils", "price": 180, "quantity": 50, "unit": "litre",
        })
        product = result["data"]

        self.assertEqual(product["farmer_id"], "AGR571204MQ2D")
        self.assertEqual(self.services.listings.list("AGR571204MQ2D"), [product])
        trace = (await self.services.traces.get(product["id"]))["data"]
        self.assertEqual(trace["product_name"], "Mustard Oil")
        self.assertEqual(trace["timeline"], [])

    async def test_deleted_product_drops_out_of_listing(self):
        product = (await self.services.listings.post("f1", {"name": "Garlic", "price": 10}))["data"]
        await self.services.products.delete(product["id"])
        self.assertEqual(self.services.listings.list("f1"), [])


class TestSessionService(unittest.TestCase):

    def setUp(self):
        self.session = make_services().session

    def test_login_and_logout(self):
        self.assertIsNone(self.session.current_user())

        self.session.login({"id": "CONS-1001", "name": "Priya", "role": "consumer"})
        self.assertEqual(self.session.current_user()["id"], "CONS-1001")

        self.session.logout()
        self.assertIsNone(self.session.current_user())


if __name__ == "__main__":
    unittest.main()
