"""
HTTP-level tests: routers, envelope format and error-to-status mapping.

USAGE:
    python -m pytest tests/test_api.py -v
"""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from agrichain.api import create_app
from agrichain.utils.network import NetworkSimulator, NoLatency, RandomFaults
from tests.support import make_store


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        self.store = make_store()
        self.client = TestClient(create_app(store=self.store, network=NetworkSimulator()))


class TestHealth(ApiTestCase):

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok", "store": "MemoryKeyValueStore"})


class TestProductsApi(ApiTestCase):

    def test_list_envelope(self):
        body = self.client.get("/products/", params={"page": 3, "limit": 5}).json()

        self.assertTrue(body["success"])
        self.assertEqual(len(body["data"]), 2)
        self.assertEqual(body["pagination"], {
            "page": 3, "limit": 5, "total": 12, "totalPages": 3, "hasNext": False, "hasPrev": True,
        })

    def test_filters_from_query(self):
        body = self.client.get("/products/", params={"category": "fruits", "available": "true"}).json()
        self.assertEqual({p["id"] for p in body["data"]}, {"prod-003", "prod-009"})

    def test_crud_flow(self):
        created = self.client.post("/products/", json={
            "name": "Jaggery", "category": "Natural Products", "price": 90, "farmer_id": "AGR482913KX7P",
        })
        self.assertEqual(created.status_code, 201)
        product_id = created.json()["data"]["id"]
        self.assertEqual(created.json()["message"], "Product created successfully")

        updated = self.client.patch(f"/products/{product_id}", json={"price": 85})
        self.assertEqual(updated.json()["data"]["price"], 85)

        deleted = self.client.delete(f"/products/{product_id}")
        self.assertEqual(deleted.json()["message"], "Product deleted successfully")
        self.assertEqual(self.client.get(f"/products/{product_id}").status_code, 404)

    def test_not_found(self):
        resp = self.client.get("/products/prod-999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Product with ID prod-999 not found")

    def test_invalid_payload(self):
        resp = self.client.post("/products/", json={"name": "No price"})
        self.assertEqual(resp.status_code, 422)

    def test_write_failure_maps_to_507(self):
        with patch.object(self.store.kv, "set", return_value=False):
            resp = self.client.post("/products/", json={
                "name": "Lost", "category": "Grains", "price": 1, "farmer_id": "AGR482913KX7P",
            })
        self.assertEqual(resp.status_code, 507)


class TestTransientFailures(unittest.TestCase):

    def test_injected_failure_maps_to_503(self):
        network = NetworkSimulator(NoLatency(), RandomFaults(rate=1.0))
        client = TestClient(create_app(store=make_store(), network=network))

        resp = client.get("/farmers/")

        self.assertEqual(resp.status_code, 503)
        self.assertIn("Network error", resp.json()["detail"])
        # operacje serwisowe nie sa objete awariami
        self.assertEqual(client.get("/admin/data-stats").status_code, 200)


class TestOtherCollectionsApi(ApiTestCase):

    def test_farmers_by_state(self):
        body = self.client.get("/farmers/", params={"state": "Punjab"}).json()
        self.assertEqual([f["farmer_id"] for f in body["data"]], ["AGR571204MQ2D"])

    def test_transactions_newest_first(self):
        body = self.client.get("/transactions/").json()
        self.assertEqual(body["data"][0]["transaction_id"], "tx-008")
        self.assertEqual(body["pagination"]["limit"], 20)

    def test_scheme_lookup(self):
        body = self.client.get("/schemes/scheme-002").json()
        self.assertEqual(body["data"]["category"], "Insurance")

    def test_traces(self):
        self.assertEqual(self.client.get("/traces/prod-404").status_code, 404)
        self.assertEqual(self.client.post("/traces/prod-001", json={}).status_code, 409)

        resp = self.client.post("/traces/prod-003/steps", json={"stage": "retail", "title": "Shelved"})

        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["data"]["timeline"][-1]["title"], "Shelved")


class TestStatsApi(ApiTestCase):

    def test_farmer_dashboard(self):
        body = self.client.get("/stats/dashboard/AGR482913KX7P").json()
        self.assertEqual(body["data"]["totalRevenue"], 1450)

    def test_unknown_role(self):
        resp = self.client.get("/stats/dashboard/CONS-1001", params={"role": "auditor"})
        self.assertEqual(resp.status_code, 400)

    def test_search(self):
        body = self.client.get("/search", params={"q": "organic"}).json()
        self.assertEqual(body["totalResults"], 3)

    def test_reset(self):
        self.client.delete("/products/prod-001")
        self.assertTrue(self.client.post("/admin/reset").json()["success"])
        self.assertEqual(self.client.get("/admin/data-stats").json()["data"]["products"], 12)


class TestCartCheckoutApi(ApiTestCase):

    def test_cart_and_checkout(self):
        self.client.post("/carts/s1/items", json={"id": "prod-001", "name": "Organic Tomatoes", "price": 40, "quantity": 2})
        cart = self.client.post("/carts/s1/items", json={"id": "prod-001", "name": "Organic Tomatoes", "price": 40, "quantity": 3}).json()

        self.assertEqual(cart["total_items"], 5)
        self.assertEqual(float(cart["subtotal"]), 200)

        cart = self.client.post("/carts/s1/discount", json={"amount": 500}).json()
        self.assertEqual(float(cart["total"]), 0)

        cart = self.client.post("/carts/s1/discount", json={"amount": 50}).json()
        self.assertEqual(float(cart["total"]), 150)

        with patch("agrichain.services.notification_service.send_order_notification_task.delay") as delay:
            resp = self.client.post("/orders/checkout/s1", json={"delivery_info": {"city": "Nashik"}})

        self.assertEqual(resp.status_code, 201)
        order = resp.json()["data"]
        self.assertEqual(order["total"], 150.0)
        delay.assert_called_once()

        self.assertEqual(self.client.get("/carts/s1").json()["items"], [])
        self.assertEqual(self.client.get(f"/orders/{order['id']}").json()["data"]["id"], order["id"])

    def test_update_and_remove_lines(self):
        self.client.post("/carts/s2/items", json={"id": "prod-003", "price": 600, "quantity": 1})
        cart = self.client.patch("/carts/s2/items/prod-003", json={"quantity": 4}).json()
        self.assertEqual(cart["total_items"], 4)

        cart = self.client.delete("/carts/s2/items/prod-003").json()
        self.assertEqual(cart["items"], [])

    def test_checkout_empty_cart(self):
        resp = self.client.post("/orders/checkout/nobody", json={})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_order(self):
        self.assertEqual(self.client.get("/orders/ORD-0").status_code, 404)


class TestFarmerExtrasApi(ApiTestCase):

    def test_claims(self):
        with patch("agrichain.services.notification_service.send_claim_notification_task.delay"):
            resp = self.client.post("/farmers/f1/claims", json={"type": "Flood", "description": "Field flooded"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(len(self.client.get("/farmers/f1/claims").json()["data"]), 1)

    def test_listings(self):
        resp = self.client.post("/farmers/f1/listings", json={"name": "Garlic", "category": "Spices", "price": 120})
        self.assertEqual(resp.status_code, 201)
        listed = self.client.get("/farmers/f1/listings").json()["data"]
        self.assertEqual([p["name"] for p in listed], ["Garlic"])

    def test_session(self):
        self.assertEqual(self.client.get("/session/me").status_code, 404)
        self.client.post("/session/login", json={"id": "CONS-1001", "name": "Priya"})
        self.assertEqual(self.client.get("/session/me").json()["data"]["role"], "consumer")
        self.client.post("/session/logout")
        self.assertEqual(self.client.get("/session/me").status_code, 404)


if __name__ == "__main__":
    unittest.main()
