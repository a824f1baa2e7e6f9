import unittest

from agrichain.utils.network import NetworkSimulator, NoLatency, RandomFaults
from tests.support import make_services


class TestSearchAll(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.services = make_services()

    async def test_search_across_collections(self):
        result = await self.services.search.search_all("organic")

        self.assertTrue(result["success"])
        self.assertEqual(result["query"], "organic")
        self.assertEqual([p["id"] for p in result["data"]["products"]], ["prod-001"])
        self.assertEqual([f["name"] for f in result["data"]["farmers"]], ["Ramesh Patil"])
        self.assertEqual([s["id"] for s in result["data"]["schemes"]], ["scheme-004"])
        self.assertEqual(result["totalResults"], 3)

    async def test_limits_per_collection(self):
        result = await self.services.search.search_all("a", product_limit=2, farmer_limit=1, scheme_limit=0)

        self.assertEqual(len(result["data"]["products"]), 2)
        self.assertEqual(len(result["data"]["farmers"]), 1)
        self.assertEqual(result["data"]["schemes"], [])
        self.assertEqual(result["totalResults"], 3)

    async def test_no_hits(self):
        result = await self.services.search.search_all("quinoa")
        self.assertEqual(result["totalResults"], 0)


class TestAdmin(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.services = make_services()

    async def test_data_stats_counts_collections(self):
        stats = (await self.services.admin.data_stats())["data"]

        self.assertEqual(
            {k: stats[k] for k in ("products", "farmers", "traces", "transactions", "schemes")},
            {"products": 12, "farmers": 4, "traces": 3, "transactions": 8, "schemes": 4},
        )
        self.assertIn("lastUpdated", stats)

    async def test_clear_all_data_restores_fixtures(self):
        await self.services.products.delete("prod-001")
        await self.services.schemes.create({"title": "Temporary", "category": "Advisory"})

        result = await self.services.admin.clear_all_data()

        self.assertTrue(result["success"])
        self.assertEqual(len(self.services.products.snapshot()), 12)
        self.assertEqual(len(self.services.schemes.snapshot()), 4)

    async def test_maintenance_is_not_subject_to_faults(self):
        services = make_services(network=NetworkSimulator(NoLatency(), RandomFaults(rate=1.0)))
        stats = (await services.admin.data_stats())["data"]
        self.assertEqual(stats["products"], 12)


if __name__ == "__main__":
    unittest.main()
