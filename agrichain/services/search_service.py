# agrichain/services/search_service.py
from typing import Optional

from agrichain.repos.base import matches_text
from agrichain.repos.farmer_repo import FarmerRepo
from agrichain.repos.product_repo import ProductRepo
from agrichain.repos.scheme_repo import SchemeRepo
from agrichain.utils.network import AGGREGATE, NetworkSimulator, simulated


class SearchService:
    def __init__(
        self,
        products: ProductRepo,
        farmers: FarmerRepo,
        schemes: SchemeRepo,
        network: Optional[NetworkSimulator] = None,
    ):
        self.products = products
        self.farmers = farmers
        self.schemes = schemes
        self.network = network or NetworkSimulator()

    @simulated(AGGREGATE)
    async def search_all(
        self,
        query: str,
        product_limit: int = 5,
        farmer_limit: int = 5,
        scheme_limit: int = 5,
    ):
        results = {}
        for name, repo, limit in (
            ("products", self.products, product_limit),
            ("farmers", self.farmers, farmer_limit),
            ("schemes", self.schemes, scheme_limit),
        ):
            hits = [i for i in repo.snapshot() if matches_text(i, repo.search_fields, query)]
            results[name] = hits[:limit]

        return {
            "success": True,
            "data": results,
            "query": query,
            "totalResults": sum(len(v) for v in results.values()),
        }
