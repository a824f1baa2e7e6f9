# agrichain/services/listing_service.py
from typing import Any, Dict, List

from agrichain.data.collections import CollectionStore
from agrichain.repos.product_repo import ProductRepo
from agrichain.repos.trace_repo import TraceRepo
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

LISTINGS_KEY = "agrichain-farmer-products:{farmer}"


class ListingService:
    """
    Produkty wystawione przez rolnika z jego dashboardu.
    Produkt trafia do wspolnej kolekcji, a jego id do listy rolnika;
    od razu zakladany jest pusty slad w lancuchu dostaw.
    """

    def __init__(self, store: CollectionStore, products: ProductRepo, traces: TraceRepo):
        self.store = store
        self.products = products
        self.traces = traces

    def _ids(self, farmer: str) -> List[str]:
        ids = self.store.get_value(LISTINGS_KEY.format(farmer=farmer), [])
        return ids if isinstance(ids, list) else []

    async def post(self, farmer: str, data: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.products.create({**data, "farmer_id": farmer})
        product = result["data"]

        ids = self._ids(farmer)
        ids.append(product["id"])
        self.store.put_value(LISTINGS_KEY.format(farmer=farmer), ids)

        await self.traces.create(product["id"], {"product_name": product.get("name"), "farmer_id": farmer})

        logger.info(f"Farmer {farmer} listed product {product['id']}")
        return result

    def list(self, farmer: str) -> List[Dict[str, Any]]:
        ids = {str(i) for i in self._ids(farmer)}
        # produkty usuniete z kolekcji po prostu znikaja z listy
        return [p for p in self.products.snapshot() if str(p.get("id")) in ids]
