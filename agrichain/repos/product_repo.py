# agrichain/repos/product_repo.py
from typing import Any, Dict, List

from agrichain.data.collections import PRODUCTS
from agrichain.repos.base import CollectionRepo, same_id


class ProductRepo(CollectionRepo):
    spec = PRODUCTS
    label = "Product"
    id_prefix = "prod"
    default_limit = 10
    search_fields = ("name", "description", "variety")

    def _filter(self, items: List[dict], filters: Dict[str, Any]) -> List[dict]:
        if filters.get("category"):
            category = str(filters["category"]).lower()
            items = [p for p in items if category in str(p.get("category", "")).lower()]

        if filters.get("farmer_id"):
            items = [p for p in items if same_id(p.get("farmer_id"), filters["farmer_id"])]

        if filters.get("status"):
            items = [p for p in items if p.get("status") == filters["status"]]

        if filters.get("available"):
            #wyprzedane (quantity 0) i nieaktywne nie sa dostepne
            items = [
                p for p in items
                if (p.get("quantity") or 0) > 0 and p.get("status", "active") == "active"
            ]

        return super()._filter(items, filters)

    def _validate(self, record: dict) -> None:
        quantity = record.get("quantity")
        if quantity is not None and quantity < 0:
            raise ValueError("Product quantity cannot be negative")
