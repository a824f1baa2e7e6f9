# agrichain/repos/scheme_repo.py
from typing import Any, Dict, List

from agrichain.data.collections import SCHEMES
from agrichain.repos.base import CollectionRepo


class SchemeRepo(CollectionRepo):
    spec = SCHEMES
    label = "Scheme"
    id_prefix = "scheme"
    default_limit = 10
    search_fields = ("title", "description", "tags")

    def _filter(self, items: List[dict], filters: Dict[str, Any]) -> List[dict]:
        if filters.get("category"):
            category = str(filters["category"]).lower()
            items = [s for s in items if str(s.get("category", "")).lower() == category]

        if filters.get("status"):
            items = [s for s in items if s.get("status") == filters["status"]]

        return super()._filter(items, filters)
