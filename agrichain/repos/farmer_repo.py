# agrichain/repos/farmer_repo.py
import random
import string
import time
from typing import Any, Dict, List

from agrichain.data.collections import FARMERS
from agrichain.repos.base import CollectionRepo, field_value


class FarmerRepo(CollectionRepo):
    spec = FARMERS
    label = "Farmer"
    id_prefix = "AGR"
    default_limit = 10
    search_fields = ("name", "location.district", "specializations")

    def _new_id(self) -> str:
        #AGR + 6 ostatnich cyfr timestampu + 4 znaki, nadawane przy weryfikacji
        stamp = str(int(time.time() * 1000))[-6:]
        suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=4))
        return f"{self.id_prefix}{stamp}{suffix}"

    def _defaults(self, now: str) -> Dict[str, Any]:
        return {"verification_status": "verified", "verification_date": now}

    def _filter(self, items: List[dict], filters: Dict[str, Any]) -> List[dict]:
        if filters.get("state"):
            state = str(filters["state"]).lower()
            items = [
                f for f in items
                if str(field_value(f, "location.state") or "").lower() == state
            ]

        verified = filters.get("verified")
        if verified is not None:
            if isinstance(verified, bool):
                items = [f for f in items if (f.get("verification_status") == "verified") == verified]
            else:
                items = [f for f in items if f.get("verification_status") == verified]

        return super()._filter(items, filters)
