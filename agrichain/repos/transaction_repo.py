# agrichain/repos/transaction_repo.py
from typing import Any, Dict, List

from agrichain.data.collections import TRANSACTIONS
from agrichain.repos.base import CollectionRepo, ledger_hash, parse_ts, same_id


class TransactionRepo(CollectionRepo):
    spec = TRANSACTIONS
    label = "Transaction"
    id_prefix = "tx"
    default_limit = 20

    def _defaults(self, now: str) -> Dict[str, Any]:
        return {
            "status": "pending",
            "blockchain_hash": ledger_hash(),
        }

    def _stamps(self, now: str) -> Dict[str, Any]:
        return {"transaction_date": now}

    def _filter(self, items: List[dict], filters: Dict[str, Any]) -> List[dict]:
        for key in ("farmer_id", "buyer_id", "product_id"):
            if filters.get(key):
                items = [t for t in items if same_id(t.get(key), filters[key])]

        if filters.get("status"):
            items = [t for t in items if t.get("status") == filters["status"]]

        return items

    def _sort(self, items: List[dict]) -> List[dict]:
        # najnowsze pierwsze
        return sorted(items, key=lambda t: parse_ts(t.get("transaction_date")), reverse=True)
