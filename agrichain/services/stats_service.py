# agrichain/services/stats_service.py
from collections import Counter, defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from agrichain.repos.base import envelope, parse_ts, same_id
from agrichain.repos.product_repo import ProductRepo
from agrichain.repos.transaction_repo import TransactionRepo
from agrichain.utils.network import AGGREGATE, NetworkSimulator, simulated
from agrichain.utils.settings import RECENT_ORDERS_LIMIT
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)


def _amount(tx: dict) -> float:
    return tx.get("amount") or 0


def _utc_month(value: Any) -> Optional[str]:
    """YYYY-MM w UTC, None dla brakujacej lub nieczytelnej daty."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m")


class StatsService:
    """
    Podsumowania dla dashboardow rolnika i konsumenta.
    Bez cache, kazde wywolanie skanuje kolekcje od nowa.
    """

    def __init__(
        self,
        products: ProductRepo,
        transactions: TransactionRepo,
        network: Optional[NetworkSimulator] = None,
    ):
        self.products = products
        self.transactions = transactions
        self.network = network or NetworkSimulator()

    @simulated(AGGREGATE)
    async def dashboard_stats(self, actor_id: Any, role: str = "farmer"):
        if role == "farmer":
            data = self._farmer_stats(actor_id)
        elif role == "consumer":
            data = self._consumer_stats(actor_id)
        else:
            raise ValueError(f"Unknown role: {role}")

        logger.info(f"Dashboard stats computed for {role} {actor_id}")
        return envelope(data)

    def _farmer_stats(self, farmer_id: Any) -> Dict[str, Any]:
        products = [p for p in self.products.snapshot() if same_id(p.get("farmer_id"), farmer_id)]
        transactions = [t for t in self.transactions.snapshot() if same_id(t.get("farmer_id"), farmer_id)]

        total_revenue = sum(_amount(t) for t in transactions if t.get("status") == "completed")

        monthly: Dict[str, Dict[str, Any]] = defaultdict(lambda: {"revenue": 0, "orders": 0})
        for t in transactions:
            month = _utc_month(t.get("transaction_date"))
            if month is None:
                continue
            monthly[month]["revenue"] += _amount(t)
            monthly[month]["orders"] += 1

        return {
            "totalProducts": len(products),
            "totalOrders": len(transactions),
            "totalRevenue": total_revenue,
            "pendingOrders": sum(1 for t in transactions if t.get("status") == "pending"),
            "monthlyStats": [{"month": m, **monthly[m]} for m in sorted(monthly)],
        }

    def _consumer_stats(self, buyer_id: Any) -> Dict[str, Any]:
        transactions = [t for t in self.transactions.snapshot() if same_id(t.get("buyer_id"), buyer_id)]
        transactions.sort(key=lambda t: parse_ts(t.get("transaction_date")), reverse=True)

        return {
            "totalPurchases": len(transactions),
            "totalSpent": sum(_amount(t) for t in transactions if t.get("status") == "completed"),
            "recentOrders": transactions[:RECENT_ORDERS_LIMIT],
            "favoriteCategories": self._favorite_categories(transactions),
        }

    def _favorite_categories(self, transactions: List[dict], top: int = 3) -> List[str]:
        categories = {str(p.get("id")): p.get("category") for p in self.products.snapshot()}
        counts = Counter(
            categories[str(t.get("product_id"))]
            for t in transactions
            if categories.get(str(t.get("product_id")))
        )
        return [category for category, _ in counts.most_common(top)]
