# agrichain/services/claim_service.py
import random
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from agrichain.data.collections import CollectionStore
from agrichain.services.notification_service import NotificationService
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

CLAIMS_KEY = "agrichain-farmer-claims:{farmer}"


class ClaimService:
    """Zgloszenia szkod (ubezpieczenie upraw) trzymane osobno dla kazdego rolnika."""

    def __init__(
        self,
        store: CollectionStore,
        notifications: Optional[NotificationService] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.notifications = notifications or NotificationService()
        self.rng = rng or random.Random()

    def list(self, farmer: str) -> List[Dict[str, Any]]:
        claims = self.store.get_value(CLAIMS_KEY.format(farmer=farmer), [])
        return claims if isinstance(claims, list) else []

    def submit(self, farmer: str, claim: Dict[str, Any]) -> Dict[str, Any]:
        if not claim.get("type"):
            raise ValueError("Claim type is required")

        claims = self.list(farmer)
        new_claim = {
            "id": int(time.time() * 1000),
            **claim,
            "status": "Pending",
            "submitted_date": datetime.now(timezone.utc).date().isoformat(),
            #szacowana kwota odszkodowania
            "amount": self.rng.randrange(5000, 20000),
        }
        #unikalne id w obrebie listy rolnika
        while any(c.get("id") == new_claim["id"] for c in claims):
            new_claim["id"] += 1

        claims.append(new_claim)
        self.store.put_value(CLAIMS_KEY.format(farmer=farmer), claims)

        logger.info(f"Claim {new_claim['id']} submitted by farmer {farmer}")

        try:
            self.notifications.send_claim_notification(farmer, new_claim["id"])
        except Exception as e:
            logger.warning(f"Failed to queue notification for claim {new_claim['id']}: {e}")

        return new_claim
