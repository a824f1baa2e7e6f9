# agrichain/services/admin_service.py
from typing import Optional

from agrichain.data.collections import COLLECTIONS, CollectionStore
from agrichain.repos.base import envelope, now_iso
from agrichain.utils.network import MAINTENANCE, NetworkSimulator, simulated
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)


class AdminService:
    """Operacje serwisowe na calym magazynie (reset do danych startowych, liczniki)."""

    def __init__(self, store: CollectionStore, network: Optional[NetworkSimulator] = None):
        self.store = store
        self.network = network or NetworkSimulator()

    @simulated(MAINTENANCE)
    async def clear_all_data(self):
        self.store.reset()
        logger.info("All collections cleared and reinitialized from fixtures")
        return envelope(message="All data cleared and reinitialized")

    @simulated(MAINTENANCE)
    async def data_stats(self):
        stats = {name: len(self.store.load(name).items) for name in COLLECTIONS}
        stats["lastUpdated"] = now_iso()
        return envelope(stats)
