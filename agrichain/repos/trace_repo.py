# agrichain/repos/trace_repo.py
from typing import Any, Dict, Optional

from agrichain.data.collections import TRACES, CollectionStore
from agrichain.domain.errors import NotFoundError
from agrichain.repos.base import envelope, generate_id, ledger_hash, now_iso
from agrichain.utils.network import NetworkSimulator, TRACE, WRITE, simulated
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)


class TraceRepo:
    """Slad produktu w lancuchu dostaw, klucz to product_id (bez paginacji)."""

    def __init__(self, store: CollectionStore, network: Optional[NetworkSimulator] = None):
        self.store = store
        self.network = network or NetworkSimulator()

    def product_ids(self) -> list:
        return list(self.store.load(TRACES.name).items)

    @simulated(TRACE)
    async def get(self, product_id: Any):
        trace = self.store.load(TRACES.name).items.get(str(product_id))
        if not trace:
            raise NotFoundError(f"Trace data for product {product_id} not found")
        return envelope(trace)

    @simulated(WRITE)
    async def create(self, product_id: Any, data: Optional[Dict[str, Any]] = None):
        doc = self.store.load(TRACES.name)
        key = str(product_id)
        if key in doc.items:
            raise ValueError(f"Trace for product {product_id} already exists")

        now = now_iso()
        trace = {
            **(data or {}),
            "product_id": key,
            "timeline": [],
            "created_at": now,
            "updated_at": now,
        }
        doc.items[key] = trace
        self.store.save(doc)

        logger.info(f"Started trace for product {key}")
        return envelope(trace, message="Trace created successfully")

    @simulated(WRITE)
    async def append_step(self, product_id: Any, step: Dict[str, Any]):
        doc = self.store.load(TRACES.name)
        trace = doc.items.get(str(product_id))
        if not trace:
            raise NotFoundError(f"Trace data for product {product_id} not found")

        now = now_iso()
        new_step = {
            "step_id": generate_id("step"),
            **step,
            "timestamp": now,
            "blockchain_hash": ledger_hash(),
        }
        trace.setdefault("timeline", []).append(new_step)
        trace["updated_at"] = now
        self.store.save(doc)

        logger.info(f"Trace step {new_step['step_id']} added for product {product_id}")
        return envelope(trace, message="Trace step added successfully")
