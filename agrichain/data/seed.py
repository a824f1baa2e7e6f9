# agrichain/data/seed.py
import json
from pathlib import Path
from typing import Any, Dict, Optional

from agrichain.data.collections import COLLECTIONS, CollectionStore
from agrichain.data.store import KeyValueStore, open_store
from agrichain.utils.settings import STORE_URL, STORE_QUOTA_BYTES
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixtures(directory: Path = FIXTURES_DIR) -> Dict[str, Any]:
    fixtures = {}
    for name in COLLECTIONS:
        with open(directory / f"{name}.json", encoding="utf-8") as f:
            fixtures[name] = json.load(f)
    return fixtures


def bootstrap(
    url: Optional[str] = None,
    kv: Optional[KeyValueStore] = None,
    fixtures: Optional[Dict[str, Any]] = None,
) -> CollectionStore:
    """
    Jednorazowa inicjalizacja magazynu przy starcie procesu.
    Seeduje brakujace kolekcje i naprawia uszkodzone, zanim ktorekolwiek
    repozytorium zostanie uzyte.
    """
    if kv is None:
        kv = open_store(url or STORE_URL, quota_bytes=STORE_QUOTA_BYTES)

    store = CollectionStore(kv, fixtures or load_fixtures())
    healed = store.heal()
    logger.info(f"Store ready ({type(kv).__name__}), seeded: {healed or 'nothing'}")
    return store
