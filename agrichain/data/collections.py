# agrichain/data/collections.py
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from agrichain.data.store import KeyValueStore
from agrichain.domain.errors import StorageWriteError
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

ARRAY = "array"        # [...]
WRAPPED = "wrapped"    # {"products": [...]} / {"products": {pid: trace}}
MAPPING = "mapping"    # {pid: trace}, tylko dla trace


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    key: str
    wrapper: str
    keyed: bool = False
    id_field: str = "id"


PRODUCTS = CollectionSpec("products", "agrichain-products", "products")
FARMERS = CollectionSpec("farmers", "agrichain-farmers", "farmers", id_field="farmer_id")
TRACES = CollectionSpec("traces", "agrichain-traces", "products", keyed=True, id_field="product_id")
TRANSACTIONS = CollectionSpec(
    "transactions", "agrichain-transactions", "transactions", id_field="transaction_id"
)
SCHEMES = CollectionSpec("schemes", "agrichain-schemes", "schemes")

COLLECTIONS: Dict[str, CollectionSpec] = {
    spec.name: spec for spec in (PRODUCTS, FARMERS, TRACES, TRANSACTIONS, SCHEMES)
}


@dataclass
class CollectionDocument:
    """
    Kolekcja po normalizacji: items to lista (lub dict product_id -> trace),
    shape zapamietuje fizyczny ksztalt odczytu, extra to pozostale klucze wrappera.
    dump() zapisuje w tym samym ksztalcie w jakim przeczytano.
    """

    spec: CollectionSpec
    items: Union[List[dict], Dict[str, dict]]
    shape: str = WRAPPED
    extra: Dict[str, Any] = field(default_factory=dict)

    def dump(self) -> Any:
        if self.shape == ARRAY:
            if self.spec.keyed:
                return list(self.items.values())
            return self.items
        if self.shape == MAPPING:
            return self.items
        return {**self.extra, self.spec.wrapper: self.items}


def parse_document(spec: CollectionSpec, raw: Any) -> Optional[CollectionDocument]:
    """Zwraca None gdy dokument nie ma zadnego z akceptowanych ksztaltow."""
    if spec.keyed:
        return _parse_keyed(spec, raw)

    if isinstance(raw, list):
        if not all(isinstance(i, dict) for i in raw):
            return None
        return CollectionDocument(spec, raw, ARRAY)

    if isinstance(raw, dict) and isinstance(raw.get(spec.wrapper), list):
        items = raw[spec.wrapper]
        if not all(isinstance(i, dict) for i in items):
            return None
        extra = {k: v for k, v in raw.items() if k != spec.wrapper}
        return CollectionDocument(spec, items, WRAPPED, extra)

    return None


def _parse_keyed(spec: CollectionSpec, raw: Any) -> Optional[CollectionDocument]:
    if isinstance(raw, list):
        items = {}
        for trace in raw:
            if not isinstance(trace, dict):
                return None
            pid = trace.get("product_id", trace.get("id"))
            if pid is None:
                return None
            items[str(pid)] = trace
        return CollectionDocument(spec, items, ARRAY)

    if not isinstance(raw, dict):
        return None

    if isinstance(raw.get(spec.wrapper), dict):
        extra = {k: v for k, v in raw.items() if k != spec.wrapper}
        return CollectionDocument(spec, raw[spec.wrapper], WRAPPED, extra)

    if all(isinstance(v, dict) for v in raw.values()):
        return CollectionDocument(spec, raw, MAPPING)

    return None


class CollectionStore:
    """
    Uchwyt na magazyn tworzony raz przy starcie (bootstrap) i przekazywany
    do repozytoriow. Pilnuje zeby kazda kolekcja byla poprawna zanim ja zwroci.
    """

    def __init__(self, kv: KeyValueStore, fixtures: Dict[str, Any]):
        self.kv = kv
        self.fixtures = fixtures

    # ------------------------------------------------------------ kolekcje
    def load(self, name: str) -> CollectionDocument:
        spec = COLLECTIONS[name]
        doc = parse_document(spec, self.kv.get(spec.key))
        if doc is None:
            logger.warning(f"Corrupted or missing data for {spec.key}, reinitializing from fixtures")
            return self._reseed(spec)
        return doc

    def save(self, doc: CollectionDocument) -> None:
        if not self.kv.set(doc.spec.key, doc.dump()):
            raise StorageWriteError(f"Failed to save {doc.spec.name} data")

    def heal(self) -> List[str]:
        """Sprawdza wszystkie kolekcje, uszkodzone nadpisuje danymi startowymi."""
        healed = []
        for spec in COLLECTIONS.values():
            if parse_document(spec, self.kv.get(spec.key)) is None:
                self._reseed(spec)
                healed.append(spec.name)
        if healed:
            logger.info(f"Reseeded collections: {healed}")
        return healed

    def reset(self) -> None:
        for spec in COLLECTIONS.values():
            self.kv.delete(spec.key)
        self.heal()

    def _reseed(self, spec: CollectionSpec) -> CollectionDocument:
        seed = copy.deepcopy(self.fixtures[spec.name])
        if not self.kv.set(spec.key, seed):
            # odczyt dalej dziala na danych startowych w pamieci
            logger.error(f"Could not persist fixtures for {spec.key}")
        doc = parse_document(spec, copy.deepcopy(seed))
        if doc is None:
            raise ValueError(f"Fixture for {spec.name} has an unsupported shape")
        return doc

    # ---------------------------------------------- klucze sesji / pochodne
    def get_value(self, key: str, default: Any = None) -> Any:
        value = self.kv.get(key)
        return default if value is None else value

    def put_value(self, key: str, value: Any) -> None:
        if not self.kv.set(key, value):
            raise StorageWriteError(f"Failed to save {key}")

    def drop_value(self, key: str) -> None:
        self.kv.delete(key)
