# agrichain/repos/base.py
import math
import random
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from agrichain.data.collections import CollectionDocument, CollectionSpec, CollectionStore
from agrichain.domain.errors import NotFoundError
from agrichain.utils.network import NetworkSimulator, READ, WRITE, simulated
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

_BASE36 = string.ascii_lowercase + string.digits
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_ts(value: Any) -> datetime:
    """ISO-8601 -> datetime (UTC); brak lub smieci sortuja sie na koniec."""
    if not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def random_suffix(length: int = 9) -> str:
    return "".join(random.choices(_BASE36, k=length))


def generate_id(prefix: str) -> str:
    #timestamp + losowy sufiks zeby uniknac kolizji przy szybkich zapisach
    return f"{prefix}-{int(time.time() * 1000)}-{random_suffix()}"


def ledger_hash() -> str:
    return f"0x{secrets.token_hex(32)}"


def same_id(a: Any, b: Any) -> bool:
    """Porownanie luzne, id przychodzi raz jako str raz jako int."""
    if a is None or b is None:
        return False
    return str(a) == str(b)


def field_value(item: dict, path: str) -> Any:
    value: Any = item
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def matches_text(item: dict, fields: Tuple[str, ...], term: str) -> bool:
    term = term.lower()
    for path in fields:
        value = field_value(item, path)
        values = value if isinstance(value, list) else [value]
        if any(v is not None and term in str(v).lower() for v in values):
            return True
    return False


def paginate(items: List[dict], page: Any, limit: Any) -> Tuple[List[dict], Dict[str, Any]]:
    page = max(1, int(page or 1))
    limit = max(1, int(limit))
    start = (page - 1) * limit
    end = start + limit
    total = len(items)

    return items[start:end], {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
        "hasNext": end < total,
        "hasPrev": page > 1,
    }


def envelope(data: Any = None, pagination: Optional[dict] = None, message: Optional[str] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"success": True, "data": data}
    if pagination is not None:
        out["pagination"] = pagination
    if message is not None:
        out["message"] = message
    return out


class CollectionRepo:
    """
    CRUD + zapytania nad jedna kolekcja.
    Podklasy ustawiaja spec, prefiks id, domyslny limit, pola wyszukiwania
    i nadpisuja _filter / _sort / _defaults tam gdzie kolekcja sie rozni.
    """

    spec: CollectionSpec
    label = "Item"
    id_prefix = "item"
    default_limit = 10
    search_fields: Tuple[str, ...] = ()

    def __init__(self, store: CollectionStore, network: Optional[NetworkSimulator] = None):
        self.store = store
        self.network = network or NetworkSimulator()

    @property
    def id_field(self) -> str:
        return self.spec.id_field

    # ----------------------------------------------------------- hooks
    def _filter(self, items: List[dict], filters: Dict[str, Any]) -> List[dict]:
        search = filters.get("search")
        if search and self.search_fields:
            items = [i for i in items if matches_text(i, self.search_fields, str(search))]
        return items

    def _sort(self, items: List[dict]) -> List[dict]:
        return items

    def _new_id(self) -> str:
        return generate_id(self.id_prefix)

    def _defaults(self, now: str) -> Dict[str, Any]:
        return {"status": "active"}

    def _stamps(self, now: str) -> Dict[str, Any]:
        """Pola nadpisywane zawsze przy create, niezaleznie od danych klienta."""
        return {}

    def _validate(self, record: dict) -> None:
        pass

    # ---------------------------------------------------------- helpers
    def _load(self) -> CollectionDocument:
        return self.store.load(self.spec.name)

    def _index_of(self, items: List[dict], item_id: Any) -> int:
        for idx, item in enumerate(items):
            if same_id(item.get(self.id_field), item_id):
                return idx
        return -1

    def _not_found(self, item_id: Any) -> NotFoundError:
        return NotFoundError(f"{self.label} with ID {item_id} not found")

    def snapshot(self) -> List[dict]:
        """Cala kolekcja bez symulacji sieci, dla serwisow agregujacych."""
        return list(self._load().items)

    # ------------------------------------------------------------ query
    @simulated(READ)
    async def list(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: Optional[int] = None):
        filters = {k: v for k, v in (filters or {}).items() if v is not None and v != ""}

        items = self._filter(self.snapshot(), filters)
        items = self._sort(items)
        page_items, pagination = paginate(items, page, limit or self.default_limit)

        logger.info(
            f"{self.spec.name}: returning {len(page_items)} of {pagination['total']} "
            f"(page {pagination['page']}, filters {filters})"
        )
        return envelope(page_items, pagination)

    @simulated(READ)
    async def get_by_id(self, item_id: Any):
        items = self.snapshot()
        idx = self._index_of(items, item_id)
        if idx == -1:
            raise self._not_found(item_id)
        return envelope(items[idx])

    # --------------------------------------------------------- commands
    @simulated(WRITE)
    async def create(self, data: Dict[str, Any]):
        doc = self._load()
        now = now_iso()

        record = {self.id_field: self._new_id()}
        record.update({k: v for k, v in data.items() if k != self.id_field})
        record["created_at"] = now
        record["updated_at"] = now
        record.update(self._stamps(now))
        for key, value in self._defaults(now).items():
            if record.get(key) is None:
                record[key] = value
        self._validate(record)

        doc.items.append(record)
        self.store.save(doc)

        logger.info(f"Created {self.spec.name} record {record[self.id_field]}")
        return envelope(record, message=f"{self.label} created successfully")

    @simulated(WRITE)
    async def update(self, item_id: Any, patch: Dict[str, Any]):
        doc = self._load()
        idx = self._index_of(doc.items, item_id)
        if idx == -1:
            raise self._not_found(item_id)

        current = doc.items[idx]
        updated = {**current, **patch, "updated_at": now_iso()}
        #id nie moze zostac nadpisany patchem
        updated[self.id_field] = current[self.id_field]
        self._validate(updated)

        doc.items[idx] = updated
        self.store.save(doc)

        logger.info(f"Updated {self.spec.name} record {item_id}: {sorted(patch)}")
        return envelope(updated, message=f"{self.label} updated successfully")

    @simulated(WRITE)
    async def delete(self, item_id: Any):
        if item_id is None or item_id == "":
            raise ValueError(f"{self.label} ID is required")

        doc = self._load()
        idx = self._index_of(doc.items, item_id)
        if idx == -1:
            raise self._not_found(item_id)

        removed = doc.items.pop(idx)
        self.store.save(doc)

        logger.info(f"Deleted {self.spec.name} record {item_id}")
        return envelope(removed, message=f"{self.label} deleted successfully")
