# agrichain/data/store.py
import json
from typing import Any, List, Optional

import redis
from redis.exceptions import RedisError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from agrichain.data.database import Base, make_engine, make_session_factory
from agrichain.data.models.document import DocumentModel
from agrichain.utils.retry import store_retry
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)


class QuotaExceededError(Exception):
    pass


class KeyValueStore:
    """
    Trwaly magazyn klucz -> dokument JSON.
    get nigdy nie rzuca dla brakujacego lub uszkodzonego wpisu (zwraca None),
    set zwraca False zamiast rzucac.
    Backend implementuje _read / _write / _delete / _keys na surowym tekscie.
    """

    #bledy backendu ktore zamieniamy na False przy zapisie
    write_errors: tuple = (QuotaExceededError,)

    def get(self, key: str) -> Optional[Any]:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Stored value for {key} is not valid JSON: {e}")
            return None

    def set(self, key: str, value: Any) -> bool:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Value for {key} is not JSON serializable: {e}")
            return False

        try:
            self._write(key, raw)
        except self.write_errors as e:
            logger.error(f"Error saving {key}: {e}")
            return False
        return True

    def delete(self, key: str) -> None:
        self._delete(key)

    def keys(self, prefix: str = "") -> List[str]:
        return sorted(k for k in self._keys() if k.startswith(prefix))

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError

    def _delete(self, key: str) -> None:
        raise NotImplementedError

    def _keys(self) -> List[str]:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Slownik w procesie, opcjonalny limit bajtow jak quota w przegladarce."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.data: dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def _read(self, key):
        return self.data.get(key)

    def _write(self, key, raw):
        if self.quota_bytes is not None:
            used = sum(len(v) for k, v in self.data.items() if k != key)
            if used + len(raw) > self.quota_bytes:
                raise QuotaExceededError(
                    f"Quota of {self.quota_bytes} bytes exceeded writing {key}"
                )
        self.data[key] = raw

    def _delete(self, key):
        self.data.pop(key, None)

    def _keys(self):
        return list(self.data)


class SqlKeyValueStore(KeyValueStore):
    """Tabela kv_documents przez SQLAlchemy (sqlite lokalnie, postgres w dockerze)."""

    write_errors = (SQLAlchemyError,)

    def __init__(self, url: str):
        self.engine = make_engine(url)
        self.SessionLocal = make_session_factory(self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Document tables ready: {list(Base.metadata.tables.keys())}")

    @store_retry()
    def _read(self, key):
        with self.SessionLocal() as db:
            doc = db.get(DocumentModel, key)
            return doc.value if doc else None

    @store_retry()
    def _write(self, key, raw):
        with self.SessionLocal() as db:
            try:
                doc = db.get(DocumentModel, key)
                if doc:
                    doc.value = raw
                else:
                    db.add(DocumentModel(key=key, value=raw))
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise

    @store_retry()
    def _delete(self, key):
        with self.SessionLocal() as db:
            doc = db.get(DocumentModel, key)
            if doc:
                db.delete(doc)
                db.commit()

    @store_retry()
    def _keys(self):
        with self.SessionLocal() as db:
            return list(db.execute(select(DocumentModel.key)).scalars().all())


class RedisKeyValueStore(KeyValueStore):
    """Klucze redisa jako zwykle stringi, wspoldzielone miedzy procesami."""

    write_errors = (RedisError,)

    def __init__(self, url: str):
        self.redis = redis.Redis.from_url(url, decode_responses=True)

    @store_retry()
    def _read(self, key):
        return self.redis.get(key)

    @store_retry()
    def _write(self, key, raw):
        self.redis.set(key, raw)

    @store_retry()
    def _delete(self, key):
        self.redis.delete(key)

    @store_retry()
    def _keys(self):
        return list(self.redis.scan_iter(match="agrichain*"))


def open_store(url: str, quota_bytes: Optional[int] = None) -> KeyValueStore:
    if url.startswith("memory://"):
        return MemoryKeyValueStore(quota_bytes=quota_bytes)
    if url.startswith(("redis://", "rediss://")):
        return RedisKeyValueStore(url)
    return SqlKeyValueStore(url)
