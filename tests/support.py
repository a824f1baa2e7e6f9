"""Shared builders for the test suite: in-memory store, no latency, no faults."""
from typing import Optional
from unittest.mock import Mock

from agrichain.data.collections import CollectionStore
from agrichain.data.seed import bootstrap
from agrichain.data.store import MemoryKeyValueStore
from agrichain.services.registry import Services, build_services
from agrichain.utils.network import NetworkSimulator


def make_store(quota_bytes: Optional[int] = None) -> CollectionStore:
    return bootstrap(kv=MemoryKeyValueStore(quota_bytes=quota_bytes))


def make_services(
    store: Optional[CollectionStore] = None,
    network: Optional[NetworkSimulator] = None,
) -> Services:
    return build_services(
        store or make_store(),
        network or NetworkSimulator(),
        notifications=Mock(),
    )
