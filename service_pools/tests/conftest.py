"""
Shared fixtures for pool cache tests.
"""

import json
from typing import Dict, List, Optional, Tuple

import pytest
from prometheus_client import CollectorRegistry

from shared.errors import RemoteFetchError
from shared.metrics import MetricsCollector
from service_pools.app.adapters.object_store_client import StoredObject
from service_pools.app.caching.local_cache import LocalPoolCache
from service_pools.app.caching.pool_cache import PoolCache


class FakeClock:
    """Manually advanced timer for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeObjectStore:
    """In-memory object store recording every get."""

    def __init__(self, objects: Optional[Dict[Tuple[str, str], Optional[bytes]]] = None):
        self.objects = dict(objects or {})
        self.calls: List[Tuple[str, str]] = []

    def put_json(self, bucket: str, key: str, payload) -> None:
        self.objects[(bucket, key)] = json.dumps(payload).encode("utf-8")

    async def get_object(self, bucket: str, key: str) -> StoredObject:
        self.calls.append((bucket, key))
        if (bucket, key) not in self.objects:
            raise RemoteFetchError(message=f"NoSuchKey {bucket}/{key}", details={"bucket": bucket, "key": key})
        return StoredObject(body=self.objects[(bucket, key)])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def local_cache(clock):
    return LocalPoolCache(timer=clock)


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def metrics(registry):
    return MetricsCollector("pools", registry)


@pytest.fixture
def pool_cache(local_cache, object_store, metrics):
    return PoolCache(local_cache, object_store, metrics=metrics)


@pytest.fixture
def v3_pools():
    return [
        {
            "id": "0x8ad599c3a0ff1de082011efddc58f1908eb6e6d8",
            "feeTier": "3000",
            "liquidity": "22429140474985281549",
            "token0": {"id": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"},
            "token1": {"id": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"},
            "tvlETH": 92348.1,
            "tvlUSD": 301234567.2,
        },
        {
            "id": "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640",
            "feeTier": "500",
            "liquidity": "11429140474985281549",
            "token0": {"id": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"},
            "token1": {"id": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"},
            "tvlETH": 50000.0,
            "tvlUSD": 160000000.0,
        },
    ]


@pytest.fixture
def v2_pools():
    return [
        {
            "id": "0xb4e16d0168e52d35cacd2c6185b44281ec28c9dc",
            "token0": {"id": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"},
            "token1": {"id": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"},
            "supply": 1.2,
            "reserve": 84000.5,
            "reserveUSD": 250000000.0,
        }
    ]
