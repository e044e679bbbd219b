"""
Subgraph pool providers backed by the object store pool cache.
"""

from typing import ClassVar, Dict, Generic, List, Type, TypeVar

from ..caching.pool_cache import PoolCache
from ..models import (
    ChainId,
    PoolVariant,
    Protocol,
    SubgraphPool,
    V2SubgraphPool,
    V3SubgraphPool,
    get_pool_variant,
)

T = TypeVar("T", bound=SubgraphPool)
P = TypeVar("P", bound="SubgraphPoolProvider")


class SubgraphPoolProvider(Generic[T]):
    """Serves cached pools for one chain and protocol."""

    protocol: ClassVar[Protocol]

    def __init__(self, chain_id: ChainId, bucket: str, base_key: str, pool_cache: PoolCache):
        self.chain_id = ChainId(chain_id)
        self.bucket = bucket
        self.base_key = base_key
        self.pool_cache = pool_cache

    @classmethod
    def variant(cls) -> PoolVariant[T]:
        return get_pool_variant(cls.protocol)

    async def get_pools(self) -> List[T]:
        return await self.pool_cache.fetch_pools(self.chain_id, self.variant(), self.bucket, self.base_key)

    @classmethod
    async def eager_build(
        cls: Type[P],
        bucket: str,
        base_key: str,
        chain_id: ChainId,
        pool_cache: PoolCache,
    ) -> P:
        """Populate the local cache from the object store, then build the provider."""
        await pool_cache.cache_pools_from_remote(bucket, base_key, ChainId(chain_id), cls.variant())
        return cls(chain_id, bucket, base_key, pool_cache)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(chain_id={int(self.chain_id)}, "
            f"bucket={self.bucket!r}, base_key={self.base_key!r})"
        )


class V2SubgraphPoolProvider(SubgraphPoolProvider[V2SubgraphPool]):
    protocol = Protocol.V2


class V3SubgraphPoolProvider(SubgraphPoolProvider[V3SubgraphPool]):
    protocol = Protocol.V3


PROVIDER_CLASSES: Dict[Protocol, Type[SubgraphPoolProvider]] = {
    Protocol.V2: V2SubgraphPoolProvider,
    Protocol.V3: V3SubgraphPoolProvider,
}


def build_provider(
    protocol: Protocol,
    chain_id: ChainId,
    bucket: str,
    base_key: str,
    pool_cache: PoolCache,
) -> SubgraphPoolProvider:
    """Build the provider for a protocol without touching the cache."""
    return PROVIDER_CLASSES[Protocol(protocol)](chain_id, bucket, base_key, pool_cache)


async def eager_build_provider(
    protocol: Protocol,
    chain_id: ChainId,
    bucket: str,
    base_key: str,
    pool_cache: PoolCache,
) -> SubgraphPoolProvider:
    """Warm the cache for a protocol and return its provider."""
    return await PROVIDER_CLASSES[Protocol(protocol)].eager_build(bucket, base_key, chain_id, pool_cache)
