"""
Read-through pool cache: local TTL tier backed by the object store.
"""

import json
from contextlib import nullcontext
from typing import TYPE_CHECKING, List, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from shared.errors import DeserializationError, RemoteFetchError
from shared.logging import get_logger
from ..adapters.object_store_client import RemoteStoreClient
from ..models import ChainId, PoolVariant, SubgraphPool
from .keys import durable_pool_cache_key, local_pool_cache_key
from .local_cache import LocalPoolCache

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector

T = TypeVar("T", bound=SubgraphPool)

LOG_SAMPLE_SIZE = 5


class PoolCache:
    """Serves pool lists from the local cache, falling back to the object store.

    Concurrent misses for the same chain are not coalesced; each performs its
    own fetch and the last write wins.
    """

    def __init__(
        self,
        local_cache: LocalPoolCache,
        object_store: RemoteStoreClient,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.local_cache = local_cache
        self.object_store = object_store
        self.metrics = metrics
        self.logger = get_logger("pools.cache")

    async def fetch_pools(
        self,
        chain_id: ChainId,
        variant: PoolVariant[T],
        bucket: str,
        base_key: str,
    ) -> List[T]:
        """Return pools for a chain, reading through to the object store on a miss."""
        protocol = variant.protocol.value
        cached_pools = self.local_cache.get(local_pool_cache_key(chain_id))

        if cached_pools is not None:
            self.logger.info(
                f"Subgraph pools fetched from local cache for protocol {protocol}",
                subgraph_pools_sample=[_sample(pool) for pool in cached_pools[:LOG_SAMPLE_SIZE]],
                count=len(cached_pools),
                chain_id=int(chain_id),
            )
            self._increment("pool_cache_hits_total", chain_id=str(int(chain_id)), protocol=protocol)
            return cached_pools

        self.logger.info(
            f"Subgraph pools local cache miss for protocol {protocol}, getting pools from object store",
            bucket=bucket,
            key=base_key,
            chain_id=int(chain_id),
        )
        self._increment("pool_cache_misses_total", chain_id=str(int(chain_id)), protocol=protocol)
        return await self.cache_pools_from_remote(bucket, base_key, chain_id, variant)

    async def cache_pools_from_remote(
        self,
        bucket: str,
        base_key: str,
        chain_id: ChainId,
        variant: PoolVariant[T],
    ) -> List[T]:
        """Fetch a pool snapshot, decode it and store it in the local cache.

        Raises RemoteFetchError when the object cannot be read or has no body,
        and DeserializationError when it is not a JSON array of pool records.
        The local cache is only written on success.
        """
        protocol = variant.protocol.value
        key = durable_pool_cache_key(base_key, chain_id, variant.protocol)
        result = "error"
        timer = (
            self.metrics.time_operation("pool_cache_remote_fetch_duration_seconds", protocol=protocol)
            if self.metrics
            else nullcontext()
        )

        try:
            with timer:
                try:
                    stored = await self.object_store.get_object(bucket, key)
                except RemoteFetchError:
                    raise
                except Exception as exc:
                    raise RemoteFetchError(
                        message=f"Could not get subgraph pool cache for protocol {protocol}: {exc}",
                        details={"bucket": bucket, "key": key},
                    ) from exc

                if not stored.body:
                    raise RemoteFetchError(
                        message=f"Could not get subgraph pool cache for protocol {protocol}: object has no body",
                        details={"bucket": bucket, "key": key},
                    )

                pools = self._deserialize(stored.body, variant, bucket, key)
                result = "success"
        finally:
            self._increment(
                "pool_cache_remote_fetch_total",
                chain_id=str(int(chain_id)),
                protocol=protocol,
                result=result,
            )

        self.logger.info(
            f"Got subgraph pools from object store for protocol {protocol} on {int(chain_id)}",
            bucket=bucket,
            key=key,
            chain_id=int(chain_id),
            count=len(pools),
        )

        self.local_cache.set(local_pool_cache_key(chain_id), pools)
        if self.metrics:
            self.metrics.set_gauge("pool_cache_entries", len(self.local_cache))
        return pools

    def _deserialize(self, body: bytes, variant: PoolVariant[T], bucket: str, key: str) -> List[T]:
        details = {"bucket": bucket, "key": key, "protocol": variant.protocol.value}

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DeserializationError(f"Pool payload is not valid JSON: {exc}", details) from exc

        if not isinstance(payload, list):
            raise DeserializationError(
                f"Pool payload must be a JSON array, got {type(payload).__name__}",
                details,
            )

        try:
            return variant.parse(payload)
        except PydanticValidationError as exc:
            raise DeserializationError(
                f"Pool payload elements must be JSON objects for {variant.record_type.__name__}",
                {**details, "errors": exc.error_count()},
            ) from exc

    def _increment(self, metric_name: str, **labels) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, **labels)


def _sample(pool) -> object:
    if isinstance(pool, SubgraphPool):
        return pool.model_dump(exclude_none=True)
    return pool
