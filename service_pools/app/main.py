"""
Pool cache service: serves cached subgraph pools over HTTP.
"""

from typing import Any, Dict, Optional, Tuple

from fastapi import Query
from prometheus_client import CollectorRegistry

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.errors import PoolCacheException, ValidationError
from shared.logging import set_pool_context
from .adapters.factory import create_object_store_client
from .adapters.object_store_client import RemoteStoreClient
from .caching.local_cache import LocalPoolCache
from .caching.pool_cache import PoolCache
from .models import ChainId, Protocol
from .providers.subgraph_provider import SubgraphPoolProvider, build_provider, eager_build_provider


class PoolCacheService(BaseService):
    """Pool cache service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        object_store: Optional[RemoteStoreClient] = None,
        local_cache: Optional[LocalPoolCache] = None,
        registry: Optional[CollectorRegistry] = None,
    ):
        super().__init__("pools", 8000, config=config, registry=registry)
        self.object_store = object_store if object_store is not None else create_object_store_client(
            self.config.object_store_backend,
            endpoint_url=self.config.object_store_url,
            token=self.config.object_store_token,
            timeout=self.config.object_store_timeout_seconds,
            region_name=self.config.aws_region,
        )
        self.local_cache = local_cache if local_cache is not None else LocalPoolCache()
        self.pool_cache = PoolCache(self.local_cache, self.object_store, metrics=self.metrics)
        self.providers: Dict[Tuple[ChainId, Protocol], SubgraphPoolProvider] = {}

        self._setup_pool_routes()

    async def on_startup(self) -> None:
        """Build a provider per configured chain and protocol."""
        for chain_id, protocol in self._configured_pairs():
            self.providers[(chain_id, protocol)] = await self._build_provider(chain_id, protocol)

        self.logger.info(
            "Pool providers ready",
            providers=[f"{int(chain)}:{protocol.value}" for chain, protocol in self.providers],
            eager_warm=self.config.eager_warm,
        )

    def _configured_pairs(self):
        for raw_chain in self.config.chain_ids:
            for raw_protocol in self.config.protocols:
                yield ChainId(raw_chain), Protocol(raw_protocol)

    async def _build_provider(self, chain_id: ChainId, protocol: Protocol) -> SubgraphPoolProvider:
        bucket = self.config.pool_cache_bucket
        base_key = self.config.pool_cache_base_key

        if not self.config.eager_warm:
            return build_provider(protocol, chain_id, bucket, base_key, self.pool_cache)

        try:
            return await eager_build_provider(protocol, chain_id, bucket, base_key, self.pool_cache)
        except PoolCacheException as exc:
            # Requests will fetch lazily once the snapshot is readable
            self.logger.error(
                "Failed to warm pool cache",
                chain_id=int(chain_id),
                protocol=protocol.value,
                code=exc.code,
                error=exc.message,
            )
            self.metrics.record_error(exc.code)
            return build_provider(protocol, chain_id, bucket, base_key, self.pool_cache)

    def get_provider(self, chain_id: int, protocol: str) -> SubgraphPoolProvider:
        """Resolve the provider serving a chain and protocol."""
        try:
            chain = ChainId(chain_id)
        except ValueError:
            raise ValidationError(f"Unknown chain id {chain_id}", {"chain_id": chain_id})

        try:
            proto = Protocol(protocol.upper())
        except ValueError:
            raise ValidationError(f"Unknown protocol {protocol}", {"protocol": protocol})

        provider = self.providers.get((chain, proto))
        if provider is None:
            raise ValidationError(
                f"Pools for protocol {proto.value} on chain {int(chain)} are not served",
                {"chain_id": int(chain), "protocol": proto.value},
            )
        return provider

    async def _check_dependencies(self) -> Dict[str, Any]:
        return {
            "object_store": {
                "backend": self.config.object_store_backend,
                "endpoint": self.config.object_store_url,
            },
            "local_cache": self.local_cache.stats(),
            "providers": len(self.providers),
        }

    def _setup_pool_routes(self):
        """Set up pool routes."""

        @self.app.get("/")
        async def root():
            return {
                "service": self.service_name,
                "message": "Subgraph pool cache",
                "version": "1.0.0",
            }

        @self.app.get("/v1/pools/{protocol}")
        async def get_pools(protocol: str, chain_id: int = Query(default=int(ChainId.MAINNET))):
            """Return the cached pools for a protocol on a chain."""
            provider = self.get_provider(chain_id, protocol)
            set_pool_context(int(provider.chain_id), provider.protocol.value)

            pools = await provider.get_pools()
            return {
                "chain_id": int(provider.chain_id),
                "protocol": provider.protocol.value,
                "count": len(pools),
                "pools": [pool.model_dump(exclude_unset=True) for pool in pools],
            }


def create_app():
    """Create FastAPI application."""
    service = PoolCacheService()
    return service.app


if __name__ == "__main__":
    service = PoolCacheService()
    service.run()
