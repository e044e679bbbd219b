"""
Subgraph pool providers: typed per-protocol facades over PoolCache.
"""

from .subgraph_provider import (
    PROVIDER_CLASSES,
    SubgraphPoolProvider,
    V2SubgraphPoolProvider,
    V3SubgraphPoolProvider,
    build_provider,
    eager_build_provider,
)

__all__ = [
    "PROVIDER_CLASSES",
    "SubgraphPoolProvider",
    "V2SubgraphPoolProvider",
    "V3SubgraphPoolProvider",
    "build_provider",
    "eager_build_provider",
]
