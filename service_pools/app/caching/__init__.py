"""
Pool caching package.

A process-local TTL tier (LocalPoolCache) fronting pool snapshots kept in a
durable object store. PoolCache reads through the local tier and populates
it from the object store on a miss.
"""

from .keys import durable_pool_cache_key, local_pool_cache_key
from .local_cache import LocalPoolCache, POOL_CACHE_TTL_SECONDS
from .pool_cache import PoolCache

__all__ = [
    "durable_pool_cache_key",
    "local_pool_cache_key",
    "LocalPoolCache",
    "POOL_CACHE_TTL_SECONDS",
    "PoolCache",
]
