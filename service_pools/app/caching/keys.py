"""
Cache key derivation for pool snapshots.
"""

from ..models import ChainId, Protocol


def durable_pool_cache_key(base_key: str, chain_id: ChainId, protocol: Protocol) -> str:
    """Object store key for a pool snapshot.

    Offline jobs write snapshots under this key, so the format must not change.
    """
    return f"{base_key}-{int(chain_id)}-{Protocol(protocol).value}"


def local_pool_cache_key(chain_id: ChainId) -> str:
    """Local cache key for a chain. Shared by every protocol on that chain."""
    return f"pools{int(chain_id)}"
