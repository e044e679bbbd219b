#!/usr/bin/env python3
"""
Check that pool snapshots in the object store are readable.

Runs the same eager warm path the service uses at startup for each requested
chain and protocol, and prints a JSON summary of pool counts and errors.
Exits non-zero if any snapshot could not be loaded.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from service_pools.app.adapters.factory import OBJECT_STORE_BACKENDS, create_object_store_client
from service_pools.app.caching.local_cache import LocalPoolCache
from service_pools.app.caching.pool_cache import PoolCache
from service_pools.app.models import ChainId, Protocol
from service_pools.app.providers.subgraph_provider import eager_build_provider
from shared.errors import PoolCacheException


async def check(
    *,
    backend: str,
    object_store_url: Optional[str],
    region: Optional[str],
    token: str,
    bucket: str,
    base_key: str,
    chain_ids: List[int],
    protocols: List[str],
    timeout: float,
) -> Dict[str, Any]:
    """Load each snapshot once and collect the outcome."""
    object_store = create_object_store_client(
        backend,
        endpoint_url=object_store_url or None,
        token=token or None,
        timeout=timeout,
        region_name=region or None,
    )
    summary: Dict[str, Any] = {"bucket": bucket, "base_key": base_key, "loaded": {}, "errors": []}

    for raw_chain in chain_ids:
        for raw_protocol in protocols:
            chain_id = ChainId(raw_chain)
            protocol = Protocol(raw_protocol.upper())
            # Fresh cache per pair; the local key is shared across protocols
            pool_cache = PoolCache(LocalPoolCache(), object_store)
            label = f"{int(chain_id)}:{protocol.value}"
            try:
                provider = await eager_build_provider(protocol, chain_id, bucket, base_key, pool_cache)
                pools = await provider.get_pools()
            except PoolCacheException as exc:
                summary["errors"].append({"target": label, "code": exc.code, "message": exc.message})
                continue
            summary["loaded"][label] = len(pools)

    return summary


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check pool snapshots in the object store.")
    parser.add_argument("--backend", choices=OBJECT_STORE_BACKENDS, default=os.getenv("POOLS_OBJECT_STORE_BACKEND", "s3"), help="Object store backend")
    parser.add_argument("--object-store-url", default=os.getenv("POOLS_OBJECT_STORE_URL"), help="Object store endpoint (required for the http backend)")
    parser.add_argument("--region", default=os.getenv("POOLS_AWS_REGION"), help="AWS region for the s3 backend")
    parser.add_argument("--token", default=os.getenv("POOLS_OBJECT_STORE_TOKEN", ""), help="Bearer token for the object store")
    parser.add_argument("--bucket", default=os.getenv("POOLS_POOL_CACHE_BUCKET", "routing-pool-cache"), help="Bucket holding the snapshots")
    parser.add_argument("--base-key", default=os.getenv("POOLS_POOL_CACHE_BASE_KEY", "poolCache.json"), help="Snapshot base key")
    parser.add_argument("--chain", dest="chains", type=int, action="append", help="Chain id to check (repeatable, default 1)")
    parser.add_argument("--protocol", dest="protocols", choices=["V2", "V3", "v2", "v3"], action="append", help="Protocol to check (repeatable, default both)")
    parser.add_argument("--timeout", type=float, default=10.0, help="Object store timeout in seconds")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write JSON summary")
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    try:
        summary = asyncio.run(
            check(
                backend=args.backend,
                object_store_url=args.object_store_url,
                region=args.region,
                token=args.token,
                bucket=args.bucket,
                base_key=args.base_key,
                chain_ids=args.chains or [int(ChainId.MAINNET)],
                protocols=args.protocols or [p.value for p in Protocol],
                timeout=args.timeout,
            )
        )
    except KeyboardInterrupt:
        return 130
    except (ValueError, PoolCacheException) as exc:
        print(f"[pool-cache-check] invalid arguments: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(summary, indent=2))

    if args.output:
        args.output.write_text(json.dumps(summary, indent=2))

    return 1 if summary["errors"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
