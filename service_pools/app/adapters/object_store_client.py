"""
Object store client for pool snapshots.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol
from urllib.parse import quote

import httpx

from shared.errors import RemoteFetchError
from shared.logging import get_logger


@dataclass(frozen=True)
class StoredObject:
    """Result of an object get. body is None when the object has no content."""

    body: Optional[bytes]
    content_type: Optional[str] = None


class RemoteStoreClient(Protocol):
    """Minimal object store shape the pool cache depends on."""

    async def get_object(self, bucket: str, key: str) -> StoredObject:
        ...


class ObjectStoreClient:
    """Reads objects through an HTTP gateway fronting the bucket, using path-style URLs.

    Requests carry an optional bearer token and are not SigV4-signed; use
    S3ObjectStoreClient to talk to S3 directly.
    """

    def __init__(
        self,
        endpoint_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = endpoint_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self.logger = get_logger("pools.object_store")

    def object_url(self, bucket: str, key: str) -> str:
        return f"{self.base_url}/{quote(bucket, safe='')}/{quote(key, safe='/')}"

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def get_object(self, bucket: str, key: str) -> StoredObject:
        """Fetch a single object. Single attempt; no retries."""
        url = self.object_url(bucket, key)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            self.logger.error("Object store request failed", bucket=bucket, key=key, error=str(exc))
            raise RemoteFetchError(
                message=f"Request for {bucket}/{key} failed: {exc}",
                details={"bucket": bucket, "key": key}
            ) from exc

        if response.status_code == 200:
            self.logger.debug("Object retrieved", bucket=bucket, key=key, size=len(response.content))
            return StoredObject(
                body=response.content if response.content else None,
                content_type=response.headers.get("content-type"),
            )

        self.logger.error(
            "Object store returned an error",
            bucket=bucket,
            key=key,
            status_code=response.status_code,
        )
        raise RemoteFetchError(
            message=f"Unexpected status {response.status_code} for {bucket}/{key}",
            details={"bucket": bucket, "key": key, "status_code": response.status_code}
        )
