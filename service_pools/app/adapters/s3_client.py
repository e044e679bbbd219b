"""
AWS S3 client for pool snapshots.
"""

from typing import Optional

from aiobotocore.config import AioConfig
from aiobotocore.session import AioSession, get_session
from botocore.exceptions import BotoCoreError, ClientError

from shared.errors import RemoteFetchError
from shared.logging import get_logger
from .object_store_client import StoredObject


class S3ObjectStoreClient:
    """Reads objects from S3 with SigV4-signed requests.

    Credentials come from the standard AWS chain (environment, shared config,
    instance or task role).
    """

    def __init__(
        self,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[AioSession] = None,
    ):
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._session = session or get_session()
        self._config = AioConfig(
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"max_attempts": 1, "mode": "standard"},
        )
        self.logger = get_logger("pools.s3")

    async def get_object(self, bucket: str, key: str) -> StoredObject:
        """Fetch a single object. Single attempt; no retries."""
        try:
            async with self._session.create_client(
                "s3",
                region_name=self.region_name,
                endpoint_url=self.endpoint_url,
                config=self._config,
            ) as client:
                response = await client.get_object(Bucket=bucket, Key=key)
                stream = response.get("Body")
                if stream is None:
                    return StoredObject(body=None, content_type=response.get("ContentType"))
                async with stream:
                    body = await stream.read()
        except ClientError as exc:
            error_code = exc.response.get("Error", {}).get("Code", "Unknown")
            self.logger.error("S3 get_object failed", bucket=bucket, key=key, error_code=error_code)
            raise RemoteFetchError(
                message=f"S3 returned {error_code} for {bucket}/{key}",
                details={"bucket": bucket, "key": key, "error_code": error_code}
            ) from exc
        except BotoCoreError as exc:
            self.logger.error("S3 request failed", bucket=bucket, key=key, error=str(exc))
            raise RemoteFetchError(
                message=f"Request for {bucket}/{key} failed: {exc}",
                details={"bucket": bucket, "key": key}
            ) from exc

        self.logger.debug("Object retrieved", bucket=bucket, key=key, size=len(body))
        return StoredObject(body=body or None, content_type=response.get("ContentType"))
