"""
Object store client selection.
"""

from typing import Optional

from shared.errors import ValidationError
from .object_store_client import ObjectStoreClient, RemoteStoreClient
from .s3_client import S3ObjectStoreClient

OBJECT_STORE_BACKENDS = ("s3", "http")


def create_object_store_client(
    backend: str,
    endpoint_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: float = 10.0,
    region_name: Optional[str] = None,
) -> RemoteStoreClient:
    """Build the client for a configured backend.

    "s3" signs requests with AWS credentials; endpoint_url is optional and
    points at an S3-compatible service. "http" issues plain GETs against a
    gateway that fronts the bucket, with an optional bearer token.
    """
    backend = backend.lower()

    if backend == "s3":
        return S3ObjectStoreClient(region_name=region_name, endpoint_url=endpoint_url, timeout=timeout)

    if backend == "http":
        if not endpoint_url:
            raise ValidationError(
                "object_store_url is required for the http object store backend",
                {"backend": backend},
            )
        return ObjectStoreClient(endpoint_url, token=token, timeout=timeout)

    raise ValidationError(
        f"Unknown object store backend {backend}",
        {"backend": backend, "supported": list(OBJECT_STORE_BACKENDS)},
    )
