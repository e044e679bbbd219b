"""
Adapters package for the pool cache service.

Contains client wrappers for external dependencies. Keep adapters thin and
side-effect free outside of explicit calls.
"""

from .object_store_client import ObjectStoreClient, RemoteStoreClient, StoredObject
from .s3_client import S3ObjectStoreClient
from .factory import OBJECT_STORE_BACKENDS, create_object_store_client

__all__ = [
    "ObjectStoreClient",
    "RemoteStoreClient",
    "StoredObject",
    "S3ObjectStoreClient",
    "OBJECT_STORE_BACKENDS",
    "create_object_store_client",
]
