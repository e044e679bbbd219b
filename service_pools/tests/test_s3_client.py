"""
Unit tests for the S3 object store client and backend selection.
"""

from typing import Any, Dict, List, Optional

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from shared.errors import RemoteFetchError, ValidationError
from service_pools.app.adapters.factory import create_object_store_client
from service_pools.app.adapters.object_store_client import ObjectStoreClient
from service_pools.app.adapters.s3_client import S3ObjectStoreClient


class FakeStream:
    def __init__(self, data: bytes):
        self.data = data
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def read(self) -> bytes:
        return self.data


class FakeS3Client:
    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, str]] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def get_object(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeSession:
    """Stands in for AioSession.create_client."""

    def __init__(self, client: FakeS3Client):
        self.client = client
        self.created: List[Dict[str, Any]] = []

    def create_client(self, service_name, **kwargs):
        self.created.append({"service_name": service_name, **kwargs})
        return self.client


def make_client(fake: FakeS3Client, **kwargs):
    session = FakeSession(fake)
    return S3ObjectStoreClient(session=session, **kwargs), session


class TestS3ObjectStoreClient:
    """Test cases for S3ObjectStoreClient."""

    @pytest.mark.asyncio
    async def test_get_object_success(self):
        stream = FakeStream(b'[{"id": "0xabc"}]')
        fake = FakeS3Client({"Body": stream, "ContentType": "application/json"})
        client, session = make_client(fake, region_name="us-east-2", timeout=3.0)

        stored = await client.get_object("pool-cache", "poolCache.json-1-V3")

        assert stored.body == b'[{"id": "0xabc"}]'
        assert stored.content_type == "application/json"
        assert stream.closed
        assert fake.calls == [{"Bucket": "pool-cache", "Key": "poolCache.json-1-V3"}]
        assert session.created[0]["service_name"] == "s3"
        assert session.created[0]["region_name"] == "us-east-2"
        assert session.created[0]["endpoint_url"] is None

    @pytest.mark.asyncio
    async def test_custom_endpoint_is_passed_through(self):
        fake = FakeS3Client({"Body": FakeStream(b"[]")})
        client, session = make_client(fake, endpoint_url="http://minio.local:9000")

        await client.get_object("b", "k")

        assert session.created[0]["endpoint_url"] == "http://minio.local:9000"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [{}, {"Body": None}, {"Body": FakeStream(b"")}])
    async def test_missing_or_empty_body(self, response):
        client, _ = make_client(FakeS3Client(response))

        stored = await client.get_object("b", "k")

        assert stored.body is None

    @pytest.mark.asyncio
    async def test_client_error_maps_to_remote_fetch_error(self):
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject")
        client, _ = make_client(FakeS3Client(error=error))

        with pytest.raises(RemoteFetchError) as exc_info:
            await client.get_object("b", "pools-1-V3")

        assert exc_info.value.code == "REMOTE_FETCH_ERROR"
        assert exc_info.value.details == {"bucket": "b", "key": "pools-1-V3", "error_code": "AccessDenied"}
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_connection_error_maps_to_remote_fetch_error(self):
        error = EndpointConnectionError(endpoint_url="http://minio.local:9000")
        client, _ = make_client(FakeS3Client(error=error))

        with pytest.raises(RemoteFetchError) as exc_info:
            await client.get_object("b", "k")

        assert exc_info.value.details == {"bucket": "b", "key": "k"}
        assert exc_info.value.__cause__ is error


class TestCreateObjectStoreClient:
    """Test cases for create_object_store_client."""

    def test_s3_backend(self):
        client = create_object_store_client("S3", region_name="eu-west-1", timeout=2.0)

        assert isinstance(client, S3ObjectStoreClient)
        assert client.region_name == "eu-west-1"
        assert client.timeout == 2.0

    def test_http_backend(self):
        client = create_object_store_client("http", endpoint_url="http://gw.local/", token="t")

        assert isinstance(client, ObjectStoreClient)
        assert client.base_url == "http://gw.local"
        assert client.token == "t"

    def test_http_backend_requires_url(self):
        with pytest.raises(ValidationError):
            create_object_store_client("http")

    def test_unknown_backend(self):
        with pytest.raises(ValidationError) as exc_info:
            create_object_store_client("gcs")

        assert exc_info.value.details["supported"] == ["s3", "http"]
