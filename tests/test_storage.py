"""Tests for the boto3-backed storage service."""
import io
from dataclasses import replace

import pytest
from botocore.exceptions import ClientError
from botocore.stub import ANY, Stubber

from bulk_uploader.errors import StorageSessionError
from bulk_uploader.protocols import IStorageClient
from bulk_uploader.services.storage import S3StorageService, create_s3_client


@pytest.fixture
def config(make_config, tmp_path):
    return make_config(tmp_path, bucket="B", workers=4)


class TestCreateClient:
    def test_uses_configured_endpoint_and_region(self, config):
        client = create_s3_client(config)
        assert client.meta.endpoint_url == "https://fly.storage.tigris.dev"
        assert client.meta.region_name == "auto"

    def test_pool_sized_from_workers(self, make_config, tmp_path):
        client = create_s3_client(make_config(tmp_path, workers=32))
        assert client.meta.config.max_pool_connections == 32

    def test_invalid_endpoint_raises_session_error(self, config):
        broken = replace(config, endpoint="not a url")
        with pytest.raises(StorageSessionError):
            create_s3_client(broken)


class TestS3StorageService:
    def test_implements_storage_protocol(self, config):
        assert isinstance(S3StorageService(create_s3_client(config)), IStorageClient)

    @pytest.mark.asyncio
    async def test_put_object(self, config):
        client = create_s3_client(config)
        service = S3StorageService(client)

        with Stubber(client) as stubber:
            stubber.add_response(
                "put_object",
                {"ETag": '"abc"'},
                {"Bucket": "B", "Key": "up/a.txt", "Body": ANY, "ContentType": "text/plain"},
            )
            response = await service.put_object("B", "up/a.txt", io.BytesIO(b"alpha"), "text/plain")
            stubber.assert_no_pending_responses()

        assert response["ETag"] == '"abc"'

    @pytest.mark.asyncio
    async def test_put_object_error_propagates(self, config):
        client = create_s3_client(config)
        service = S3StorageService(client)

        with Stubber(client) as stubber:
            stubber.add_client_error(
                "put_object",
                service_error_code="NoSuchBucket",
                http_status_code=404,
            )
            with pytest.raises(ClientError) as excinfo:
                await service.put_object("missing", "a.txt", io.BytesIO(b"a"), "text/plain")
            assert excinfo.value.response["Error"]["Code"] == "NoSuchBucket"
