"""
Storage Service - Single Responsibility: write objects to S3-compatible storage.

Wraps a boto3 S3 client behind the IStorageClient interface.
"""
import asyncio
import logging
from typing import Any, BinaryIO, TYPE_CHECKING

import boto3
from botocore.config import Config as BotoConfig

from ..errors import StorageSessionError

if TYPE_CHECKING:
    from ..config import UploadConfig

logger = logging.getLogger(__name__)


def create_s3_client(config: "UploadConfig", max_pool_connections: int = None):
    """
    Build a boto3 S3 client from static credentials, region and endpoint.

    Args:
        config: Validated upload configuration
        max_pool_connections: HTTP pool size (default: config.workers)

    Returns:
        boto3 S3 client

    Raises:
        StorageSessionError: if the session or client cannot be created
    """
    pool_size = max(max_pool_connections or config.workers, 10)
    try:
        session = boto3.session.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name=config.region,
        )
        client = session.client(
            "s3",
            endpoint_url=config.endpoint or None,
            config=BotoConfig(max_pool_connections=pool_size),
        )
    except Exception as e:
        raise StorageSessionError(f"failed to create storage session: {e}") from e

    logger.debug(f"S3 client ready (endpoint={config.endpoint}, region={config.region})")
    return client


class S3StorageService:
    """
    Service for writing objects to S3-compatible storage.

    boto3 calls are blocking, so each write runs in a worker thread.
    The client is shared by all workers.
    """

    def __init__(self, client: Any):
        """
        Initialize storage service.

        Args:
            client: boto3 S3 client (or compatible)
        """
        self._client = client

    @classmethod
    def from_config(cls, config: "UploadConfig") -> "S3StorageService":
        return cls(create_s3_client(config))

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        content_type: str,
    ) -> Any:
        """
        Upload body to bucket/key.

        Args:
            bucket: Destination bucket
            key: Object key
            body: Readable binary stream
            content_type: MIME type stored with the object

        Returns:
            Raw put_object response
        """
        return await asyncio.to_thread(
            self._client.put_object,
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )
