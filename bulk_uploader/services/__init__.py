"""Services for bulk_uploader module."""
from .content_type import DEFAULT_CONTENT_TYPE, guess_content_type
from .storage import S3StorageService, create_s3_client

__all__ = [
    "S3StorageService",
    "create_s3_client",
    "guess_content_type",
    "DEFAULT_CONTENT_TYPE",
]
