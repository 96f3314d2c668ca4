"""
bulk_uploader - bounded-concurrency folder upload to S3-compatible storage.

A single directory walker streams file paths into upload workers gated by
a concurrency limiter; failures are collected centrally and reported once
every worker has finished.

Usage:
    from bulk_uploader import UploadOrchestrator, UploadConfig, S3StorageService

    config = UploadConfig(
        access_key_id="...",
        secret_access_key="...",
        bucket="my-bucket",
        folder="./site",
        prefix="releases/v1",
    ).validate()
    storage = S3StorageService.from_config(config)
    result = await UploadOrchestrator(storage, config).run()
    if not result.success:
        for failure in result.failures:
            print(failure.path, failure.error)
"""
__version__ = "0.1.0"

from .config import UploadConfig
from .errors import BulkUploaderError, ConfigError, StorageSessionError, UploadCancelledError
from .models import RunResult, UploadResult, UploadStatus, UploadTask
from .orchestrator import (
    ConcurrencyLimiter,
    ErrorSink,
    PathStream,
    RunState,
    UploadOrchestrator,
    UploadWorker,
)
from .services import S3StorageService, create_s3_client, guess_content_type

__all__ = [
    # Main
    "UploadOrchestrator",
    "RunState",
    # Pipeline components
    "PathStream",
    "ConcurrencyLimiter",
    "UploadWorker",
    "ErrorSink",
    # Models
    "UploadConfig",
    "UploadTask",
    "UploadResult",
    "UploadStatus",
    "RunResult",
    # Services
    "S3StorageService",
    "create_s3_client",
    "guess_content_type",
    # Errors
    "BulkUploaderError",
    "ConfigError",
    "StorageSessionError",
    "UploadCancelledError",
]
