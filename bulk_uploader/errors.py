"""Exception hierarchy for bulk_uploader."""


class BulkUploaderError(Exception):
    """Base class for all uploader errors."""


class ConfigError(BulkUploaderError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class StorageSessionError(BulkUploaderError):
    """Raised when the storage client/session cannot be created."""


class UploadCancelledError(BulkUploaderError):
    """Recorded as the cause of uploads skipped after the run was cancelled."""
