"""Upload of a single file to object storage."""
from typing import BinaryIO, Callable, Optional
import logging

from ..errors import UploadCancelledError
from ..models import UploadResult, UploadTask
from ..protocols import IStorageClient
from ..services.content_type import guess_content_type
from ..utils.events import EventEmitter, FILE_COMPLETE, FILE_FAIL

logger = logging.getLogger(__name__)


def _open_source(path: str) -> BinaryIO:
    return open(path, "rb")


class UploadWorker:
    """
    Uploads one UploadTask and reports exactly one UploadResult.

    Per-file errors never escape run(); they are returned as failed results
    so sibling uploads are not affected.
    """

    def __init__(
        self,
        storage: IStorageClient,
        bucket: str,
        events: Optional[EventEmitter] = None,
        is_cancelled: Optional[Callable[[], bool]] = None,
    ):
        """
        Initialize upload worker.

        Args:
            storage: Storage client implementing put_object
            bucket: Destination bucket
            events: Emitter receiving file_complete / file_fail
            is_cancelled: Checked right before the storage write
        """
        self._storage = storage
        self._bucket = bucket
        self._events = events or EventEmitter()
        self._is_cancelled = is_cancelled or (lambda: False)

    async def run(self, task: UploadTask) -> UploadResult:
        result = await self._upload(task)
        if result.success:
            logger.debug(f"Uploaded {task.absolute_path} -> {result.key}")
            await self._events.emit(FILE_COMPLETE, result)
        else:
            # reported again in the final summary
            logger.info(f"Upload failed: {result.error}")
            await self._events.emit(FILE_FAIL, result)
        return result

    async def _upload(self, task: UploadTask) -> UploadResult:
        path = task.absolute_path
        try:
            source = _open_source(path)
        except OSError as e:
            return UploadResult.fail(path, e, f"failed to open file {path}: {e}")

        with source:
            try:
                key = task.destination_key
            except ValueError as e:
                return UploadResult.fail(
                    path, e, f"failed to calculate relative path for file {path}: {e}"
                )

            if self._is_cancelled():
                cause = UploadCancelledError("run cancelled before upload started")
                return UploadResult.fail(path, cause, f"skipped file {path}: {cause}", key=key)

            content_type = guess_content_type(path)
            try:
                await self._storage.put_object(self._bucket, key, source, content_type)
            except Exception as e:
                return UploadResult.fail(path, e, f"failed to upload file {path}: {e}", key=key)

        return UploadResult.ok(path, key)
