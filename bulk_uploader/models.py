"""
Models for bulk_uploader.

Immutable dataclasses describing one upload task, its outcome and the
aggregate result of a run.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import List, Optional
import posixpath


def _to_posix(value: str) -> str:
    """Normalize any host separator convention to forward slashes."""
    return str(value).replace("\\", "/")


def normalize_prefix(prefix: Optional[str]) -> str:
    """Clean the prefix into a relative key segment; "." means no prefix."""
    if not prefix:
        return ""
    cleaned = _to_posix(prefix).strip().strip("/")
    if not cleaned:
        return ""
    cleaned = posixpath.normpath(cleaned).lstrip("/")
    return "" if cleaned == "." else cleaned


class UploadStatus(Enum):
    """Upload operation status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadTask:
    """One file to upload, relative to the walked base directory."""
    absolute_path: str
    base_dir: str
    key_prefix: str = ""

    @property
    def relative_path(self) -> str:
        """
        Path of the file relative to base_dir, always with forward slashes.

        Raises:
            ValueError: if absolute_path is not located under base_dir
        """
        path = PurePosixPath(_to_posix(self.absolute_path))
        base = PurePosixPath(_to_posix(self.base_dir))
        relative = path.relative_to(base)
        if str(relative) in ("", "."):
            raise ValueError(f"{self.absolute_path} is the base directory itself")
        return relative.as_posix()

    @property
    def destination_key(self) -> str:
        """Object key: key_prefix joined with the relative path."""
        relative = self.relative_path
        prefix = normalize_prefix(self.key_prefix)
        if prefix:
            return f"{prefix}/{relative}"
        return relative


@dataclass(frozen=True)
class UploadResult:
    """Immutable outcome of a single upload (success or failure)."""
    path: str
    status: UploadStatus = UploadStatus.SUCCESS
    key: Optional[str] = None
    error: Optional[str] = None
    cause: Optional[BaseException] = field(default=None, compare=False)

    @property
    def success(self) -> bool:
        return self.status == UploadStatus.SUCCESS

    @classmethod
    def ok(cls, path: str, key: str):
        return cls(path=path, status=UploadStatus.SUCCESS, key=key)

    @classmethod
    def fail(cls, path: str, cause: BaseException, message: Optional[str] = None, key: Optional[str] = None):
        error = message or str(cause) or type(cause).__name__
        return cls(
            path=path,
            status=UploadStatus.FAILED,
            key=key,
            error=error,
            cause=cause,
        )


@dataclass
class RunResult:
    """Aggregate result of an upload run, finalized after all workers finished."""
    total_files: int = 0
    uploaded: List[str] = field(default_factory=list)
    failures: List[UploadResult] = field(default_factory=list)
    cancelled: bool = False

    @property
    def uploaded_files(self) -> int:
        return len(self.uploaded)

    @property
    def failed_files(self) -> int:
        return len(self.failures)

    @property
    def success(self) -> bool:
        return not self.failures and not self.cancelled

    @property
    def exit_code(self) -> int:
        """0 when every file uploaded, 1 on any failure or cancellation."""
        return 0 if self.success else 1
