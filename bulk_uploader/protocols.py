"""
Protocols (Interfaces) for Dependency Inversion.

The pipeline only depends on this small storage interface, so any
S3-compatible client (or a test double) can be injected.
"""
from typing import Any, BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class IStorageClient(Protocol):
    """Interface for object storage writes."""

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        content_type: str,
    ) -> Any:
        """Store body under key in bucket. Raises on failure."""
        ...
