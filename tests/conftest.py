"""Shared fixtures for bulk_uploader tests."""
import asyncio
from pathlib import Path
from typing import Dict, Iterable, Tuple

import pytest

from bulk_uploader.config import UploadConfig


class FakeStorage:
    """In-memory storage implementing IStorageClient, with instrumentation."""

    def __init__(self, delay: float = 0.0, fail_keys: Iterable[str] = ()):
        self.delay = delay
        self.fail_keys = set(fail_keys)
        self.objects: Dict[Tuple[str, str], Tuple[bytes, str]] = {}
        self.calls = []
        self.in_flight = 0
        self.peak = 0

    async def put_object(self, bucket, key, body, content_type):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            self.calls.append((bucket, key, content_type))
            if self.delay:
                await asyncio.sleep(self.delay)
            if key in self.fail_keys:
                raise IOError(f"simulated storage failure for {key}")
            self.objects[(bucket, key)] = (body.read(), content_type)
            return {"ETag": '"fake"'}
        finally:
            self.in_flight -= 1


@pytest.fixture
def make_tree(tmp_path):
    """Create files under tmp_path/src from a {relative_path: content} mapping."""
    def _make(files: Dict[str, str]) -> Path:
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root
    return _make


@pytest.fixture
def make_config():
    def _make(folder, bucket="B", prefix="", workers=10) -> UploadConfig:
        return UploadConfig(
            access_key_id="key",
            secret_access_key="secret",
            bucket=bucket,
            folder=str(folder),
            prefix=prefix,
            workers=workers,
        )
    return _make
