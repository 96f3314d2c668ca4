"""Content-Type inference from file extensions."""
from pathlib import PurePath
from typing import Union
import mimetypes

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Used when the platform MIME table has no entry for the extension.
_FALLBACK_MIMES = {
    ".json": "application/json",
    ".pdf": "application/pdf",
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".csv": "text/csv",
    ".md": "text/markdown",
    ".txt": "text/plain",
    ".srt": "text/plain",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".wasm": "application/wasm",
    ".parquet": "application/vnd.apache.parquet",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def guess_content_type(path: Union[str, PurePath]) -> str:
    """
    Return the MIME type for a file based on its extension.

    Falls back to application/octet-stream when the extension is unknown
    or the file has none.
    """
    suffix = PurePath(str(path).replace("\\", "/")).suffix.lower()
    if not suffix:
        return DEFAULT_CONTENT_TYPE

    mimetype, _ = mimetypes.guess_type(f"file{suffix}", strict=False)
    if mimetype:
        return mimetype
    return _FALLBACK_MIMES.get(suffix, DEFAULT_CONTENT_TYPE)
