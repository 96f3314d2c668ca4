"""Tests for content-type inference."""
import pytest

from bulk_uploader.services.content_type import DEFAULT_CONTENT_TYPE, guess_content_type


@pytest.mark.parametrize(
    "path, expected",
    [
        ("data/report.json", "application/json"),
        ("REPORT.JSON", "application/json"),
        ("notes.txt", "text/plain"),
        ("index.html", "text/html"),
        ("photo.png", "image/png"),
        ("doc.pdf", "application/pdf"),
    ],
)
def test_known_extensions(path, expected):
    assert guess_content_type(path) == expected


@pytest.mark.parametrize("path", ["blob.xyz123", "Makefile", ".bashrc", "dir.d/noext"])
def test_unknown_or_missing_extension_falls_back(path):
    assert guess_content_type(path) == DEFAULT_CONTENT_TYPE
    assert DEFAULT_CONTENT_TYPE == "application/octet-stream"


def test_windows_path():
    assert guess_content_type("C:\\exports\\data.json") == "application/json"
