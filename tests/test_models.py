"""Tests for bulk_uploader models."""
import pytest

from bulk_uploader.models import (
    RunResult,
    UploadResult,
    UploadStatus,
    UploadTask,
    normalize_prefix,
)


class TestUploadTask:
    def test_key_joins_prefix_and_relative_path(self):
        task = UploadTask("/data/site/css/main.css", "/data/site", "static")
        assert task.relative_path == "css/main.css"
        assert task.destination_key == "static/css/main.css"

    def test_key_without_prefix(self):
        task = UploadTask("/data/site/index.html", "/data/site", "")
        assert task.destination_key == "index.html"

    def test_backslash_separator_becomes_forward_slash(self):
        task = UploadTask("/a/b/c\\d.txt", "/a/b", "x")
        assert task.destination_key == "x/c/d.txt"

    def test_windows_style_paths(self):
        task = UploadTask("C:\\data\\photos\\2024\\img.jpg", "C:\\data", "backup")
        assert task.destination_key == "backup/photos/2024/img.jpg"

    def test_base_dir_with_trailing_slash(self):
        task = UploadTask("/a/b/c.txt", "/a/b/", "x")
        assert task.destination_key == "x/c.txt"

    @pytest.mark.parametrize(
        "prefix", ["up", "/up", "up/", "/up/", "\\up\\", "./up", "up//", "x/../up", "./up/."]
    )
    def test_prefix_slashes_are_normalized(self, prefix):
        task = UploadTask("/root/a.txt", "/root", prefix)
        assert task.destination_key == "up/a.txt"

    @pytest.mark.parametrize(
        "prefix, expected",
        [
            ("a//b", "a/b/a.txt"),
            ("a/../b", "b/a.txt"),
            (".", "a.txt"),
            ("a/..", "a.txt"),
        ],
    )
    def test_prefix_is_cleaned_before_join(self, prefix, expected):
        assert UploadTask("/root/a.txt", "/root", prefix).destination_key == expected

    def test_nested_prefix(self):
        task = UploadTask("/root/sub/a.txt", "/root", "releases/v1")
        assert task.destination_key == "releases/v1/sub/a.txt"

    def test_path_outside_base_raises(self):
        task = UploadTask("/elsewhere/a.txt", "/root", "up")
        with pytest.raises(ValueError):
            task.destination_key

    def test_base_dir_itself_raises(self):
        task = UploadTask("/root", "/root", "up")
        with pytest.raises(ValueError):
            task.relative_path

    def test_immutable(self):
        task = UploadTask("/root/a.txt", "/root")
        with pytest.raises(Exception):
            task.key_prefix = "other"


def test_normalize_prefix():
    assert normalize_prefix(None) == ""
    assert normalize_prefix("") == ""
    assert normalize_prefix(" / ") == ""
    assert normalize_prefix("/a/b/") == "a/b"
    assert normalize_prefix("a\\b") == "a/b"
    assert normalize_prefix("./up") == "up"
    assert normalize_prefix("a//b/./c") == "a/b/c"
    assert normalize_prefix("/./") == ""


class TestUploadResult:
    def test_ok_result(self):
        result = UploadResult.ok("/root/a.txt", "up/a.txt")
        assert result.success is True
        assert result.status == UploadStatus.SUCCESS
        assert result.key == "up/a.txt"
        assert result.error is None
        assert result.cause is None

    def test_fail_result_keeps_cause(self):
        cause = PermissionError("denied")
        result = UploadResult.fail("/root/a.txt", cause, "failed to open file /root/a.txt: denied")
        assert result.success is False
        assert result.status == UploadStatus.FAILED
        assert result.path == "/root/a.txt"
        assert result.cause is cause
        assert result.error == "failed to open file /root/a.txt: denied"

    def test_fail_message_defaults_to_cause(self):
        assert UploadResult.fail("/p", RuntimeError("boom")).error == "boom"
        assert UploadResult.fail("/p", RuntimeError()).error == "RuntimeError"

    def test_immutable(self):
        result = UploadResult.ok("/root/a.txt", "a.txt")
        with pytest.raises(Exception):
            result.key = "b.txt"


class TestRunResult:
    def test_empty_run_is_success(self):
        result = RunResult()
        assert result.success is True
        assert result.exit_code == 0

    def test_counts_and_exit_code_on_failure(self):
        result = RunResult(
            total_files=3,
            uploaded=["a", "b"],
            failures=[UploadResult.fail("/c", OSError("x"))],
        )
        assert result.uploaded_files == 2
        assert result.failed_files == 1
        assert result.success is False
        assert result.exit_code == 1

    def test_cancelled_run_is_not_success(self):
        result = RunResult(total_files=1, uploaded=["a"], cancelled=True)
        assert result.success is False
        assert result.exit_code == 1
