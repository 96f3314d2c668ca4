"""Recursive, lazy file discovery for folder uploads."""
from typing import AsyncIterator, List, Optional, Tuple
import asyncio
import logging
import os

logger = logging.getLogger(__name__)


def _list_directory(directory: str) -> Tuple[List[str], List[str]]:
    """
    List one directory level.

    Returns:
        (file paths, subdirectory paths)

    Raises:
        OSError: if the directory cannot be read
    """
    files: List[str] = []
    subdirs: List[str] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry.path)
            elif entry.is_file():
                files.append(entry.path)
            elif entry.is_symlink() and not os.path.exists(entry.path):
                # dangling link; opening it fails and is reported per file
                files.append(entry.path)
    return files, subdirs


class PathStream:
    """
    Streams absolute paths of regular files under a root directory.

    The walk is depth-first and pull-driven: a directory is only listed
    when the consumer asks for more paths, so memory does not grow with the
    number of files. On the first traversal error the error is logged and
    the stream ends; paths already produced are unaffected.

    Usage:
        async for path in PathStream("/data"):
            ...
    """

    def __init__(self, root: str):
        self._root = os.path.abspath(os.path.expanduser(str(root)))
        self._started = False
        self._files_emitted = 0
        self._error: Optional[OSError] = None

    @property
    def root(self) -> str:
        return self._root

    @property
    def files_emitted(self) -> int:
        return self._files_emitted

    @property
    def error(self) -> Optional[OSError]:
        """Traversal error that ended the stream early, if any."""
        return self._error

    def __aiter__(self) -> AsyncIterator[str]:
        if self._started:
            raise RuntimeError("PathStream cannot be restarted")
        self._started = True
        return self._walk()

    async def _walk(self) -> AsyncIterator[str]:
        pending = [self._root]
        while pending:
            directory = pending.pop()
            try:
                files, subdirs = await asyncio.to_thread(_list_directory, directory)
            except OSError as e:
                self._error = e
                logger.error(f"Error retrieving files from directory {directory}: {e}")
                return

            # Reversed so subdirectories are visited in listing order.
            pending.extend(reversed(subdirs))
            for path in files:
                self._files_emitted += 1
                yield path

        logger.debug(f"Traversal of {self._root} complete: {self._files_emitted} files")
