# xgen_doc2rows/core/functions/storage_backend.py
"""
Storage Backend Module

Local file system storage for the intermediate artifacts the library
writes while reading a source (a downloaded archive, an uploaded
spreadsheet). Artifacts live in a work directory under a unique name
ending in the sanitized source name, and are removed once the source
has been read.

Usage Example:
    from xgen_doc2rows.core.functions.storage_backend import (
        LocalStorageBackend,
        temporary_artifact,
    )

    storage = LocalStorageBackend(work_directory="tmp")
    with temporary_artifact(storage, "report.xlsx") as path:
        storage.save(data, path)
        rows = handler.extract_rows_from_path(path)
    # path no longer exists here
"""
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from xgen_doc2rows.core.errors import LocalFileError

logger = logging.getLogger("table-processor.storage")


def sanitize_file_name(file_name: str) -> str:
    """
    Reduce a caller- or upload-supplied name to a bare file name.

    Directory parts (either separator) are dropped so an artifact can
    never be written outside the work directory.

    Raises:
        LocalFileError: If nothing usable is left
    """
    name = (file_name or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    if name in ("", ".", ".."):
        raise LocalFileError("sanitize_file_name:001", file_name or "", f"invalid file name: {file_name!r}")
    return name


class LocalStorageBackend:
    """
    Local file system storage backend.

    Attributes:
        work_directory: Directory artifacts are written to
    """

    def __init__(self, work_directory: str = "."):
        self._work_directory = work_directory or "."
        self._logger = logging.getLogger(f"table-processor.storage.{self.__class__.__name__}")

    @property
    def work_directory(self) -> str:
        return self._work_directory

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def ensure_ready(self) -> None:
        """Create the work directory if it doesn't exist."""
        path = Path(self._work_directory)
        if not path.exists():
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LocalFileError("ensure_ready:001", str(path), cause=e) from e
            self._logger.debug(f"Created directory: {path}")

    def resolve(self, file_name: str) -> str:
        """Return the artifact path for a (sanitized) file name."""
        return os.path.join(self._work_directory, sanitize_file_name(file_name))

    def reserve(self, file_name: str) -> str:
        """
        Create an empty, uniquely named artifact and return its path.

        The sanitized name is kept as a suffix so the extension survives.
        An existing file in the work directory is never reused.

        Raises:
            LocalFileError: If the file cannot be created
        """
        name = sanitize_file_name(file_name)
        try:
            fd, file_path = tempfile.mkstemp(prefix="artifact-", suffix=f"-{name}", dir=self._work_directory)
        except OSError as e:
            raise LocalFileError("reserve:001", os.path.join(self._work_directory, name), cause=e) from e
        os.close(fd)
        self._logger.debug(f"Reserved artifact: {file_path}")
        return file_path

    def save(self, data: bytes, file_path: str) -> None:
        """
        Write data to a local file.

        Raises:
            LocalFileError: If the file cannot be created or written
        """
        try:
            with open(file_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            self._logger.error(f"Failed to save file {file_path}: {e}")
            raise LocalFileError("save:001", file_path, cause=e) from e

    def delete(self, file_path: str) -> bool:
        """
        Delete a local file.

        Returns:
            True if a file was removed, False if none existed

        Raises:
            LocalFileError: If the file exists but cannot be removed
        """
        try:
            os.remove(file_path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise LocalFileError("delete:001", file_path, cause=e) from e

    def exists(self, file_path: str) -> bool:
        """Check if local file exists."""
        return os.path.exists(file_path)


@contextmanager
def temporary_artifact(storage: LocalStorageBackend, file_name: str) -> Iterator[str]:
    """
    Reserve a unique artifact file and remove it on exit.

    On a clean exit a failed removal raises LocalFileError. When the body
    raised, a failed removal is logged and the original error propagates.

    Args:
        storage: Backend providing the work directory
        file_name: Requested artifact name (sanitized, used as suffix)

    Yields:
        Artifact path
    """
    storage.ensure_ready()
    file_path = storage.reserve(file_name)
    try:
        yield file_path
    except BaseException:
        try:
            storage.delete(file_path)
        except LocalFileError as cleanup_error:
            logger.warning(f"Failed to remove artifact after error: {cleanup_error}")
        raise
    storage.delete(file_path)
    logger.debug(f"Removed artifact: {file_path}")


__all__ = [
    "LocalStorageBackend",
    "sanitize_file_name",
    "temporary_artifact",
]
