"""
Storage of uploaded files under a single root directory.

Every file name handed to :class:`FileStorageService` is resolved
against the storage root and rejected when the result lies outside
it, so neither ``..`` segments nor absolute names can reach the rest
of the filesystem.  Writes overwrite an existing file of the same
name.  All operations are synchronous; the async routes run them in
a worker thread.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Union
from urllib.parse import quote

from ..core.exceptions import (
    AccessDeniedError,
    EmptyFileError,
    InvalidPathError,
    StorageIOError,
    StoredFileNotFoundError,
)


logger = logging.getLogger(__name__)

DOWNLOAD_PATH = "/api/files/download/"


def build_download_uri(base_url: str, file_name: str) -> str:
    """Return the public download URL of a file stored under the root."""
    return f"{base_url.rstrip('/')}{DOWNLOAD_PATH}{quote(file_name)}"


def is_within(path: Path, root: Path) -> bool:
    """Check that an already resolved ``path`` is ``root`` or lies below it."""
    return path == root or root in path.parents


class FileStorageService:
    """Stores, loads and deletes files under ``root``."""

    def __init__(self, upload_dir: Union[str, Path]) -> None:
        self.root = Path(upload_dir).expanduser().resolve()
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(
                "Could not create the directory where the uploaded files will be stored."
            ) from exc
        logger.debug("File storage rooted at %s", self.root)

    def _resolve(self, file_name: str) -> Path:
        return (self.root / file_name).resolve()

    def store(self, file_name: str, data: bytes) -> str:
        """Write ``data`` under ``file_name`` and return the stored name."""
        name = (file_name or "").replace("\\", "/")
        if not name:
            raise InvalidPathError("File name must not be empty")
        if ".." in name:
            raise InvalidPathError(f"Sorry! Filename contains invalid path sequence {name}")
        if not data:
            raise EmptyFileError(f"Cannot store empty file: {name}")

        target = self._resolve(name)
        if not is_within(target, self.root) or target == self.root:
            raise InvalidPathError("Cannot store file outside current directory.")

        try:
            target.write_bytes(data)
        except OSError as exc:
            raise StorageIOError(f"Could not store file {name}. Please try again! {exc}") from exc
        logger.info("Stored file %s (%d bytes)", name, len(data))
        return name

    def load(self, file_name: str) -> Path:
        """Return the path of a readable stored file."""
        if ".." in file_name:
            raise AccessDeniedError(f"Invalid file name: {file_name}")
        path = self._resolve(file_name)
        if not is_within(path, self.root):
            raise AccessDeniedError(f"Access denied: {file_name}")
        if not path.is_file() or not os.access(path, os.R_OK):
            raise StoredFileNotFoundError(f"File not found: {file_name}")
        return path

    def delete(self, file_name: str) -> bool:
        """Delete a stored file; ``False`` if it did not exist."""
        path = self._resolve(file_name)
        if not is_within(path, self.root) or path == self.root:
            raise AccessDeniedError("Cannot delete file outside storage directory")
        try:
            if path.is_dir():
                path.rmdir()
            else:
                path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageIOError(f"Could not delete file: {file_name}") from exc
        logger.info("Deleted file %s", file_name)
        return True

    def exists(self, file_name: str) -> bool:
        try:
            path = self._resolve(file_name)
            return is_within(path, self.root) and path.is_file()
        except (OSError, ValueError):
            return False

    def size(self, file_name: str) -> int:
        path = self._resolve(file_name)
        if not is_within(path, self.root):
            raise AccessDeniedError("Access denied")
        if not path.exists():
            raise StoredFileNotFoundError(f"File not found: {file_name}")
        try:
            return path.stat().st_size
        except OSError as exc:
            raise StorageIOError(f"Could not get file size: {file_name}") from exc

    def list_top_level(self) -> List[Path]:
        """Return the entries directly under the root, relative to it."""
        try:
            return sorted(path.relative_to(self.root) for path in self.root.iterdir())
        except OSError as exc:
            raise StorageIOError("Could not load the files!") from exc

    def delete_all(self) -> None:
        """Remove the storage root and everything below it."""
        logger.warning("Deleting storage root %s", self.root)
        shutil.rmtree(self.root, ignore_errors=True)
