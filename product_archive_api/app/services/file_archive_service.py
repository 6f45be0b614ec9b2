"""
ZIP compression and extraction inside the storage root.

Archives are written once and closed; extraction reads them entry by
entry into ``<name>_extracted``.  Neither operation is atomic: a
failure part way through leaves the partial archive or the entries
extracted so far on disk.  Extracting the same archive again merges
into the existing directory.

Entry names are taken verbatim from the uploaded file names and are
not deduplicated, so two uploads with the same name produce two
entries with that name.  On extraction every entry must resolve
inside the extraction directory; an entry such as ``../../x`` aborts
the extraction with :class:`InvalidPathError`.
"""

import logging
import shutil
import warnings
import zipfile
from pathlib import Path
from typing import List, Sequence, Tuple

from ..core.exceptions import (
    AccessDeniedError,
    InvalidPathError,
    StorageIOError,
    StoredFileNotFoundError,
)
from .file_storage_service import FileStorageService, build_download_uri, is_within


logger = logging.getLogger(__name__)

ZIP_SUFFIX = ".zip"
EXTRACTED_SUFFIX = "_extracted"
BUFFER_SIZE = 1024


def extraction_dir_name(archive_name: str) -> str:
    """``photos.zip`` -> ``photos_extracted``."""
    if archive_name.endswith(ZIP_SUFFIX):
        archive_name = archive_name[: -len(ZIP_SUFFIX)]
    return archive_name + EXTRACTED_SUFFIX


class FileArchiveService:
    """Creates and unpacks ZIP archives in the storage root.

    ``base_url`` is the scheme and host the returned URIs point at;
    the routes pass the base URL of the current request.
    """

    def __init__(self, storage: FileStorageService, base_url: str = "") -> None:
        self.root = storage.root
        self.base_url = base_url

    def file_uri(self, file_name: str) -> str:
        return build_download_uri(self.base_url, file_name)

    def _inside_root(self, name: str) -> Path:
        path = (self.root / name).resolve()
        if not is_within(path, self.root) or path == self.root:
            raise InvalidPathError(f"Cannot use a path outside the storage directory: {name}")
        return path

    def _write_archive(self, zip_name: str, files: Sequence[Tuple[str, bytes]]) -> str:
        zip_path = self._inside_root(zip_name)
        try:
            with warnings.catch_warnings():
                warnings.filterwarnings("ignore", message="Duplicate name", category=UserWarning)
                with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                    for entry_name, data in files:
                        archive.writestr(entry_name, data)
        except OSError as exc:
            raise StorageIOError(f"Could not write archive {zip_name}: {exc}") from exc
        logger.info("Wrote archive %s with %d entries", zip_name, len(files))
        return self.file_uri(zip_name)

    def compress_one(self, file_name: str, data: bytes) -> str:
        """Pack a single file into ``<file_name>.zip`` and return its URI."""
        return self._write_archive(file_name + ZIP_SUFFIX, [(file_name, data)])

    def compress_many(self, files: Sequence[Tuple[str, bytes]], archive_base_name: str) -> str:
        """Pack ``files`` in order into one archive and return its URI."""
        zip_name = archive_base_name
        if not zip_name.endswith(ZIP_SUFFIX):
            zip_name += ZIP_SUFFIX
        return self._write_archive(zip_name, files)

    def extract(self, archive_file_name: str) -> str:
        """Unpack an archive into ``<name>_extracted`` and return the directory URI."""
        zip_path = self._inside_root(archive_file_name)
        if not zip_path.is_file():
            raise StoredFileNotFoundError(f"ZIP file not found: {zip_path}")

        dir_name = extraction_dir_name(archive_file_name)
        extract_path = self._inside_root(dir_name)
        try:
            extract_path.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(zip_path) as archive:
                for info in archive.infolist():
                    self._extract_entry(archive, info, extract_path)
        except (OSError, RuntimeError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            raise StorageIOError(f"Could not extract archive {archive_file_name}: {exc}") from exc
        logger.info("Extracted %s into %s", archive_file_name, dir_name)
        return self.file_uri(dir_name)

    @staticmethod
    def _extract_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, extract_path: Path) -> None:
        target = (extract_path / info.filename).resolve()
        if not is_within(target, extract_path):
            raise InvalidPathError(f"Archive entry escapes the extraction directory: {info.filename}")
        if info.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        with archive.open(info) as source, open(target, "wb") as destination:
            shutil.copyfileobj(source, destination, BUFFER_SIZE)

    def list_archives(self) -> List[str]:
        """Return the URIs of the ``.zip`` files directly under the root."""
        try:
            names = sorted(
                path.name
                for path in self.root.iterdir()
                if path.is_file() and path.name.endswith(ZIP_SUFFIX)
            )
        except OSError as exc:
            raise StorageIOError(f"Could not list archives: {exc}") from exc
        return [self.file_uri(name) for name in names]

    def load(self, file_name: str) -> Path:
        """Return the path of an archive or an extracted file for download."""
        path = (self.root / file_name).resolve()
        if not is_within(path, self.root):
            raise AccessDeniedError(f"Access denied: {file_name}")
        if not path.is_file():
            raise StoredFileNotFoundError(f"File not found: {file_name}")
        return path
