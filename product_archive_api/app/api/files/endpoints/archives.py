"""
ZIP archive endpoints.

Uploaded files are packed into archives in the storage root, existing
archives can be unpacked next to themselves, and both archives and
extracted files can be downloaded.  Empty input answers ``400``;
filesystem failures answer ``500`` with the underlying error message.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from product_archive_api.app.api.deps import get_file_archive
from product_archive_api.app.core.exceptions import FileStorageError, InvalidPathError
from product_archive_api.app.schemas.files import (
    ArchiveList,
    CompressManyResponse,
    CompressResponse,
    ExtractResponse,
)
from product_archive_api.app.services.file_archive_service import ZIP_SUFFIX, FileArchiveService


logger = logging.getLogger(__name__)

router = APIRouter()


def _error_status(exc: FileStorageError) -> int:
    if isinstance(exc, InvalidPathError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _read_uploads(files: List[UploadFile]) -> List[Tuple[str, bytes]]:
    return [(upload.filename or "", await upload.read()) for upload in files]


async def _compress_many(
    archive: FileArchiveService, entries: List[Tuple[str, bytes]], zip_name: str
) -> CompressManyResponse:
    try:
        zip_uri = await run_in_threadpool(archive.compress_many, entries, zip_name)
    except FileStorageError as e:
        logger.error("Compressing %d files into %s failed: %s", len(entries), zip_name, e)
        raise HTTPException(status_code=_error_status(e), detail=f"Error compressing files: {e}") from e
    return CompressManyResponse(message="Files compressed", zip_uri=zip_uri, file_count=len(entries))


@router.post("/compress", response_model=CompressResponse)
async def compress_file(
    file: UploadFile = File(...),
    archive: FileArchiveService = Depends(get_file_archive),
) -> CompressResponse:
    """Pack one uploaded file into ``<filename>.zip``."""
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must not be empty")
    try:
        zip_uri = await run_in_threadpool(archive.compress_one, file.filename or "", data)
    except FileStorageError as e:
        logger.error("Compressing %s failed: %s", file.filename, e)
        raise HTTPException(status_code=_error_status(e), detail=f"Error compressing file: {e}") from e
    return CompressResponse(message="File compressed", zip_uri=zip_uri)


@router.post("/compress-multiple-alt", response_model=CompressManyResponse)
async def compress_up_to_three(
    file1: UploadFile = File(...),
    file2: Optional[UploadFile] = File(None),
    file3: Optional[UploadFile] = File(None),
    zip_name: str = Form("archive", alias="zipName"),
    archive: FileArchiveService = Depends(get_file_archive),
) -> CompressManyResponse:
    """Pack up to three named upload fields into one archive.

    Empty uploads are skipped; if nothing is left the request is
    rejected.
    """
    uploads = [upload for upload in (file1, file2, file3) if upload is not None]
    entries = [(name, data) for name, data in await _read_uploads(uploads) if data]
    if not entries:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one non-empty file must be uploaded",
        )
    return await _compress_many(archive, entries, zip_name)


@router.post("/items", response_model=CompressManyResponse)
async def compress_items(
    files: List[UploadFile] = File(...),
    zip_name: str = Form(..., alias="zipName"),
    archive: FileArchiveService = Depends(get_file_archive),
) -> CompressManyResponse:
    """Pack any number of uploaded files into one archive, in upload order."""
    if not files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one file must be uploaded",
        )
    return await _compress_many(archive, await _read_uploads(files), zip_name)


@router.post("/extract/{zip_file_name}", response_model=ExtractResponse)
async def extract_archive(
    zip_file_name: str,
    archive: FileArchiveService = Depends(get_file_archive),
) -> ExtractResponse:
    """Unpack an archive from the storage root into ``<name>_extracted``."""
    try:
        extracted_uri = await run_in_threadpool(archive.extract, zip_file_name)
    except FileStorageError as e:
        logger.error("Extracting %s failed: %s", zip_file_name, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error extracting archive: {e}",
        ) from e
    return ExtractResponse(message="Archive extracted", extracted_uri=extracted_uri)


@router.get("/download/zip/list", response_model=ArchiveList)
async def list_archives(archive: FileArchiveService = Depends(get_file_archive)) -> ArchiveList:
    try:
        uris = await run_in_threadpool(archive.list_archives)
    except FileStorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error listing archives: {e}",
        ) from e
    return ArchiveList(files=uris, total_files=len(uris))


@router.get("/download/zip/{file_name:path}")
async def download_archive(
    file_name: str,
    archive: FileArchiveService = Depends(get_file_archive),
) -> FileResponse:
    """Send an archive, or a file from an extracted archive, as an attachment."""
    try:
        path = await run_in_threadpool(archive.load, file_name)
    except FileStorageError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    media_type = "application/zip" if path.name.endswith(ZIP_SUFFIX) else "application/octet-stream"
    return FileResponse(path, media_type=media_type, filename=path.name)
