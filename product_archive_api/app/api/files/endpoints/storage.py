"""
Upload, download and listing of raw files.

Uploads are stored under their original file name, replacing any file
with the same name.  Download failures of any kind (unknown name,
traversal attempt) answer ``404`` so the response does not reveal
whether a path exists outside the storage root.
"""

import logging
import mimetypes
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, PlainTextResponse

from product_archive_api.app.api.deps import get_file_storage
from product_archive_api.app.core.exceptions import (
    EmptyFileError,
    FileStorageError,
    InvalidPathError,
    StorageIOError,
)
from product_archive_api.app.services.file_storage_service import (
    FileStorageService,
    build_download_uri,
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_class=PlainTextResponse)
async def upload_file(
    file: UploadFile = File(...),
    storage: FileStorageService = Depends(get_file_storage),
) -> str:
    """Store an uploaded file under the storage root."""
    data = await file.read()
    try:
        file_name = await run_in_threadpool(storage.store, file.filename or "", data)
    except (InvalidPathError, EmptyFileError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StorageIOError as e:
        logger.error("Upload of %s failed: %s", file.filename, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    return f"File uploaded successfully: {file_name}"


@router.get("/download/{file_name}")
async def download_file(
    file_name: str,
    storage: FileStorageService = Depends(get_file_storage),
) -> FileResponse:
    """Send a stored file as an attachment."""
    try:
        path = await run_in_threadpool(storage.load, file_name)
    except FileStorageError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    content_type, _ = mimetypes.guess_type(path.name)
    return FileResponse(
        path,
        media_type=content_type or "application/octet-stream",
        filename=path.name,
    )


@router.get("", response_model=List[str])
async def list_files(
    request: Request,
    storage: FileStorageService = Depends(get_file_storage),
) -> List[str]:
    """Return download URLs for everything directly under the storage root."""
    try:
        paths = await run_in_threadpool(storage.list_top_level)
    except StorageIOError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    base_url = str(request.base_url)
    return [build_download_uri(base_url, path.name) for path in paths]
