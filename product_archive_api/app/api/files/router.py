"""
Router aggregating the file storage and archive endpoints.

The prefix is applied here rather than in ``main`` because the file
listing route is the bare ``/api/files`` path.
"""

from fastapi import APIRouter

from .endpoints import archives, storage

PREFIX = "/api/files"

router = APIRouter()

router.include_router(archives.router, prefix=PREFIX, tags=["archives"])
router.include_router(storage.router, prefix=PREFIX, tags=["files"])
