"""
Dependency providers for the routes.

Services that must outlive a request (the product store, the
request counters, the storage root) are created once and cached.
The archive service is cheap and is built per request so that the
URIs it returns point at the host the client used.
"""

from functools import lru_cache

from fastapi import Depends, Request

from ..core.config import settings
from ..core.metrics import RequestMetrics
from ..services.file_archive_service import FileArchiveService
from ..services.file_storage_service import FileStorageService
from ..services.product_service import ProductService
from ..services.product_store import ProductStore


@lru_cache
def get_product_service() -> ProductService:
    store = ProductStore.with_sample_products() if settings.seed_products else ProductStore()
    return ProductService(store)


@lru_cache
def get_request_metrics() -> RequestMetrics:
    return RequestMetrics()


@lru_cache
def get_file_storage() -> FileStorageService:
    return FileStorageService(settings.upload_dir)


def get_file_archive(
    request: Request,
    storage: FileStorageService = Depends(get_file_storage),
) -> FileArchiveService:
    return FileArchiveService(storage, base_url=str(request.base_url))
