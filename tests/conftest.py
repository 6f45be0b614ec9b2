"""Shared pytest fixtures.

Every test gets its own storage root under ``tmp_path`` and, for HTTP
tests, a fresh application whose service dependencies are overridden
so no state leaks between tests.
"""

import io
import zipfile

import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from product_archive_api.app.api.deps import (
    get_file_storage,
    get_product_service,
    get_request_metrics,
)
from product_archive_api.app.core.metrics import RequestMetrics
from product_archive_api.app.main import create_app
from product_archive_api.app.services.file_archive_service import FileArchiveService
from product_archive_api.app.services.file_storage_service import FileStorageService
from product_archive_api.app.services.product_service import ProductService
from product_archive_api.app.services.product_store import ProductStore


BASE_URL = "http://testserver"


def _set_encryption_flag(data):
    buf = bytearray(data)
    for signature, flag_offset in ((b"PK\x03\x04", 6), (b"PK\x01\x02", 8)):
        pos = buf.find(signature)
        while pos != -1:
            buf[pos + flag_offset] |= 0x01
            pos = buf.find(signature, pos + 4)
    return bytes(buf)


@pytest.fixture
def make_zip():
    """Return a builder for in-memory ZIPs from ``(name, bytes)`` pairs.

    With ``encrypted=True`` every entry is flagged as encrypted without
    being encrypted, which is enough for readers to demand a password.
    """

    def build(entries, encrypted=False):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            for name, data in entries:
                archive.writestr(name, data)
        data = buffer.getvalue()
        return _set_encryption_flag(data) if encrypted else data

    return build


@pytest.fixture
def storage(tmp_path):
    return FileStorageService(tmp_path / "uploads")


@pytest.fixture
def archive(storage):
    return FileArchiveService(storage, base_url=BASE_URL)


@pytest.fixture
def store():
    return ProductStore.with_sample_products()


@pytest.fixture
def product_service(store):
    return ProductService(store)


@pytest.fixture
def metric_reader():
    return InMemoryMetricReader()


@pytest.fixture
def metrics(metric_reader):
    provider = MeterProvider(metric_readers=[metric_reader])
    return RequestMetrics(meter=provider.get_meter("tests"))


@pytest.fixture
def metric_points(metric_reader):
    """Return a reader for the data points collected for one instrument."""

    def read(name):
        data = metric_reader.get_metrics_data()
        if data is None:
            return []
        return [
            point
            for resource_metrics in data.resource_metrics
            for scope_metrics in resource_metrics.scope_metrics
            for metric in scope_metrics.metrics
            if metric.name == name
            for point in metric.data.data_points
        ]

    return read


@pytest.fixture
def app(product_service, metrics, storage):
    application = create_app()
    application.dependency_overrides[get_product_service] = lambda: product_service
    application.dependency_overrides[get_request_metrics] = lambda: metrics
    application.dependency_overrides[get_file_storage] = lambda: storage
    return application


@pytest.fixture
def client(app):
    with TestClient(app, base_url=BASE_URL, follow_redirects=False) as test_client:
        yield test_client
