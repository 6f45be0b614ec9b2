"""
Request instrumentation for the product routes.

Emits OpenTelemetry metrics through the globally configured meter
provider (a no-op until an SDK provider is installed):

- product_requests_total (counter)
- product_active_requests (up/down counter)
- product_request_duration_seconds (histogram)
- product_response_size_bytes (histogram)

Two values are also kept in process because ``/queue/stats`` reads
them back: the processing queue every mutating request is appended
to, and the number of in-flight requests.  The queue is never
drained, so its length is the number of mutating requests seen since
startup.
"""

import logging
import threading
import time
from collections import deque
from contextlib import contextmanager
from typing import Any, Deque, Dict, Iterator, Optional

from opentelemetry import metrics
from opentelemetry.metrics import Meter


logger = logging.getLogger(__name__)


class RequestMetrics:
    """Records product request traffic and keeps the queue snapshot."""

    def __init__(self, meter: Optional[Meter] = None) -> None:
        meter = meter or metrics.get_meter(__name__)

        self._request_counter = meter.create_counter(
            name="product_requests_total",
            description="Total product requests",
            unit="1",
        )
        self._active_counter = meter.create_up_down_counter(
            name="product_active_requests",
            description="Number of product requests being processed",
            unit="1",
        )
        self._duration_histogram = meter.create_histogram(
            name="product_request_duration_seconds",
            description="Product request processing time in seconds",
            unit="s",
        )
        self._response_size_histogram = meter.create_histogram(
            name="product_response_size_bytes",
            description="Size of product response bodies",
            unit="By",
        )

        self._lock = threading.Lock()
        self._queue: Deque[Any] = deque()
        self._active = 0

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        """Count ``operation`` as in flight for the duration of the block."""
        attributes = {"operation": operation}
        with self._lock:
            self._active += 1
        self._active_counter.add(1, attributes)
        self._request_counter.add(1, attributes)
        started = time.perf_counter()
        try:
            yield
        finally:
            self._duration_histogram.record(time.perf_counter() - started, attributes)
            self._active_counter.add(-1, attributes)
            with self._lock:
                self._active -= 1

    def enqueue(self, item: Any) -> None:
        with self._lock:
            self._queue.append(item)

    def record_response_size(self, operation: str, body: str) -> None:
        size = len(body.encode("utf-8"))
        self._response_size_histogram.record(size, {"operation": operation})
        logger.debug("%s response is %d bytes", operation, size)

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    @property
    def active_requests(self) -> int:
        return self._active

    def snapshot(self) -> Dict[str, int]:
        """Return the current queue length and number of in-flight requests."""
        with self._lock:
            return {"queue_size": len(self._queue), "active_requests": self._active}
