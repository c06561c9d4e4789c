"""
Prometheus metrics for Session Transport.

This module provides metrics for monitoring calls made through
``TransportAdapter``:
- Request metrics (count, duration, status)
- Transport failures raised by the request function
- In-flight requests
- Multipart body sizes
"""

from contextlib import contextmanager
from typing import Optional

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

from session_transport.logging_config import get_logger

logger = get_logger(__name__)


class TransportMetrics:
    """
    Registry for transport-level Prometheus metrics.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize metrics registry.

        Args:
            registry: Optional Prometheus CollectorRegistry (creates new if not provided)
        """
        self.registry = registry or CollectorRegistry()

        self.requests_total = Counter(
            'session_transport_requests_total',
            'Total number of requests completed by the request function',
            ['method', 'status_code'],
            registry=self.registry
        )

        self.request_duration_seconds = Histogram(
            'session_transport_request_duration_seconds',
            'Time spent awaiting the request function in seconds',
            ['method'],
            buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
            registry=self.registry
        )

        self.failures_total = Counter(
            'session_transport_failures_total',
            'Total number of errors raised by the request function',
            ['method', 'error_type'],
            registry=self.registry
        )

        self.requests_in_flight = Gauge(
            'session_transport_requests_in_flight',
            'Number of requests currently awaiting the request function',
            registry=self.registry
        )

        self.multipart_body_bytes = Histogram(
            'session_transport_multipart_body_bytes',
            'Size of encoded multipart/form-data bodies in bytes',
            buckets=(256, 1024, 4096, 16384, 65536, 262144, 1048576, 4194304),
            registry=self.registry
        )

        logger.debug("Transport metrics initialized")

    def record_request(self, method: str, status_code: int, duration_seconds: float):
        """
        Record a completed request.

        Args:
            method: HTTP method (GET, POST)
            status_code: HTTP status code returned by the request function
            duration_seconds: Time spent awaiting the request function
        """
        self.requests_total.labels(
            method=method,
            status_code=status_code
        ).inc()

        self.request_duration_seconds.labels(method=method).observe(duration_seconds)

    def record_failure(self, method: str, error_type: str):
        """
        Record an error raised by the request function.

        Args:
            method: HTTP method
            error_type: Exception class name
        """
        self.failures_total.labels(method=method, error_type=error_type).inc()

    def record_multipart_body(self, size_bytes: int):
        """Record the size of an encoded multipart body."""
        self.multipart_body_bytes.observe(size_bytes)

    @contextmanager
    def track_request_in_flight(self):
        """Context manager to track in-flight requests."""
        self.requests_in_flight.inc()
        try:
            yield
        finally:
            self.requests_in_flight.dec()

    def generate_metrics(self) -> bytes:
        """
        Generate metrics in Prometheus text format.

        Returns:
            Metrics data in Prometheus exposition format
        """
        return generate_latest(self.registry)

    def get_content_type(self) -> str:
        """Get the content type for Prometheus metrics."""
        return CONTENT_TYPE_LATEST

