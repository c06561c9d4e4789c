"""
Monitoring for Session Transport.

Prometheus metrics for calls made through the transport adapter.
"""

from session_transport.monitoring.metrics import TransportMetrics

__all__ = [
    "TransportMetrics",
]
