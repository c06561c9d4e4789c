"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Session Transport - pluggable HTTP transport layer for session clients.

Lets a session client hand raw HTTP I/O to a caller-supplied request function
while the rest of the client keeps a uniform request/response contract.
"""

from session_transport._version import __version__
from session_transport.transport import (
    ExternalRequest,
    ExternalResponse,
    FieldValue,
    NormalizedResponse,
    RequestDescription,
    RequestMethod,
    TransportAdapter,
    TransportOptions,
    create_transport_adapter,
)

__all__ = [
    "__version__",
    "ExternalRequest",
    "ExternalResponse",
    "FieldValue",
    "NormalizedResponse",
    "RequestDescription",
    "RequestMethod",
    "TransportAdapter",
    "TransportOptions",
    "create_transport_adapter",
]
