"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Transport adapter and its request/response data structures.
"""

from session_transport.transport.adapter import TransportAdapter
from session_transport.transport.base import (
    ExternalRequest,
    ExternalResponse,
    FieldValue,
    MultipartPayload,
    NormalizedResponse,
    RequestDescription,
    RequestFunction,
    RequestMethod,
)
from session_transport.transport.decoder import ResponseDecoder, try_parse_json
from session_transport.transport.headers import lookup_header, lowercase_keys
from session_transport.transport.httpx_function import (
    HttpxRequestFunction,
    create_httpx_request_function,
)
from session_transport.transport.mock import MockRequestFunction
from session_transport.transport.multipart import (
    EncodedBody,
    MultipartEncoder,
    encode_multipart,
    generate_boundary,
)
from session_transport.transport.options import TransportOptions, create_transport_adapter

__all__ = [
    "EncodedBody",
    "ExternalRequest",
    "ExternalResponse",
    "FieldValue",
    "HttpxRequestFunction",
    "MockRequestFunction",
    "MultipartEncoder",
    "MultipartPayload",
    "NormalizedResponse",
    "RequestDescription",
    "RequestFunction",
    "RequestMethod",
    "ResponseDecoder",
    "TransportAdapter",
    "TransportOptions",
    "create_httpx_request_function",
    "create_transport_adapter",
    "encode_multipart",
    "generate_boundary",
    "lookup_header",
    "lowercase_keys",
    "try_parse_json",
]
