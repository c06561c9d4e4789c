"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Transport data structures.

``RequestDescription`` is what the session client hands to the adapter,
``ExternalRequest`` / ``ExternalResponse`` are exchanged with the
caller-supplied request function, and ``NormalizedResponse`` is what the
adapter hands back to the client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence, Union

from session_transport.exceptions import (
    InvalidFieldValueError,
    InvalidRequestError,
    InvalidResponseError,
)

BodyType = Union[bytes, str]
HeaderValue = Union[str, Sequence[str]]
BYTES_LIKE = (bytes, bytearray, memoryview)


class RequestMethod(str, Enum):
    """HTTP methods the session client issues."""
    GET = "GET"
    POST = "POST"

    @classmethod
    def coerce(cls, value: Union[str, "RequestMethod"]) -> "RequestMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidRequestError(
                f"Unsupported request method {value!r}; expected one of "
                f"{[m.value for m in cls]}"
            ) from None


@dataclass(frozen=True)
class FieldValue:
    """One multipart/form-data field.

    ``content`` may be bytes-like (sent as-is), text (UTF-8 encoded), or any
    other value, which is stringified when the form is encoded.
    """
    content: Any
    filename: Optional[str] = None
    content_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.content is None:
            raise InvalidFieldValueError("Multipart field content cannot be None")
        if self.filename is not None and not isinstance(self.filename, str):
            raise InvalidFieldValueError(
                f"Multipart filename must be a string, got {type(self.filename).__name__}"
            )
        if self.content_type is not None and not isinstance(self.content_type, str):
            raise InvalidFieldValueError(
                f"Multipart content type must be a string, got {type(self.content_type).__name__}"
            )

    @classmethod
    def from_value(cls, value: Any) -> "FieldValue":
        """Build a field from a ``FieldValue``, a ``{"content": ...}`` mapping or a bare value."""
        if isinstance(value, FieldValue):
            return value
        if isinstance(value, Mapping) and "content" in value:
            return cls(
                content=value["content"],
                filename=value.get("filename"),
                content_type=value.get("content_type", value.get("contentType")),
            )
        return cls(content=value)


# Insertion order is wire order.
MultipartPayload = Dict[str, FieldValue]


def to_multipart_payload(obj: Mapping[str, Any]) -> MultipartPayload:
    """Convert a plain mapping into a multipart payload, preserving order."""
    if not isinstance(obj, Mapping):
        raise InvalidRequestError(
            f"Multipart form must be a mapping, got {type(obj).__name__}"
        )
    payload: MultipartPayload = {}
    for name, value in obj.items():
        if not isinstance(name, str):
            raise InvalidFieldValueError(f"Multipart field name must be a string, got {name!r}")
        payload[name] = FieldValue.from_value(value)
    return payload


@dataclass
class RequestDescription:
    """Internal request representation issued by the session client."""
    method: RequestMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Optional[Dict[str, Any]] = None
    body: Optional[BodyType] = None
    multipart_form: Optional[MultipartPayload] = None

    def __post_init__(self) -> None:
        self.method = RequestMethod.coerce(self.method)
        if not isinstance(self.url, str) or not self.url:
            raise InvalidRequestError("Request URL must be a non-empty string")
        if self.headers is None:
            self.headers = {}
        if self.multipart_form is not None:
            self.multipart_form = to_multipart_payload(self.multipart_form)


@dataclass
class ExternalRequest:
    """Request value handed to the caller-supplied request function."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, Any] = field(default_factory=dict)
    body: Optional[BodyType] = None


@dataclass
class ExternalResponse:
    """Response value the caller-supplied request function must return.

    ``headers`` values may be a single string or a list of strings for
    repeated headers. ``body`` should be bytes or text; anything else is
    stringified during decoding.
    """
    status_code: int
    headers: Dict[str, HeaderValue] = field(default_factory=dict)
    body: Any = b""
    final_url: str = ""

    @classmethod
    def coerce(cls, value: Any) -> "ExternalResponse":
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidResponseError(
                f"Request function must return an ExternalResponse or a mapping, "
                f"got {type(value).__name__}"
            )
        status_code = value.get("status_code", value.get("statusCode"))
        if not isinstance(status_code, int):
            raise InvalidResponseError(
                f"Request function returned an invalid status code: {status_code!r}"
            )
        final_url = value.get("final_url", value.get("finalUrl", ""))
        return cls(
            status_code=status_code,
            headers=dict(value.get("headers") or {}),
            body=value.get("body", b""),
            final_url=final_url,
        )


@dataclass
class NormalizedResponse:
    """Uniform response shape presented to the session client.

    ``text_body`` and ``raw_body`` are always populated; ``json_body`` is set
    only when the response declared JSON and parsed successfully.
    """
    status_code: int
    headers: Dict[str, HeaderValue]
    url: str
    text_body: str
    raw_body: bytes
    json_body: Any = None


RequestFunction = Callable[[ExternalRequest], Awaitable[Union[ExternalResponse, Mapping[str, Any]]]]
