"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

multipart/form-data encoding for request functions that expect a
pre-encoded body.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from session_transport.transport.base import BYTES_LIKE, FieldValue, MultipartPayload

BOUNDARY_PREFIX = "-" * 29
CRLF = "\r\n"

BoundaryFactory = Callable[[], str]


def generate_boundary() -> str:
    """Return a fresh boundary token.

    Prefix, millisecond clock and random digits. Collision-resistant in
    practice, not cryptographically secure; field contents are not scanned.
    """
    return f"{BOUNDARY_PREFIX}{time.time_ns() // 1_000_000}{random.randrange(10 ** 16):016d}"


@dataclass(frozen=True)
class EncodedBody:
    """Encoded multipart body and the boundary it was framed with."""
    body: bytes
    boundary: str

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


def _content_bytes(content: object) -> bytes:
    if isinstance(content, BYTES_LIKE):
        return bytes(content)
    return str(content).encode("utf-8")


def _part_head(boundary: str, name: str, value: FieldValue) -> str:
    head = f'--{boundary}{CRLF}Content-Disposition: form-data; name="{name}"'
    if value.filename:
        head += f'; filename="{value.filename}"'
    if value.content_type:
        head += f"{CRLF}Content-Type: {value.content_type}"
    return head + CRLF + CRLF


class MultipartEncoder:
    """Encodes a field mapping into a multipart/form-data body.

    Args:
        boundary_factory: Callable returning the boundary token to use.
            Defaults to :func:`generate_boundary`; tests pass a fixed token.
    """

    def __init__(self, boundary_factory: Optional[BoundaryFactory] = None) -> None:
        self._boundary_factory = boundary_factory or generate_boundary

    def encode(self, fields: MultipartPayload) -> EncodedBody:
        boundary = self._boundary_factory()
        parts: List[bytes] = []

        for name, value in fields.items():
            value = FieldValue.from_value(value)
            parts.append(_part_head(boundary, name, value).encode("utf-8"))
            parts.append(_content_bytes(value.content))
            parts.append(CRLF.encode("utf-8"))

        parts.append(f"--{boundary}--{CRLF}".encode("utf-8"))
        return EncodedBody(body=b"".join(parts), boundary=boundary)


def encode_multipart(
    fields: MultipartPayload,
    boundary: Optional[str] = None,
) -> EncodedBody:
    """Encode ``fields`` with a fixed ``boundary`` or a freshly generated one."""
    factory = (lambda: boundary) if boundary is not None else None
    return MultipartEncoder(factory).encode(fields)
