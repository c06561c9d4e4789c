"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Decoding of request-function results into ``NormalizedResponse``.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Tuple, Union

from session_transport.transport.base import (
    BYTES_LIKE,
    ExternalResponse,
    NormalizedResponse,
)
from session_transport.transport.headers import lookup_header, lowercase_keys

JSON_CONTENT_TYPE = "application/json"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


def try_parse_json(text: str) -> Optional[Any]:
    """Parse ``text`` as JSON, returning ``None`` when it is not valid JSON.

    ``NaN`` and ``Infinity`` are rejected, and nesting too deep to parse counts
    as invalid. A literal ``null`` body also yields ``None``.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None


def body_views(body: Any) -> Tuple[bytes, str]:
    """Return ``(raw, text)`` views of a response body.

    Bytes are decoded as UTF-8 (undecodable sequences become U+FFFD); text is
    UTF-8 encoded; any other value is stringified first.
    """
    if not isinstance(body, BYTES_LIKE) and not isinstance(body, str):
        body = str(body)
    if isinstance(body, BYTES_LIKE):
        raw = bytes(body)
        return raw, raw.decode("utf-8", errors="replace")
    return body.encode("utf-8"), body


class ResponseDecoder:
    """Turns whatever a request function returned into a ``NormalizedResponse``."""

    def decode(self, external: Union[ExternalResponse, Mapping[str, Any]]) -> NormalizedResponse:
        external = ExternalResponse.coerce(external)
        raw_body, text_body = body_views(external.body)

        json_body = None
        content_type = lookup_header(external.headers, "content-type")
        if isinstance(content_type, str) and JSON_CONTENT_TYPE in content_type:
            json_body = try_parse_json(text_body)

        return NormalizedResponse(
            status_code=external.status_code,
            headers=lowercase_keys(external.headers),
            url=external.final_url,
            text_body=text_body,
            raw_body=raw_body,
            json_body=json_body,
        )
