"""
Pytest configuration and shared fixtures for Session Transport tests.
"""

import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple

import pytest

from session_transport.transport.base import ExternalResponse
from session_transport.transport.mock import MockRequestFunction


FIXED_BOUNDARY = "-----------------------------fixedboundary0001"


def _parse_multipart(body: bytes, boundary: str) -> List[Tuple[Dict[str, str], bytes]]:
    """
    Split a multipart/form-data body into ``(headers, content)`` parts.

    Args:
        body: Encoded multipart body.
        boundary: Boundary token the body was framed with.

    Returns:
        Parts in wire order. Header names are lowercased.
    """
    delimiter = b"--" + boundary.encode("utf-8")
    closing = delimiter + b"--\r\n"
    assert body.endswith(closing), "body must end with the closing boundary"

    parts: List[Tuple[Dict[str, str], bytes]] = []
    for chunk in body[: -len(closing)].split(delimiter + b"\r\n")[1:]:
        assert chunk.endswith(b"\r\n")
        head, _, content = chunk[:-2].partition(b"\r\n\r\n")
        headers: Dict[str, str] = {}
        for line in head.decode("utf-8").split("\r\n"):
            name, _, value = line.partition(": ")
            headers[name.lower()] = value
        parts.append((headers, content))
    assert body[: -len(closing)].startswith(delimiter) or not parts
    return parts


def _disposition_params(disposition: str) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for item in disposition.split("; ")[1:]:
        key, _, value = item.partition("=")
        params[key] = value.strip('"')
    return params


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fixed_boundary() -> str:
    """Boundary token used by encoders built with ``lambda: fixed_boundary``."""
    return FIXED_BOUNDARY


@pytest.fixture
def parse_multipart():
    """
    Factory fixture that parses an encoded multipart body.

    Returns a callable ``(body, boundary) -> [(name, filename, content_type, content)]``.

    Usage:
        def test_something(parse_multipart):
            fields = parse_multipart(encoded.body, encoded.boundary)
    """
    def _parse(body: bytes, boundary: str) -> List[Tuple[str, Optional[str], Optional[str], bytes]]:
        fields = []
        for headers, content in _parse_multipart(body, boundary):
            params = _disposition_params(headers["content-disposition"])
            fields.append(
                (params["name"], params.get("filename"), headers.get("content-type"), content)
            )
        return fields
    return _parse


@pytest.fixture
def mock_request_function() -> MockRequestFunction:
    """
    Create a mock request function with a JSON and a plain-text endpoint.

    Returns:
        MockRequestFunction instance.
    """
    return MockRequestFunction({
        ("POST", "https://api.example.com/login"): ExternalResponse(
            status_code=200,
            headers={"Content-Type": "application/json; charset=utf-8", "Set-Cookie": ["a=1", "b=2"]},
            body=b'{"response": {"success": true}}',
            final_url="https://api.example.com/login",
        ),
        ("GET", "https://api.example.com/redirect"): ExternalResponse(
            status_code=200,
            headers={"Content-Type": "text/html"},
            body="<html></html>",
            final_url="https://store.example.com/",
        ),
    })
