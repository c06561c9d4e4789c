"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Mock request function for local testing.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from session_transport.transport.base import ExternalRequest, ExternalResponse


class MockRequestFunction:
    """In-memory request function for unit tests.

    Args:
        responses: Mapping from ``(method, url)`` tuples to
            ``ExternalResponse`` instances.

    Example::

        request_function = MockRequestFunction({
            ("GET", "https://example.com/"): ExternalResponse(status_code=200, body=b"ok"),
        })
        adapter = TransportAdapter(request_function)
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], ExternalResponse]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], ExternalResponse] = responses or {}
        self._sent: list[ExternalRequest] = []

    async def __call__(self, request: ExternalRequest) -> ExternalResponse:
        self._sent.append(request)
        key = (request.method.upper(), request.url)
        if key in self._responses:
            return self._responses[key]
        return ExternalResponse(
            status_code=404,
            headers={"content-type": "application/json"},
            body=b'{"error": "not mocked"}',
            final_url=request.url,
        )

    def add_response(self, method: str, url: str, response: ExternalResponse) -> None:
        """Register ``response`` for ``(method, url)``."""
        self._responses[(method.upper(), url)] = response

    def reset(self) -> None:
        self._responses.clear()
        self._sent.clear()

    @property
    def sent_requests(self) -> list[ExternalRequest]:
        """All requests that have been passed to this function."""
        return list(self._sent)
