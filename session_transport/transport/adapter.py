"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Adapter between the session client's request contract and a
caller-supplied request function.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional

from session_transport.logging_config import (
    get_logger,
    log_transport_failure,
    log_transport_request,
)
from session_transport.monitoring.metrics import TransportMetrics
from session_transport.transport.base import (
    BodyType,
    ExternalRequest,
    MultipartPayload,
    NormalizedResponse,
    RequestDescription,
    RequestFunction,
    to_multipart_payload,
)
from session_transport.transport.decoder import ResponseDecoder
from session_transport.transport.headers import lookup_header, remove_header
from session_transport.transport.multipart import MultipartEncoder

logger = get_logger(__name__)


class TransportAdapter:
    """Runs session requests through a caller-supplied request function.

    The request function receives an :class:`ExternalRequest` and must return
    an :class:`ExternalResponse` (or an equivalent mapping). It owns all
    network concerns: proxies, TLS, redirects, timeouts and cancellation.
    Whatever it raises reaches the caller of :meth:`request` unchanged.

    Args:
        request_function: Async callable performing the actual HTTP request.
        user_agent: Value for the ``user-agent`` header when the request does
            not set one itself.
        encoder: Multipart encoder; override to control boundary generation.
        metrics: Optional metrics registry to record requests into.
    """

    def __init__(
        self,
        request_function: RequestFunction,
        user_agent: Optional[str] = None,
        encoder: Optional[MultipartEncoder] = None,
        metrics: Optional[TransportMetrics] = None,
    ) -> None:
        if not callable(request_function):
            raise TypeError("request_function must be callable")
        self._request_function = request_function
        self._user_agent = user_agent
        self._encoder = encoder or MultipartEncoder()
        self._decoder = ResponseDecoder()
        self._metrics = metrics

    @property
    def user_agent(self) -> Optional[str]:
        """User-agent added to requests that do not specify one.

        Set it once, before issuing requests; changing it while requests are
        in flight is not synchronized.
        """
        return self._user_agent

    @user_agent.setter
    def user_agent(self, value: Optional[str]) -> None:
        self._user_agent = value

    @staticmethod
    def simple_object_to_multipart_form(obj: Mapping[str, Any]) -> MultipartPayload:
        """Convert a plain mapping into a multipart payload.

        Values may be ``FieldValue`` instances, mappings with ``content`` and
        optional ``filename`` / ``content_type`` keys, or bare values.
        """
        return to_multipart_payload(obj)

    def _build_headers(self, description: RequestDescription) -> Dict[str, str]:
        headers = dict(description.headers or {})
        # Caller-specified user-agent wins over the configured one.
        if self._user_agent and lookup_header(headers, "user-agent") is None:
            headers["user-agent"] = self._user_agent
        return headers

    def build_external_request(self, description: RequestDescription) -> ExternalRequest:
        """Translate a request description into what the request function receives."""
        headers = self._build_headers(description)
        body: Optional[BodyType] = description.body

        if description.multipart_form is not None:
            encoded = self._encoder.encode(description.multipart_form)
            remove_header(headers, "content-type")
            headers["content-type"] = encoded.content_type
            body = encoded.body
            if self._metrics:
                self._metrics.record_multipart_body(len(encoded.body))

        return ExternalRequest(
            method=description.method.value,
            url=description.url,
            headers=headers,
            query_params=dict(description.query_params or {}),
            body=body,
        )

    async def request(self, description: RequestDescription) -> NormalizedResponse:
        """Perform one request through the request function and decode the result."""
        external_request = self.build_external_request(description)
        method = external_request.method
        multipart = description.multipart_form is not None

        start = time.monotonic()
        try:
            if self._metrics:
                with self._metrics.track_request_in_flight():
                    external_response = await self._request_function(external_request)
            else:
                external_response = await self._request_function(external_request)
        except Exception as e:
            duration_ms = round((time.monotonic() - start) * 1000, 2)
            log_transport_failure(logger, method, description.url, e, duration_ms=duration_ms)
            if self._metrics:
                self._metrics.record_failure(method, type(e).__name__)
            raise
        elapsed = time.monotonic() - start

        response = self._decoder.decode(external_response)

        log_transport_request(
            logger,
            method,
            description.url,
            response.status_code,
            round(elapsed * 1000, 2),
            multipart=multipart,
        )
        if self._metrics:
            self._metrics.record_request(method, response.status_code, elapsed)

        return response

    async def aclose(self) -> None:
        """
        Release resources held by the request function.

        Forwards to the request function's ``aclose()`` when it has one, as
        the bundled httpx function does. Plain callables are left alone.
        """
        aclose = getattr(self._request_function, "aclose", None)
        if aclose is not None:
            await aclose()
            logger.debug("Closed transport adapter request function")

    async def __aenter__(self) -> "TransportAdapter":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.aclose()
