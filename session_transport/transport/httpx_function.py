"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs

Request function backed by ``httpx.AsyncClient``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

import httpx

from session_transport.logging_config import get_logger
from session_transport.transport.base import ExternalRequest, ExternalResponse

logger = get_logger(__name__)


def _collect_headers(headers: httpx.Headers) -> Dict[str, Union[str, List[str]]]:
    collected: Dict[str, List[str]] = {}
    for key, value in headers.multi_items():
        collected.setdefault(key, []).append(value)
    return {k: v[0] if len(v) == 1 else v for k, v in collected.items()}


class HttpxRequestFunction:
    """Request function that performs requests with httpx.

    Args:
        client: Existing client to use. It stays owned by the caller and is
            not closed by :meth:`aclose`. When omitted, a client is created
            lazily from the remaining arguments and closed by :meth:`aclose`.
        proxy: HTTP(S) or SOCKS proxy URL. SOCKS needs ``httpx[socks]``.
        local_address: Local IP address to bind outgoing connections to.
        timeout: Request timeout in seconds.
        follow_redirects: Whether httpx follows redirects.

    httpx errors propagate to the caller unchanged.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        proxy: Optional[str] = None,
        local_address: Optional[str] = None,
        timeout: float = 10.0,
        follow_redirects: bool = True,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._proxy = proxy
        self._local_address = local_address
        self._timeout = timeout
        self._follow_redirects = follow_redirects

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            transport = None
            if self._local_address:
                transport = httpx.AsyncHTTPTransport(local_address=self._local_address)
            self._client = httpx.AsyncClient(
                proxy=self._proxy,
                transport=transport,
                timeout=self._timeout,
                follow_redirects=self._follow_redirects,
            )
            logger.debug(
                "httpx_client_created",
                proxy=bool(self._proxy),
                local_address=self._local_address,
                timeout=self._timeout,
            )
        return self._client

    async def __call__(self, request: ExternalRequest) -> ExternalResponse:
        response = await self._ensure_client().request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            params=request.query_params or None,
            content=request.body,
        )
        return ExternalResponse(
            status_code=response.status_code,
            headers=_collect_headers(response.headers),
            body=response.content,
            final_url=str(response.url),
        )

    async def aclose(self) -> None:
        """
        Close the httpx client if this function created it.

        A client passed in by the caller is left open. A later request creates
        a fresh client.
        """
        if self._owns_client and self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
            logger.debug("httpx_client_closed")


def create_httpx_request_function(
    client: Optional[httpx.AsyncClient] = None,
    *,
    proxy: Optional[str] = None,
    local_address: Optional[str] = None,
    timeout: float = 10.0,
    follow_redirects: bool = True,
) -> HttpxRequestFunction:
    """Build a request function that performs requests with httpx."""
    return HttpxRequestFunction(
        client,
        proxy=proxy,
        local_address=local_address,
        timeout=timeout,
        follow_redirects=follow_redirects,
    )
