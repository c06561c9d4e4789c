#!/usr/bin/env python
"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Session Transport, a product of Garudex Labs


"""

"""
Demo of plugging a custom request function into Session Transport.

This example shows a hand-written request function built on httpx, a
multipart upload served by the in-memory mock, and how responses come back
normalized regardless of which request function produced them.
"""

import asyncio

import httpx

from session_transport import (
    ExternalRequest,
    ExternalResponse,
    FieldValue,
    RequestDescription,
    TransportAdapter,
)
from session_transport.config import load_config
from session_transport.logging_config import setup_logging_from_config
from session_transport.monitoring.metrics import TransportMetrics
from session_transport.transport.mock import MockRequestFunction


def make_request_function(client: httpx.AsyncClient):
    """Wrap an httpx client as a request function."""

    async def request_function(request: ExternalRequest) -> ExternalResponse:
        response = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            params=request.query_params or None,
            content=request.body,
        )
        return ExternalResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            final_url=str(response.url),
        )

    return request_function


def local_handler(request: httpx.Request) -> httpx.Response:
    """Stands in for a remote server so the demo runs offline."""
    return httpx.Response(
        200,
        json={"path": request.url.path, "user_agent": request.headers.get("user-agent")},
    )


async def main():
    """Run custom request function demo."""
    # Logging comes from ~/.session_transport/config.yaml, or the defaults when absent.
    config = load_config()
    setup_logging_from_config(config.logging)

    print("=" * 60)
    print("Custom Request Function Demo")
    print("=" * 60)

    # Example 1: httpx-backed request function
    print("\n1. Request through a hand-written httpx request function:")
    async with httpx.AsyncClient(transport=httpx.MockTransport(local_handler)) as client:
        adapter = TransportAdapter(make_request_function(client), user_agent="demo-client/1.0")
        response = await adapter.request(RequestDescription(
            method="GET",
            url="https://api.example.com/status",
            query_params={"verbose": 1},
        ))
        print(f"   status={response.status_code} json={response.json_body}")

    # Example 2: Multipart upload against the mock request function
    print("\n2. Multipart upload through the mock request function:")
    mock = MockRequestFunction({
        ("POST", "https://api.example.com/upload"): ExternalResponse(
            status_code=200,
            headers={"Content-Type": "application/json; charset=utf-8"},
            body=b'{"success": 1}',
            final_url="https://api.example.com/upload",
        ),
    })
    metrics = TransportMetrics()
    adapter = TransportAdapter(mock, user_agent="demo-client/1.0", metrics=metrics)
    response = await adapter.request(RequestDescription(
        method="POST",
        url="https://api.example.com/upload",
        multipart_form=TransportAdapter.simple_object_to_multipart_form({
            "sessionid": "abc123",
            "avatar": FieldValue(content=b"\x89PNG", filename="avatar.png", content_type="image/png"),
        }),
    ))
    sent = mock.sent_requests[0]
    print(f"   sent content-type: {sent.headers['content-type']}")
    print(f"   sent body bytes:   {len(sent.body)}")
    print(f"   response headers:  {response.headers}")
    print(f"   response json:     {response.json_body}")

    # Example 3: Unmocked URLs come back as 404, not as errors
    print("\n3. Unmatched request:")
    response = await adapter.request(RequestDescription(method="GET", url="https://api.example.com/missing"))
    print(f"   status={response.status_code} body={response.text_body}")

    print("\n4. Recorded metrics:")
    for line in metrics.generate_metrics().decode("utf-8").splitlines():
        if line.startswith("session_transport_requests_total"):
            print(f"   {line}")


if __name__ == "__main__":
    asyncio.run(main())
