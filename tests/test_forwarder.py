"""Tests for the GreptimeDB forwarder using a mocked transport."""

from __future__ import annotations

import asyncio
from typing import List

import httpx
import pytest

from services.forwarder import ForwardingError, GreptimeForwarder


def _forwarder(handler, base_url: str = "http://greptime:4000/") -> GreptimeForwarder:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GreptimeForwarder(base_url=base_url, database="heartbeat_test", client=client)


def _write(forwarder: GreptimeForwarder, lines: List[str]) -> None:
    async def run() -> None:
        try:
            await forwarder.write_lines(lines)
        finally:
            await forwarder._client.aclose()

    asyncio.run(run())


def test_write_lines_posts_single_batch() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(204)

    _write(_forwarder(handler), ["line-a", "line-b"])

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/influxdb/api/v2/write"
    assert request.url.host == "greptime"
    assert request.url.port == 4000
    assert dict(request.url.params) == {"db": "heartbeat_test", "precision": "ms"}
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert request.content == b"line-a\nline-b"


def test_non_success_status_raises_with_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="invalid line protocol")

    with pytest.raises(ForwardingError, match="GreptimeDB error: invalid line protocol"):
        _write(_forwarder(handler), ["bad"])


def test_transport_failure_raises_forwarding_error() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ForwardingError) as excinfo:
        _write(_forwarder(handler), ["line"])

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert calls == 1


def test_write_url_strips_trailing_slash() -> None:
    forwarder = GreptimeForwarder(
        base_url="http://127.0.0.1/",
        database="db",
    )

    assert forwarder.write_url == "http://127.0.0.1/v1/influxdb/api/v2/write"
    asyncio.run(forwarder.aclose())


def test_aclose_leaves_injected_client_open() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
    forwarder = GreptimeForwarder(base_url="http://greptime:4000", database="db", client=client)

    async def run() -> None:
        await forwarder.aclose()
        assert client.is_closed is False
        await client.aclose()

    asyncio.run(run())


def test_aclose_closes_owned_client() -> None:
    forwarder = GreptimeForwarder(base_url="http://greptime:4000", database="db")

    asyncio.run(forwarder.aclose())

    assert forwarder._client.is_closed is True
