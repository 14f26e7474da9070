"""Unit tests for the IP allow-list middleware.

Covers:
- admitted clients reaching the wrapped handler
- denied clients: transport taken over and closed, no bytes written
- unparsable remote addresses compared literally
- empty allow-list passing everything through
- peer address formatting (host:port, bracketed IPv6)
- transports that cannot be taken over (500), fake and aiohttp adapters
- end-to-end drop against a real listener
"""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer, make_mocked_request

from scrapegate.adapters.hijacker import (
    AiohttpConnectionHijacker,
    FakeConnectionHijacker,
    FakeTransport,
)
from scrapegate.api.app import create_app
from scrapegate.api.middleware import ip_restrict_middleware, remote_address
from scrapegate.core.config import Settings
from scrapegate.core.exceptions import TransportCapabilityError
from scrapegate.core.logging import logger
from scrapegate.domains.access_control import AllowList
from scrapegate.domains.collectors.fakes import FakeCollectorFactory

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _RecordingHandler:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self, request: web.Request) -> web.Response:
        self.calls += 1
        return web.Response(text="ok")


@pytest.fixture
def hijacker():
    return FakeConnectionHijacker()


@pytest.fixture
def handler():
    return _RecordingHandler()


def _request(remote: str) -> web.Request:
    return make_mocked_request("GET", "/metrics").clone(remote=remote)


async def _dispatch(entries, remote, handler, hijacker):
    middleware = ip_restrict_middleware(AllowList(entries), logger, hijacker)
    return await middleware(_request(remote), handler)


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


class TestIpRestrictMiddleware:
    @pytest.mark.asyncio
    async def test_allowed_client_reaches_handler(self, handler, hijacker):
        response = await _dispatch(["10.0.0.0/8"], "10.1.2.3", handler, hijacker)

        assert response.status == 200
        assert handler.calls == 1
        assert hijacker.requests == []

    @pytest.mark.asyncio
    async def test_denied_client_is_dropped(self, handler, hijacker):
        await _dispatch(["10.0.0.0/8"], "8.8.8.8", handler, hijacker)

        assert handler.calls == 0
        assert len(hijacker.transports) == 1
        assert hijacker.last_transport.closed
        assert hijacker.last_transport.written == b""

    @pytest.mark.asyncio
    async def test_unparsable_remote_denied_unless_listed(self, handler, hijacker):
        await _dispatch(["10.0.0.0/8"], "weirdstring", handler, hijacker)
        assert handler.calls == 0
        assert hijacker.last_transport.closed

        response = await _dispatch(["weirdstring"], "weirdstring", handler, hijacker)
        assert response.status == 200
        assert handler.calls == 1

    @pytest.mark.asyncio
    async def test_empty_allowlist_passes_everything(self, handler, hijacker):
        for remote in ("8.8.8.8", "weirdstring", ""):
            response = await _dispatch([], remote, handler, hijacker)
            assert response.status == 200

        assert handler.calls == 3
        assert hijacker.requests == []

    @pytest.mark.asyncio
    async def test_unsupported_transport_returns_500(self, handler):
        hijacker = FakeConnectionHijacker(supported=False)

        response = await _dispatch(["10.0.0.0/8"], "8.8.8.8", handler, hijacker)

        assert response.status == 500
        assert response.text == "Webserver doesn't support hijacking"
        assert handler.calls == 0


# ---------------------------------------------------------------------------
# Peer address
# ---------------------------------------------------------------------------


def _peer_request(peername) -> web.Request:
    return make_mocked_request("GET", "/metrics", transport=FakeTransport(peername))


class TestRemoteAddress:
    def test_ipv4_peer(self):
        assert remote_address(_peer_request(("10.1.2.3", 51234))) == "10.1.2.3:51234"

    def test_ipv6_peer_is_bracketed(self):
        assert remote_address(_peer_request(("fd12::1", 8080, 0, 0))) == "[fd12::1]:8080"

    def test_falls_back_to_remote_without_peer(self):
        assert remote_address(_request("weirdstring")) == "weirdstring"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "peername, admitted",
        [
            (("10.1.2.3", 51234), True),
            (("fd12::1", 8080, 0, 0), True),
            (("8.8.8.8", 443), False),
        ],
    )
    async def test_peer_decides_admission(self, handler, hijacker, peername, admitted):
        allowlist = AllowList(["10.0.0.0/8", "fd00::/8"])
        middleware = ip_restrict_middleware(allowlist, logger, hijacker)

        await middleware(_peer_request(peername), handler)

        assert handler.calls == (1 if admitted else 0)
        assert bool(hijacker.transports) is not admitted


# ---------------------------------------------------------------------------
# aiohttp transport takeover
# ---------------------------------------------------------------------------


class TestAiohttpConnectionHijacker:
    def test_returns_live_transport(self):
        transport = FakeTransport()
        request = make_mocked_request("GET", "/metrics", transport=transport)

        assert AiohttpConnectionHijacker().hijack(request) is transport

    def test_missing_transport(self):
        request = make_mocked_request("GET", "/metrics")
        # Connection already detached from its protocol.
        request.protocol.transport = None

        with pytest.raises(TransportCapabilityError, match="doesn't support hijacking"):
            AiohttpConnectionHijacker().hijack(request)

    def test_closing_transport(self):
        transport = FakeTransport()
        transport.close()
        request = make_mocked_request("GET", "/metrics", transport=transport)

        with pytest.raises(TransportCapabilityError, match="already closing"):
            AiohttpConnectionHijacker().hijack(request)

    @pytest.mark.asyncio
    async def test_middleware_closes_transport_by_default(self, handler):
        transport = FakeTransport(("8.8.8.8", 443))
        middleware = ip_restrict_middleware(AllowList(["10.0.0.0/8"]), logger)

        await middleware(make_mocked_request("GET", "/metrics", transport=transport), handler)

        assert transport.closed
        assert transport.written == b""
        assert handler.calls == 0

    @pytest.mark.asyncio
    async def test_middleware_returns_500_for_closing_transport(self, handler):
        transport = FakeTransport(("8.8.8.8", 443))
        transport.close()
        middleware = ip_restrict_middleware(AllowList(["10.0.0.0/8"]), logger)

        response = await middleware(
            make_mocked_request("GET", "/metrics", transport=transport), handler
        )

        assert response.status == 500
        assert response.text == "connection is already closing"
        assert handler.calls == 0


# ---------------------------------------------------------------------------
# Real listener
# ---------------------------------------------------------------------------


def _app(allowed_ips: str) -> web.Application:
    settings = Settings(ALLOWED_IPS=allowed_ips, DISABLE_EXPORTER_METRICS=True)
    return create_app(settings, FakeCollectorFactory(), logger)


class TestIpRestrictOverTcp:
    @pytest.mark.asyncio
    async def test_denied_client_reads_nothing(self):
        async with TestServer(_app("10.0.0.0/8")) as server:
            reader, writer = await asyncio.open_connection(server.host, server.port)
            writer.write(b"GET /metrics HTTP/1.1\r\nHost: localhost\r\n\r\n")
            await writer.drain()

            data = await asyncio.wait_for(reader.read(), timeout=5)

            writer.close()
            assert data == b""

    @pytest.mark.asyncio
    async def test_loopback_range_is_admitted(self):
        async with TestClient(TestServer(_app("127.0.0.0/8"))) as client:
            response = await client.get("/metrics")

            assert response.status == 200
            assert "fake_cpu" in await response.text()
