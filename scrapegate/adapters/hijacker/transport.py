"""aiohttp implementation of the ConnectionHijacker protocol.

aiohttp has no explicit hijack API, but the request exposes the asyncio
transport of its connection. Closing that transport before the handler
returns means the response aiohttp tries to write afterwards hits a closing
transport, which aiohttp treats as a client disconnect and writes nothing.
"""

import asyncio

from aiohttp import web

from scrapegate.core.exceptions import TransportCapabilityError


class AiohttpConnectionHijacker:
    """Hands out the live asyncio transport behind an aiohttp request."""

    def hijack(self, request: web.BaseRequest) -> asyncio.BaseTransport:
        transport = request.transport
        if transport is None:
            raise TransportCapabilityError("Webserver doesn't support hijacking")
        if transport.is_closing():
            raise TransportCapabilityError("connection is already closing")
        return transport
