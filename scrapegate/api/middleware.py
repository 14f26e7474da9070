"""IP allow-list middleware.

Installed on the whole application, so it covers the metrics path and the
landing page alike. A denied client gets no HTTP response at all: the
connection is taken over and closed, so the endpoint looks unreachable
rather than forbidden.
"""

from typing import Optional

from aiohttp import web
from aiohttp.typedefs import Handler, Middleware

from scrapegate.adapters.hijacker import AiohttpConnectionHijacker
from scrapegate.core.exceptions import TransportCapabilityError
from scrapegate.core.logging import ContextualLogger
from scrapegate.core.protocols.hijacker import ConnectionHijacker
from scrapegate.domains.access_control import AllowList, join_host_port, resolve_client_ip


def remote_address(request: web.BaseRequest) -> str:
    """Return the peer of ``request`` as ``host:port``.

    Falls back to ``request.remote`` when the transport has no socket peer
    (unix sockets, test doubles).
    """
    transport = request.transport
    peername = transport.get_extra_info("peername") if transport is not None else None
    if isinstance(peername, (list, tuple)) and len(peername) >= 2:
        return join_host_port(str(peername[0]), peername[1])
    return request.remote or ""


def ip_restrict_middleware(
    allowlist: AllowList,
    logger: ContextualLogger,
    hijacker: Optional[ConnectionHijacker] = None,
) -> Middleware:
    """Create a middleware admitting only clients matched by ``allowlist``.

    Args:
        allowlist: Allowed IPs and CIDR ranges. Empty allows everyone.
        logger: Logger for access decisions.
        hijacker: Connection takeover capability; defaults to aiohttp's transport.

    Returns:
        An aiohttp middleware.
    """
    hijacker = hijacker or AiohttpConnectionHijacker()

    @web.middleware
    async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        if not allowlist:
            return await handler(request)

        ip = resolve_client_ip(remote_address(request))
        if allowlist.allows(ip):
            logger.debug("Access allowed", extra={"ip": ip})
            return await handler(request)

        logger.warning("Access denied", extra={"ip": ip})
        try:
            transport = hijacker.hijack(request)
        except TransportCapabilityError as e:
            return web.Response(status=500, text=str(e))
        transport.close()

        # The transport is closed: aiohttp fails to write this and treats the
        # request as a client disconnect, so no byte reaches the client.
        return web.Response(status=403)

    return middleware
