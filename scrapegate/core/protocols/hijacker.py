"""ConnectionHijacker protocol for dropping clients without a response.

Captures one capability of the serving transport: handing the raw
connection of an in-flight request to the caller so it can be closed
before any protocol bytes are written. Transports that cannot do this
raise ``TransportCapabilityError`` and the caller falls back to an
ordinary error response.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

from aiohttp import web


@runtime_checkable
class ConnectionHijacker(Protocol):
    """Protocol for taking over the raw connection behind a request."""

    def hijack(self, request: web.BaseRequest) -> asyncio.BaseTransport:
        """Detach and return the request's transport.

        The caller owns the returned transport and must close it; nothing
        has been written to it for this request.

        Raises:
            TransportCapabilityError: If the connection cannot be taken over.
        """
        ...
