"""Fake ConnectionHijacker for testing.

Hands out ``FakeTransport`` objects that record ``close()`` and every byte
written, so tests can assert a denied client got a closed connection and
zero response bytes.
"""

from typing import Any, Optional

from scrapegate.core.exceptions import TransportCapabilityError


class FakeTransport:
    """Minimal asyncio transport stand-in."""

    def __init__(self, peername: Optional[tuple] = None) -> None:
        self.peername = peername
        self.closed = False
        self.written = b""

    def write(self, data: bytes) -> None:
        self.written += data

    def is_closing(self) -> bool:
        return self.closed

    def close(self) -> None:
        self.closed = True

    def get_extra_info(self, name: str, default: Any = None) -> Any:
        if name == "peername" and self.peername is not None:
            return self.peername
        return default


class FakeConnectionHijacker:
    """In-memory spy implementing the ConnectionHijacker protocol.

    Usage:
        hijacker = FakeConnectionHijacker()
        # … deny a request through the middleware …
        assert hijacker.transports[0].closed
    """

    def __init__(self, supported: bool = True) -> None:
        self.supported = supported
        self.transports: list[FakeTransport] = []
        self.requests: list[Any] = []

    def hijack(self, request: Any) -> FakeTransport:
        self.requests.append(request)
        if not self.supported:
            raise TransportCapabilityError("Webserver doesn't support hijacking")
        transport = FakeTransport()
        self.transports.append(transport)
        return transport

    @property
    def last_transport(self) -> Optional[FakeTransport]:
        return self.transports[-1] if self.transports else None
