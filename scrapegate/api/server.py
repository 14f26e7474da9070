"""HTTP listener for the exporter application.

Follows the aiohttp AppRunner/TCPSite pattern so the listener can be
started and stopped from a running event loop (and from tests on port 0).
"""

from typing import Optional

from aiohttp import web

from scrapegate.core.logging import ContextualLogger


class ExporterServer:
    """Lightweight aiohttp server for the exporter application."""

    def __init__(
        self, app: web.Application, logger: ContextualLogger, port: int, host: str = "0.0.0.0"
    ) -> None:
        """Initialize the server on the given host and port."""
        self._app = app
        self._logger = logger
        self._port = port
        self._host = host
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    @property
    def port(self) -> int:
        """The bound port; resolves port 0 to the OS-assigned one once started."""
        if self._runner is not None and self._runner.addresses:
            return self._runner.addresses[0][1]
        return self._port

    async def start(self) -> None:
        """Start listening."""
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()
        self._logger.info(f"Listening on http://{self._host}:{self.port}/")

    async def stop(self) -> None:
        """Stop the server gracefully."""
        if self._runner:
            await self._runner.cleanup()
        self._runner = None
        self._site = None
