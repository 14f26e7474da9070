"""aiohttp handler serving one rendered set of registries.

The handler applies admission control (a fail-fast in-flight limit shared
with every other exposition handler), optional self-instrumentation, runs
the blocking gather/encode step in the default executor, and negotiates
compression.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Optional

from aiohttp import web

from scrapegate.core.protocols.exposition_metrics import ExpositionMetrics
from scrapegate.core.protocols.metrics_renderer import MetricsRenderer

if TYPE_CHECKING:
    from scrapegate.core.logging import ContextualLogger


class InFlightLimiter:
    """Non-blocking counter bounding concurrent scrapes.

    All access happens on the event loop thread, so a plain counter is
    enough. ``limit`` of 0 disables the bound.
    """

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self.limit = limit
        self.in_flight = 0

    def try_acquire(self) -> bool:
        if self.limit and self.in_flight >= self.limit:
            return False
        self.in_flight += 1
        return True

    def release(self) -> None:
        self.in_flight -= 1


class ExpositionHandler:
    """Serve metrics from a renderer with admission control and instrumentation."""

    def __init__(
        self,
        renderer: MetricsRenderer,
        *,
        limiter: InFlightLimiter,
        logger: ContextualLogger,
        metrics: Optional[ExpositionMetrics] = None,
        disable_compression: bool = False,
    ) -> None:
        self._renderer = renderer
        self._limiter = limiter
        self._logger = logger
        self._metrics = metrics
        self._disable_compression = disable_compression

    async def __call__(self, request: web.Request) -> web.Response:
        if self._metrics is None:
            return await self._serve(request)

        start = time.perf_counter()
        self._metrics.inc_in_flight()
        try:
            response = await self._serve(request)
        finally:
            self._metrics.dec_in_flight()
        self._metrics.observe_request(response.status, time.perf_counter() - start)
        return response

    async def _serve(self, request: web.Request) -> web.Response:
        if not self._limiter.try_acquire():
            return web.Response(
                status=503,
                text=(
                    f"Limit of concurrent requests reached ({self._limiter.limit}), "
                    "try again later."
                ),
            )
        try:
            loop = asyncio.get_running_loop()
            try:
                body, content_type = await loop.run_in_executor(
                    None, self._renderer.render, request.headers.get("Accept")
                )
            except Exception as e:
                self._logger.error(f"error encoding and sending metric family: {e}")
                if self._metrics is not None:
                    self._metrics.inc_error("encoding")
                return web.Response(
                    status=500,
                    text=f"An error has occurred while serving metrics:\n\n{e}",
                )
        finally:
            self._limiter.release()

        response = web.Response(body=body, headers={"Content-Type": content_type})
        if not self._disable_compression:
            response.enable_compression()
        return response
