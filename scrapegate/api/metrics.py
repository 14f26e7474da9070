"""Metrics endpoint with per-request collector filtering.

``MetricsHandler`` wraps an unfiltered exposition handler, built once at
construction, and builds a filtered one on the fly when a scrape asks for
``collect[]`` or ``exclude[]``. Filtered handlers own a fresh
``CollectorRegistry`` and are dropped after the response; nothing but the
unfiltered handler outlives a request.
"""

from __future__ import annotations

from typing import Optional, Sequence

from aiohttp import web
from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector

from scrapegate.adapters.exposition_metrics import PrometheusExpositionMetrics
from scrapegate.adapters.metrics_renderer import PrometheusMetricsRenderer
from scrapegate.api.exposition import ExpositionHandler, InFlightLimiter
from scrapegate.core.exceptions import (
    CollectorConstructionError,
    ConfigurationError,
    RequestFilterError,
)
from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.build_info import BuildInfoCollector
from scrapegate.domains.collectors.protocols import CollectorFactory

PROGRAM_NAME = "scrapegate"

COMBINED_FILTER_MESSAGE = "Combined collect and exclude queries are not allowed."


class MetricsHandler:
    """aiohttp handler for the metrics path.

    Create instances once at startup, before the application starts
    listening; construction records the enabled collectors and fails with
    ``ConfigurationError`` if the unfiltered handler cannot be built.
    """

    def __init__(
        self,
        collectors: CollectorFactory,
        *,
        include_exporter_metrics: bool,
        max_requests: int,
        logger: ContextualLogger,
        disable_compression: bool = False,
    ) -> None:
        self._collectors = collectors
        self._logger = logger
        self._disable_compression = disable_compression
        self._limiter = InFlightLimiter(max_requests)

        # Separate registry for metrics about the exporter itself.
        self._exporter_registry: Optional[CollectorRegistry] = None
        self._exposition_metrics: Optional[PrometheusExpositionMetrics] = None
        if include_exporter_metrics:
            self._exporter_registry = CollectorRegistry()
            ProcessCollector(registry=self._exporter_registry)
            PlatformCollector(registry=self._exporter_registry)
            GCCollector(registry=self._exporter_registry)
            self._exposition_metrics = PrometheusExpositionMetrics(self._exporter_registry)

        self._enabled_collectors: Optional[tuple[str, ...]] = None
        try:
            self._unfiltered_handler = self.build_inner_handler()
        except CollectorConstructionError as e:
            raise ConfigurationError(f"Couldn't create metrics handler: {e}") from e

    @property
    def enabled_collectors(self) -> tuple[str, ...]:
        """Sorted names of the collectors enabled at startup."""
        return self._enabled_collectors or ()

    @property
    def exporter_registry(self) -> Optional[CollectorRegistry]:
        """Registry of the exporter's own metrics, or None when they are disabled."""
        return self._exporter_registry

    async def handle(self, request: web.Request) -> web.StreamResponse:
        collects = request.query.getall("collect[]", [])
        self._logger.debug(f"collect query: {collects}")
        excludes = request.query.getall("exclude[]", [])
        self._logger.debug(f"exclude query: {excludes}")

        if not collects and not excludes:
            return await self._unfiltered_handler(request)

        try:
            filters = self.resolve_filters(collects, excludes)
        except RequestFilterError as e:
            self._logger.debug("rejecting combined collect and exclude queries")
            return web.Response(status=400, text=str(e))

        try:
            filtered_handler = self.build_inner_handler(filters)
        except CollectorConstructionError as e:
            self._logger.warning(f"Couldn't create filtered metrics handler: {e}")
            return web.Response(
                status=400, text=f"Couldn't create filtered metrics handler: {e}"
            )
        return await filtered_handler(request)

    def resolve_filters(self, collects: Sequence[str], excludes: Sequence[str]) -> list[str]:
        """Turn the query filters into the list of collectors to run.

        In exclude mode the result is the enabled collectors minus the
        excluded ones, in enabled order.

        Raises:
            RequestFilterError: If both ``collects`` and ``excludes`` are given.
        """
        if collects and excludes:
            raise RequestFilterError(COMBINED_FILTER_MESSAGE)
        if excludes:
            return [name for name in self.enabled_collectors if name not in excludes]
        return list(collects)

    def build_inner_handler(self, filters: Optional[Sequence[str]] = None) -> ExpositionHandler:
        """Build an exposition handler over a new registry.

        Called without filters exactly once, from the constructor, to build
        the unfiltered handler and record the enabled collectors. Called with
        a filter list for every filtered scrape; an empty list selects every
        enabled collector but leaves the recorded names alone.

        Raises:
            CollectorConstructionError: If the filters cannot be resolved.
        """
        node_collector = self._collectors.build(filters)

        if filters is None and self._enabled_collectors is None:
            self._enabled_collectors = tuple(node_collector.names)
            self._logger.info("Enabled collectors")
            for name in self._enabled_collectors:
                self._logger.info(name)

        registry = CollectorRegistry()
        registry.register(BuildInfoCollector(PROGRAM_NAME))
        registry.register(node_collector)

        if self._exporter_registry is not None:
            renderer = PrometheusMetricsRenderer(
                [self._exporter_registry, registry], self._logger, self._exposition_metrics
            )
            return ExpositionHandler(
                renderer,
                limiter=self._limiter,
                logger=self._logger,
                metrics=self._exposition_metrics,
                disable_compression=self._disable_compression,
            )

        renderer = PrometheusMetricsRenderer([registry], self._logger)
        return ExpositionHandler(
            renderer,
            limiter=self._limiter,
            logger=self._logger,
            disable_compression=self._disable_compression,
        )
