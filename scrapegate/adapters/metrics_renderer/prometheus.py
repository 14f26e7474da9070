"""Prometheus implementation of the MetricsRenderer protocol.

Wraps one or more CollectorRegistry objects so a single scrape serializes
all of them, in order, into the format the scraper asked for. A registry
that fails to gather is logged and skipped; the scrape goes on with the
rest.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional, Sequence

from prometheus_client import CollectorRegistry, Metric
from prometheus_client.exposition import choose_encoder

from scrapegate.core.protocols.exposition_metrics import ExpositionMetrics

if TYPE_CHECKING:
    from scrapegate.core.logging import ContextualLogger


class Gatherers:
    """Registry-shaped view over several registries."""

    def __init__(
        self,
        registries: Sequence[CollectorRegistry],
        logger: ContextualLogger,
        metrics: Optional[ExpositionMetrics] = None,
    ) -> None:
        self._registries = tuple(registries)
        self._logger = logger
        self._metrics = metrics

    def collect(self) -> Iterator[Metric]:
        for registry in self._registries:
            try:
                families = list(registry.collect())
            except Exception as e:
                self._logger.error(f"error gathering metrics: {e}")
                if self._metrics is not None:
                    self._metrics.inc_error("gathering")
                continue
            yield from families


class PrometheusMetricsRenderer:
    """Render every metric in a set of registries."""

    def __init__(
        self,
        registries: Sequence[CollectorRegistry],
        logger: ContextualLogger,
        metrics: Optional[ExpositionMetrics] = None,
    ) -> None:
        self._gatherers = Gatherers(registries, logger, metrics)

    def render(self, accept: Optional[str]) -> tuple[bytes, str]:
        encoder, content_type = choose_encoder(accept or "")
        return encoder(self._gatherers), content_type
