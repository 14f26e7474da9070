"""Aggregate collector registered into each scrape registry.

Runs every member collector on ``collect()`` and reports, per member, how
long it took and whether it succeeded. A failing member never aborts the
scrape: its families are dropped, its success gauge reads 0 and the error
is logged.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector as PrometheusCollector

from scrapegate.domains.collectors.types import NAMESPACE, Collector, NoDataError

if TYPE_CHECKING:
    from scrapegate.core.logging import ContextualLogger


class NodeCollector(PrometheusCollector):
    """Prometheus collector wrapping a set of named collectors."""

    def __init__(self, collectors: Mapping[str, Collector], logger: ContextualLogger) -> None:
        self.collectors: dict[str, Collector] = dict(collectors)
        self._logger = logger

    @property
    def names(self) -> list[str]:
        """Sorted names of the member collectors."""
        return sorted(self.collectors)

    def describe(self) -> Iterable[Metric]:
        # Member families are only known after a scrape; skip registry-time
        # name checks instead of running every collector on register().
        return []

    def collect(self) -> Iterator[Metric]:
        duration = GaugeMetricFamily(
            f"{NAMESPACE}_scrape_collector_duration_seconds",
            "scrapegate: Duration of a collector scrape.",
            labels=["collector"],
        )
        success = GaugeMetricFamily(
            f"{NAMESPACE}_scrape_collector_success",
            "scrapegate: Whether a collector succeeded.",
            labels=["collector"],
        )

        for name in self.names:
            families, elapsed, ok = self._execute(name, self.collectors[name])
            yield from families
            duration.add_metric([name], elapsed)
            success.add_metric([name], 1.0 if ok else 0.0)

        yield duration
        yield success

    def _execute(self, name: str, collector: Collector) -> tuple[list[Metric], float, bool]:
        begin = time.perf_counter()
        try:
            families = list(collector.update())
        except NoDataError as e:
            elapsed = time.perf_counter() - begin
            self._logger.debug(
                "collector returned no data",
                extra={"collector": name, "duration_seconds": elapsed, "err": str(e)},
            )
            return [], elapsed, False
        except Exception as e:
            elapsed = time.perf_counter() - begin
            self._logger.error(
                "collector failed",
                extra={"collector": name, "duration_seconds": elapsed, "err": str(e)},
            )
            return [], elapsed, False

        elapsed = time.perf_counter() - begin
        self._logger.debug(
            "collector succeeded", extra={"collector": name, "duration_seconds": elapsed}
        )
        return families, elapsed, True
