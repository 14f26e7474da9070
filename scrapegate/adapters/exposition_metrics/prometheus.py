"""Prometheus implementation of the ExpositionMetrics protocol.

Registers into the exporter's self-metrics registry. Created once per
process and shared by the unfiltered handler and every filtered handler, so
all expositions report into the same series; registering the same names
twice in one registry would fail.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

_DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class PrometheusExpositionMetrics:
    """Prometheus-backed scrape handler metrics."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self._registry = registry

        self._requests_total = Counter(
            "scrapegate_metric_handler_requests_total",
            "Total number of scrapes by HTTP status code.",
            ["code"],
            registry=self._registry,
        )

        self._in_flight = Gauge(
            "scrapegate_metric_handler_requests_in_flight",
            "Current number of scrapes being served.",
            registry=self._registry,
        )

        self._request_duration = Histogram(
            "scrapegate_metric_handler_request_duration_seconds",
            "Time spent serving a scrape in seconds.",
            buckets=_DURATION_BUCKETS,
            registry=self._registry,
        )

        self._errors_total = Counter(
            "scrapegate_metric_handler_errors_total",
            "Total number of internal errors encountered by the metric handler.",
            ["cause"],
            registry=self._registry,
        )
        # Pre-create both causes so the series exist before the first error.
        for cause in ("gathering", "encoding"):
            self._errors_total.labels(cause=cause)

    # -- ExpositionMetrics protocol methods --

    def inc_in_flight(self) -> None:
        self._in_flight.inc()

    def dec_in_flight(self) -> None:
        self._in_flight.dec()

    def observe_request(self, status_code: int, duration: float) -> None:
        self._requests_total.labels(code=str(status_code)).inc()
        self._request_duration.observe(duration)

    def inc_error(self, cause: str) -> None:
        self._errors_total.labels(cause=cause).inc()
