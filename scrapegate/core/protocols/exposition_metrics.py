"""ExpositionMetrics protocol for instrumenting the metrics endpoint itself.

Abstracts the self-instrumentation of scrape handlers so the exposition
handler depends on a protocol rather than on prometheus-client. Production
uses ``PrometheusExpositionMetrics``; tests inject a fake that records calls.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ExpositionMetrics(Protocol):
    """Protocol for scrape-handler metrics collection."""

    def inc_in_flight(self) -> None:
        """Increment the in-flight scrapes gauge."""
        ...

    def dec_in_flight(self) -> None:
        """Decrement the in-flight scrapes gauge."""
        ...

    def observe_request(self, status_code: int, duration: float) -> None:
        """Record a finished scrape (count by status code + latency).

        Args:
            status_code: HTTP status code of the response.
            duration: Handling time in seconds.
        """
        ...

    def inc_error(self, cause: str) -> None:
        """Record an error while serving a scrape (``gathering`` or ``encoding``)."""
        ...
