"""Fake ExpositionMetrics for testing.

Records all calls in memory so tests can assert on instrumentation
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass


@dataclass
class RequestRecord:
    """Single observed scrape."""

    status_code: int
    duration: float


class FakeExpositionMetrics:
    """In-memory spy implementing the ExpositionMetrics protocol.

    Usage:
        fake = FakeExpositionMetrics()
        # … inject into the exposition handler …
        assert fake.in_flight == 0
        assert fake.requests[0].status_code == 200
    """

    def __init__(self) -> None:
        self.in_flight: int = 0
        self.max_in_flight: int = 0
        self.requests: list[RequestRecord] = []
        self.errors: dict[str, int] = {}

    def inc_in_flight(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)

    def dec_in_flight(self) -> None:
        self.in_flight -= 1

    def observe_request(self, status_code: int, duration: float) -> None:
        self.requests.append(RequestRecord(status_code, duration))

    def inc_error(self, cause: str) -> None:
        self.errors[cause] = self.errors.get(cause, 0) + 1

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self.in_flight = 0
        self.max_in_flight = 0
        self.requests.clear()
        self.errors.clear()
