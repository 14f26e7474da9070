"""Fake MetricsRenderer for testing.

Records render() calls so tests can assert on exposition-handler behaviour
without depending on prometheus-client.
"""

from typing import Optional


class FakeMetricsRenderer:
    """In-memory spy implementing the MetricsRenderer protocol."""

    def __init__(self, body: bytes = b"# fake metrics\n") -> None:
        self.body = body
        self.render_calls: list[Optional[str]] = []
        self._error: Optional[Exception] = None

    def set_error(self, error: Exception) -> None:
        """Make every subsequent ``render()`` raise ``error``."""
        self._error = error

    def render(self, accept: Optional[str]) -> tuple[bytes, str]:
        self.render_calls.append(accept)
        if self._error is not None:
            raise self._error
        return self.body, "text/plain; version=0.0.4; charset=utf-8"
