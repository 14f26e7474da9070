"""Fake collector factory for testing.

Builds real ``NodeCollector`` aggregates over in-memory collectors and
records every ``build()`` call, so tests can assert how many registries a
request sequence constructed.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily

from scrapegate.core.exceptions import CollectorConstructionError
from scrapegate.core.logging import logger
from scrapegate.domains.collectors.node import NodeCollector


class FakeCollector:
    """Collector emitting a single ``fake_<name>`` gauge, or raising a canned error."""

    def __init__(self, name: str, value: float = 1.0, error: Optional[Exception] = None) -> None:
        self.name = name
        self.value = value
        self.error = error
        self.update_calls = 0

    def update(self) -> Iterable[Metric]:
        self.update_calls += 1
        if self.error is not None:
            raise self.error
        return [GaugeMetricFamily(f"fake_{self.name}", f"Fake collector {self.name}.", value=self.value)]


class FakeCollectorFactory:
    """In-memory implementation of the CollectorFactory protocol.

    Usage:
        factory = FakeCollectorFactory(["cpu", "disk", "meminfo"])
        factory.build(["cpu"])
        assert factory.build_calls == [["cpu"]]
    """

    def __init__(self, enabled: Sequence[str] = ("cpu", "disk", "meminfo")) -> None:
        self.collectors: dict[str, FakeCollector] = {name: FakeCollector(name) for name in enabled}
        self.build_calls: list[Optional[list[str]]] = []
        self._build_error: Optional[Exception] = None

    def set_build_error(self, error: Exception) -> None:
        """Make every subsequent ``build()`` raise ``error``."""
        self._build_error = error

    def build(self, filters: Optional[Sequence[str]] = None) -> NodeCollector:
        self.build_calls.append(None if filters is None else list(filters))
        if self._build_error is not None:
            raise self._build_error
        if not filters:
            return NodeCollector(self.collectors, logger)
        selected = {}
        for name in filters:
            if name not in self.collectors:
                raise CollectorConstructionError(f"missing collector: {name}")
            selected[name] = self.collectors[name]
        return NodeCollector(selected, logger)

    # -- test helpers --

    def clear(self) -> None:
        """Reset recorded calls and canned errors."""
        self.build_calls.clear()
        self._build_error = None
