"""Collector fakes for testing."""

from scrapegate.domains.collectors.fakes.factory import FakeCollector, FakeCollectorFactory

__all__ = ["FakeCollector", "FakeCollectorFactory"]
