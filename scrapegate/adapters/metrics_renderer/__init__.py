"""Metrics renderer adapters."""

from scrapegate.adapters.metrics_renderer.fake import FakeMetricsRenderer
from scrapegate.adapters.metrics_renderer.prometheus import Gatherers, PrometheusMetricsRenderer

__all__ = ["FakeMetricsRenderer", "Gatherers", "PrometheusMetricsRenderer"]
