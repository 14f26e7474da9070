"""Exposition metrics adapters."""

from scrapegate.adapters.exposition_metrics.fake import FakeExpositionMetrics
from scrapegate.adapters.exposition_metrics.prometheus import PrometheusExpositionMetrics

__all__ = ["PrometheusExpositionMetrics", "FakeExpositionMetrics"]
