"""Core protocols for dependency injection.

Domain-specific protocols (collector factory) live in their domains/
directories. This module keeps cross-cutting infrastructure protocols only.
"""

from scrapegate.core.protocols.exposition_metrics import ExpositionMetrics
from scrapegate.core.protocols.hijacker import ConnectionHijacker
from scrapegate.core.protocols.metrics_renderer import MetricsRenderer

__all__ = [
    "ConnectionHijacker",
    "ExpositionMetrics",
    "MetricsRenderer",
]
