"""Collectors domain - named metric sources and the factory that resolves them."""

from scrapegate.domains.collectors.factory import NodeCollectorFactory
from scrapegate.domains.collectors.node import NodeCollector
from scrapegate.domains.collectors.protocols import CollectorFactory
from scrapegate.domains.collectors.types import Collector, CollectorSpec, NoDataError

__all__ = [
    "Collector",
    "CollectorFactory",
    "CollectorSpec",
    "NoDataError",
    "NodeCollector",
    "NodeCollectorFactory",
]
