"""Uname collector."""

import platform
from typing import Iterable

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily

from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.types import NAMESPACE


class UnameCollector:
    def __init__(self, logger: ContextualLogger) -> None:
        self._logger = logger

    def update(self) -> Iterable[Metric]:
        info = platform.uname()
        family = GaugeMetricFamily(
            f"{NAMESPACE}_uname_info",
            "Labeled system information as provided by the uname system call.",
            labels=["sysname", "release", "version", "machine", "nodename"],
        )
        family.add_metric(
            [info.system, info.release, info.version, info.machine, info.node], 1.0
        )
        yield family
