"""System time collector."""

import time
from datetime import datetime
from typing import Iterable

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily

from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.types import NAMESPACE


class TimeCollector:
    """Exposes the current system time and the local time zone offset."""

    def __init__(self, logger: ContextualLogger) -> None:
        self._logger = logger

    def update(self) -> Iterable[Metric]:
        now = time.time()
        local = datetime.fromtimestamp(now).astimezone()
        offset = local.utcoffset()

        yield GaugeMetricFamily(
            f"{NAMESPACE}_time_seconds",
            "System time in seconds since epoch (1970).",
            value=now,
        )
        zone = GaugeMetricFamily(
            f"{NAMESPACE}_time_zone_offset_seconds",
            "System time zone offset in seconds.",
            labels=["time_zone"],
        )
        zone.add_metric([local.tzname() or ""], offset.total_seconds() if offset else 0.0)
        yield zone
