"""Load average collector."""

import os
from typing import Iterable

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily

from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.types import NAMESPACE, NoDataError


class LoadavgCollector:
    """Exposes the 1, 5 and 15 minute load averages."""

    def __init__(self, logger: ContextualLogger) -> None:
        self._logger = logger

    def update(self) -> Iterable[Metric]:
        try:
            loads = os.getloadavg()
        except (AttributeError, OSError) as e:
            raise NoDataError(f"load average unavailable: {e}") from e

        for minutes, value in zip((1, 5, 15), loads):
            yield GaugeMetricFamily(
                f"{NAMESPACE}_load{minutes}", f"{minutes}m load average.", value=value
            )
