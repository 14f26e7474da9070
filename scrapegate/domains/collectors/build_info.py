"""Build information collector registered into every scrape registry."""

import platform
from typing import Iterable

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector as PrometheusCollector

from scrapegate import __version__


class BuildInfoCollector(PrometheusCollector):
    """Exposes ``<program>_build_info`` with a constant value of 1."""

    def __init__(self, program: str) -> None:
        self._program = program

    def collect(self) -> Iterable[Metric]:
        family = GaugeMetricFamily(
            f"{self._program}_build_info",
            f"A metric with a constant '1' value labeled by version, python version, "
            f"implementation and platform from which {self._program} was built.",
            labels=["version", "pythonversion", "implementation", "platform"],
        )
        family.add_metric(
            [
                __version__,
                platform.python_version(),
                platform.python_implementation(),
                f"{platform.system().lower()}/{platform.machine().lower()}",
            ],
            1.0,
        )
        yield family
