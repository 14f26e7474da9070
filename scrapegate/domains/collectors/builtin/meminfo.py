"""Memory collector reading ``/proc/meminfo``."""

import re
from pathlib import Path
from typing import Iterable

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily

from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.types import NAMESPACE, NoDataError

_LINE = re.compile(r"^(?P<key>[^:]+):\s+(?P<value>\d+)(?:\s+(?P<unit>kB))?$")


def parse_meminfo(text: str) -> dict[str, float]:
    """Parse meminfo content into ``{metric_suffix: value}``.

    Values with a ``kB`` unit are converted to bytes and get a ``_bytes``
    suffix. Parentheses in keys become underscores (``Active(anon)`` ->
    ``Active_anon``).
    """
    values: dict[str, float] = {}
    for line in text.splitlines():
        match = _LINE.match(line.strip())
        if not match:
            continue
        key = match["key"].replace("(", "_").replace(")", "")
        value = float(match["value"])
        if match["unit"]:
            values[f"{key}_bytes"] = value * 1024
        else:
            values[key] = value
    return values


class MeminfoCollector:
    """Exposes ``node_memory_*`` gauges."""

    def __init__(self, logger: ContextualLogger, path: str = "/proc/meminfo") -> None:
        self._logger = logger
        self._path = Path(path)

    def update(self) -> Iterable[Metric]:
        try:
            text = self._path.read_text()
        except FileNotFoundError as e:
            raise NoDataError(f"{self._path} not found") from e

        values = parse_meminfo(text)
        if not values:
            raise ValueError(f"no memory statistics parsed from {self._path}")

        for key, value in sorted(values.items()):
            yield GaugeMetricFamily(
                f"{NAMESPACE}_memory_{key}",
                f"Memory information field {key}.",
                value=value,
            )
