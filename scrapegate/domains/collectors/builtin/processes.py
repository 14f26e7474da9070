"""Process count collector (disabled by default)."""

from pathlib import Path
from typing import Iterable

from prometheus_client import Metric
from prometheus_client.core import GaugeMetricFamily

from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.types import NAMESPACE, NoDataError


class ProcessesCollector:
    """Exposes the number of PIDs and the PID limit from procfs."""

    def __init__(self, logger: ContextualLogger, proc_path: str = "/proc") -> None:
        self._logger = logger
        self._proc = Path(proc_path)

    def update(self) -> Iterable[Metric]:
        if not self._proc.is_dir():
            raise NoDataError(f"{self._proc} not mounted")

        pids = sum(1 for entry in self._proc.iterdir() if entry.name.isdigit())
        yield GaugeMetricFamily(
            f"{NAMESPACE}_processes_pids", "Number of PIDs", value=pids
        )

        pid_max = self._proc / "sys" / "kernel" / "pid_max"
        try:
            limit = float(pid_max.read_text().strip())
        except FileNotFoundError:
            self._logger.debug("pid_max not readable", extra={"path": str(pid_max)})
            return
        yield GaugeMetricFamily(
            f"{NAMESPACE}_processes_max_processes", "Number of max PIDs limit", value=limit
        )
