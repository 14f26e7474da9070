"""Manual registration data for collectors.

This is the single source of truth for all known collectors.
Add new collectors here; the factory reads this list at startup.
"""

from scrapegate.domains.collectors.builtin.loadavg import LoadavgCollector
from scrapegate.domains.collectors.builtin.meminfo import MeminfoCollector
from scrapegate.domains.collectors.builtin.processes import ProcessesCollector
from scrapegate.domains.collectors.builtin.systime import TimeCollector
from scrapegate.domains.collectors.builtin.uname import UnameCollector
from scrapegate.domains.collectors.types import CollectorSpec

COLLECTORS: list[CollectorSpec] = [
    CollectorSpec(
        name="loadavg",
        description="Exposes load average.",
        default_enabled=True,
        factory=LoadavgCollector,
    ),
    CollectorSpec(
        name="meminfo",
        description="Exposes memory statistics from /proc/meminfo.",
        default_enabled=True,
        factory=MeminfoCollector,
    ),
    CollectorSpec(
        name="processes",
        description="Exposes aggregate process statistics from /proc.",
        default_enabled=False,
        factory=ProcessesCollector,
    ),
    CollectorSpec(
        name="time",
        description="Exposes the current system time.",
        default_enabled=True,
        factory=TimeCollector,
    ),
    CollectorSpec(
        name="uname",
        description="Exposes system information as provided by the uname system call.",
        default_enabled=True,
        factory=UnameCollector,
    ),
]