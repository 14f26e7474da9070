"""Types shared by the collector domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Protocol, runtime_checkable

from prometheus_client import Metric

if TYPE_CHECKING:
    from scrapegate.core.logging import ContextualLogger

NAMESPACE = "node"


class NoDataError(Exception):
    """Raised by a collector that has nothing to report on this host.

    Logged at debug level instead of error; the collector's success gauge is
    still 0.
    """


@runtime_checkable
class Collector(Protocol):
    """A named source of one or more related metric families."""

    def update(self) -> Iterable[Metric]:
        """Read current values and return the metric families.

        Raises:
            NoDataError: If the host does not expose this data.
            Any other exception on failure; the aggregate logs it and moves on.
        """
        ...


@dataclass(frozen=True)
class CollectorSpec:
    """Registration record for a collector known to the factory."""

    name: str
    description: str
    default_enabled: bool
    factory: Callable[["ContextualLogger"], Collector]
