"""Collector factory protocol.

The metrics handler depends on this protocol, not on the concrete factory,
so tests can inject ``FakeCollectorFactory`` and count builds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from scrapegate.domains.collectors.node import NodeCollector


@runtime_checkable
class CollectorFactory(Protocol):
    """Resolves collector names into a collector aggregate."""

    def build(self, filters: Optional[Sequence[str]] = None) -> NodeCollector:
        """Build an aggregate of named collectors.

        Args:
            filters: ``None`` or empty for every enabled collector, otherwise
                exactly the named ones (duplicates collapse).

        Raises:
            CollectorConstructionError: A name is unknown or disabled, or a
                collector fails to build.
        """
        ...
