"""Named-collector factory.

Holds the enabled/disabled state of every registered collector, decided
once at startup from the collector specs and the configured switches, and
resolves filter lists into ``NodeCollector`` aggregates. Collector instances
are created lazily, once per name, and shared by every aggregate that
includes them; the aggregates (and the registries they land in) are not.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

from scrapegate.core.exceptions import CollectorConstructionError, ConfigurationError
from scrapegate.core.logging import ContextualLogger
from scrapegate.domains.collectors.node import NodeCollector
from scrapegate.domains.collectors.types import Collector, CollectorSpec


class NodeCollectorFactory:
    """Builds collector aggregates from registered ``CollectorSpec`` entries.

    Satisfies the ``CollectorFactory`` protocol structurally.
    """

    def __init__(
        self,
        specs: Iterable[CollectorSpec],
        logger: ContextualLogger,
        *,
        enabled: Sequence[str] = (),
        disabled: Sequence[str] = (),
        disable_defaults: bool = False,
    ) -> None:
        """Resolve the collector state.

        Args:
            specs: Every collector that can be enabled.
            logger: Parent logger; collectors get a ``collector=<name>`` child.
            enabled: Names switched on explicitly.
            disabled: Names switched off explicitly.
            disable_defaults: Start every collector disabled, so only
                ``enabled`` names run.

        Raises:
            ConfigurationError: A switch names an unknown collector or a
                collector is both enabled and disabled.
        """
        self._specs: dict[str, CollectorSpec] = {}
        for spec in specs:
            if spec.name in self._specs:
                raise ConfigurationError(f"collector registered twice: {spec.name}")
            self._specs[spec.name] = spec

        for name in (*enabled, *disabled):
            if name not in self._specs:
                raise ConfigurationError(f"unknown collector in switches: {name}")
        both = set(enabled) & set(disabled)
        if both:
            raise ConfigurationError(
                f"collectors both enabled and disabled: {', '.join(sorted(both))}"
            )

        self._state: dict[str, bool] = {}
        for name, spec in self._specs.items():
            if name in enabled:
                self._state[name] = True
            elif name in disabled:
                self._state[name] = False
            else:
                self._state[name] = spec.default_enabled and not disable_defaults

        self._logger = logger
        self._initiated: dict[str, Collector] = {}
        self._lock = threading.Lock()

    @property
    def enabled_names(self) -> list[str]:
        return sorted(name for name, on in self._state.items() if on)

    def build(self, filters: Optional[Sequence[str]] = None) -> NodeCollector:
        """Build an aggregate of the named collectors.

        ``None`` and an empty sequence both select every enabled collector.
        """
        if not filters:
            wanted = self.enabled_names
        else:
            wanted = []
            for name in filters:
                if name not in self._state:
                    raise CollectorConstructionError(f"missing collector: {name}")
                if not self._state[name]:
                    raise CollectorConstructionError(f"disabled collector: {name}")
                if name not in wanted:
                    wanted.append(name)

        with self._lock:
            collectors = {name: self._get_or_create(name) for name in wanted}
        return NodeCollector(collectors, self._logger)

    def _get_or_create(self, name: str) -> Collector:
        collector = self._initiated.get(name)
        if collector is not None:
            return collector
        try:
            collector = self._specs[name].factory(self._logger.with_context(collector=name))
        except Exception as e:
            raise CollectorConstructionError(f"couldn't create collector {name}: {e}") from e
        self._initiated[name] = collector
        return collector
