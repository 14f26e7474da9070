"""MetricsRenderer protocol for serializing gathered metrics.

Separates *serialization* (negotiating a format and producing bytes) from
*serving* (admission control, instrumentation, HTTP). The exposition
handler only sees this protocol.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class MetricsRenderer(Protocol):
    """Protocol for rendering gathered metrics into a scrapeable format."""

    def render(self, accept: Optional[str]) -> tuple[bytes, str]:
        """Gather and serialize all metrics.

        Args:
            accept: The request's ``Accept`` header, used to pick the format.

        Returns:
            The body and its content type.
        """
        ...
