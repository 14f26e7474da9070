"""Exceptions raised by the exporter.

Each error maps to one handling site: configuration errors abort startup,
the request-scoped errors are turned into 400/500 responses by the API
layer and never escape a request.
"""


class ScrapeGateError(Exception):
    """Base class for all exporter errors."""


class ConfigurationError(ScrapeGateError):
    """Raised when the exporter cannot be configured at startup.

    Covers invalid collector switches and the unfiltered metrics handler
    failing to build. Fatal: the process exits before listening.
    """


class RequestFilterError(ScrapeGateError):
    """Raised when a scrape request carries an invalid collector filter."""


class CollectorConstructionError(ScrapeGateError):
    """Raised when a filter names an unknown or disabled collector, or a collector fails to build."""


class TransportCapabilityError(ScrapeGateError):
    """Raised when the serving transport cannot be taken over for a silent drop."""
