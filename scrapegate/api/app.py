"""Application factory wiring the metrics handler, landing page and middleware."""

from typing import Optional

from aiohttp import web

from scrapegate import __version__
from scrapegate.api.landing import LandingConfig, LandingLink, LandingPage
from scrapegate.api.metrics import MetricsHandler
from scrapegate.api.middleware import ip_restrict_middleware
from scrapegate.core.config import Settings
from scrapegate.core.logging import ContextualLogger
from scrapegate.core.protocols.hijacker import ConnectionHijacker
from scrapegate.domains.access_control import AllowList
from scrapegate.domains.collectors.protocols import CollectorFactory

metrics_handler_key = web.AppKey("metrics_handler", MetricsHandler)


def create_app(
    settings: Settings,
    collectors: CollectorFactory,
    logger: ContextualLogger,
    *,
    hijacker: Optional[ConnectionHijacker] = None,
) -> web.Application:
    """Build the exporter application.

    The metrics handler is constructed here, synchronously, so the enabled
    collectors are recorded before the application can accept connections.

    Raises:
        ConfigurationError: If the unfiltered metrics handler cannot be built.
    """
    allowlist = AllowList(settings.allowlist)
    if allowlist:
        logger.info(f"IP restriction enabled, allowed_ips={list(allowlist.entries)}")
    else:
        logger.info("IP restriction disabled, all IPs allowed")

    metrics_handler = MetricsHandler(
        collectors,
        include_exporter_metrics=not settings.DISABLE_EXPORTER_METRICS,
        max_requests=settings.MAX_REQUESTS,
        logger=logger,
        disable_compression=settings.DISABLE_COMPRESSION,
    )

    app = web.Application(middlewares=[ip_restrict_middleware(allowlist, logger, hijacker)])
    app[metrics_handler_key] = metrics_handler
    app.router.add_get(settings.METRICS_PATH, metrics_handler.handle)

    if settings.METRICS_PATH != "/":
        landing_page = LandingPage(
            LandingConfig(
                name="scrapegate",
                description="Prometheus exporter with per-scrape collector filtering",
                version=__version__,
                links=[LandingLink(address=settings.METRICS_PATH, text="Metrics")],
            )
        )
        app.router.add_get("/", landing_page.handle)

    return app
