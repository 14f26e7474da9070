"""Runner for the exporter."""

import asyncio
import os
import platform
import sys

from scrapegate import __version__
from scrapegate.api.app import create_app
from scrapegate.api.server import ExporterServer
from scrapegate.core.config import settings
from scrapegate.core.exceptions import ConfigurationError
from scrapegate.core.logging import logger as global_logger
from scrapegate.domains.collectors import NodeCollectorFactory
from scrapegate.domains.collectors.registry_data import COLLECTORS


async def main() -> None:
    """Build the application and serve it until cancelled.

    Raises:
        ConfigurationError: If the collectors or the metrics handler cannot be set up.
    """
    logger = global_logger.with_context(context_base="exporter", operation="runner")

    logger.info(f"Starting scrapegate version={__version__}")
    logger.info(
        f"Build context python={platform.python_version()} "
        f"implementation={platform.python_implementation()}"
    )
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        logger.warning(
            "scrapegate is running as root user. This exporter is designed to run as "
            "unprivileged user, root is not required."
        )

    collectors = NodeCollectorFactory(
        COLLECTORS,
        global_logger,
        enabled=settings.enabled_collectors,
        disabled=settings.disabled_collectors,
        disable_defaults=settings.DISABLE_DEFAULT_COLLECTORS,
    )
    app = create_app(settings, collectors, global_logger)

    server = ExporterServer(app, logger, settings.LISTEN_PORT, settings.LISTEN_ADDRESS)
    await server.start()
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except ConfigurationError as e:
        global_logger.error(str(e))
        sys.exit(1)
    except OSError as e:
        global_logger.error(f"Error starting listener: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("Shutdown requested... exiting.")


if __name__ == "__main__":
    run()
