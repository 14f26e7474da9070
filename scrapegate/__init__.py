"""scrapegate: a Prometheus exporter with per-scrape collector filtering and IP allow-listing."""

__version__ = "0.1.0"
