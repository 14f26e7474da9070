"""Host collectors shipped with the exporter."""
