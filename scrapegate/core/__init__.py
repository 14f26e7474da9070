"""Cross-cutting infrastructure: settings, logging, exceptions, protocols."""
