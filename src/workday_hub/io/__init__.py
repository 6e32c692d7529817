"""I/O boundary: connectors to external services."""
