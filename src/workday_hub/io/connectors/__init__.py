"""Remote service connectors."""
