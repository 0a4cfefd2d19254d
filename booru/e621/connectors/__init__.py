"""Site connectors."""
